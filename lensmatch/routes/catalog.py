from fastapi import APIRouter, Depends

from lensmatch.models.api import CatalogSummary
from lensmatch.routes.match import catalog_dependency
from lensmatch.services.catalog import Catalog
from lensmatch.services.coatings import COATING_NAMES
from lensmatch.services.lens_policy import get_available_power_types

router = APIRouter()

@router.get("/", response_model=CatalogSummary)
async def catalog_summary(catalog: Catalog = Depends(catalog_dependency)):
    return catalog.summary()

@router.get("/coatings")
async def coating_names():
    return COATING_NAMES

@router.get("/power-types")
async def power_types():
    return get_available_power_types()
