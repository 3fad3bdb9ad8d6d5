"""
Prescription Matching API Routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from lensmatch.models.api import (
    AddPowerMatchRequest, AddPowerMatchResponse, CoatingOut, EyeResult,
    LensStyleResult, SingleVisionMatchRequest,
)
from lensmatch.models.schema import PrescriptionPair
from lensmatch.services.catalog import Catalog, CatalogError, get_catalog
from lensmatch.services.coatings import get_available_coatings, get_averaged_coatings
from lensmatch.services.prescription_matcher import (
    EyeMatch, PrescriptionMatch, match_add_power_prescription, match_prescription_data,
)

log = logging.getLogger(__name__)

router = APIRouter()


def catalog_dependency() -> Catalog:
    try:
        return get_catalog()
    except CatalogError as e:
        log.error(f"Catalog unavailable: {e}")
        raise HTTPException(status_code=503, detail=f"Catalog unavailable: {e}")


def _eye_result(eye: EyeMatch) -> EyeResult:
    coatings = [CoatingOut(**c.to_dict()) for c in get_available_coatings(eye)]
    return EyeResult(**eye.to_dict(), coatings=coatings)


def _lens_style_result(match: PrescriptionMatch) -> LensStyleResult:
    averaged = get_averaged_coatings(match.right_eye, match.left_eye)
    return LensStyleResult(
        brand=match.brand,
        right_eye=_eye_result(match.right_eye),
        left_eye=_eye_result(match.left_eye),
        averaged_coatings=[CoatingOut(**c.to_dict()) for c in averaged],
    )


@router.post("/single-vision", response_model=LensStyleResult, response_model_exclude_none=True)
async def match_single_vision(req: SingleVisionMatchRequest, catalog: Catalog = Depends(catalog_dependency)):
    """
    Price a single-vision prescription for both eyes.

    ``power_type`` is normally "with-power"; ADD-power lens styles are
    rejected with 422, other values fall back to the single-vision walk.
    """
    pair = PrescriptionPair(right_eye=req.right_eye, left_eye=req.left_eye)
    return _lens_style_result(match_prescription_data(pair, req.power_type, catalog))


@router.post("/add-power", response_model=AddPowerMatchResponse, response_model_exclude_none=True)
async def match_add_power(req: AddPowerMatchRequest, catalog: Catalog = Depends(catalog_dependency)):
    """Price a DV/NV/ADD prescription as both bifocal and progressive lenses."""
    pair = PrescriptionPair(right_eye=req.right_eye, left_eye=req.left_eye)
    result = match_add_power_prescription(pair, catalog)
    return AddPowerMatchResponse(
        bifocal=_lens_style_result(result.bifocal),
        progressive=_lens_style_result(result.progressive),
    )
