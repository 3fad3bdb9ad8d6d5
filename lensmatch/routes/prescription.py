from fastapi import APIRouter

from lensmatch.models.api import RefractionOut, TransposeRequest, TransposeResponse
from lensmatch.models.schema import EyeValues
from lensmatch.services.prescription_entry import power_options
from lensmatch.services.transposition import transpose_for_display

router = APIRouter()

@router.post("/transpose", response_model=TransposeResponse)
async def transpose_preview(req: TransposeRequest):
    """Opposite-cylinder form of the entered values; null transposed when CYL is 0."""
    rx = EyeValues(sph=req.sph, cyl=req.cyl, axis=req.axis).refraction()
    return TransposeResponse(
        original=RefractionOut(**rx._asdict()),
        transposed=transpose_for_display(rx.sph, rx.cyl, rx.axis),
    )

@router.get("/options")
async def entry_options():
    return power_options()
