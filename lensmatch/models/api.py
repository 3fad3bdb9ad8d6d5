from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any, Union

from lensmatch.models.schema import AddPowerPrescription, RawValue, SingleVisionPrescription
from lensmatch.services.lens_policy import WITH_POWER, get_add_power_plan

class SingleVisionMatchRequest(BaseModel):
    right_eye: SingleVisionPrescription = Field(default_factory=SingleVisionPrescription)
    left_eye: SingleVisionPrescription = Field(default_factory=SingleVisionPrescription)
    power_type: str = WITH_POWER

    @field_validator("power_type")
    @classmethod
    def single_vision_power_type(cls, v):
        if get_add_power_plan(v) is not None:
            raise ValueError(f"{v} lenses are priced through /match/add-power")
        return v

class AddPowerMatchRequest(BaseModel):
    right_eye: AddPowerPrescription
    left_eye: AddPowerPrescription

class RefractionOut(BaseModel):
    sph: float
    cyl: float
    axis: int

class CoatingOut(BaseModel):
    code: str
    name: str
    price: Union[int, float]

class EyeResult(BaseModel):
    category: Optional[str] = None
    subcategory: Optional[str] = None
    range: Optional[str] = None
    prices: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    prescription: RefractionOut
    coatings: list[CoatingOut] = Field(default_factory=list)

class LensStyleResult(BaseModel):
    brand: str
    right_eye: EyeResult
    left_eye: EyeResult
    averaged_coatings: list[CoatingOut] = Field(default_factory=list)

class AddPowerMatchResponse(BaseModel):
    bifocal: LensStyleResult
    progressive: LensStyleResult

class TransposeRequest(BaseModel):
    sph: RawValue = ""
    cyl: RawValue = ""
    axis: RawValue = ""

class TransposedValues(BaseModel):
    sph: str
    cyl: str
    axis: int

class TransposeResponse(BaseModel):
    original: RefractionOut
    transposed: Optional[TransposedValues] = None

class CatalogSummary(BaseModel):
    brand: str
    single_vision: Dict[str, int]
    categories: Dict[str, int]
