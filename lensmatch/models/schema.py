from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union

from lensmatch.services.transposition import Refraction
from lensmatch.utils import normalize_axis_or_zero, normalize_or_zero

# As typed into the form: number, numeric text, or "" when unset
RawValue = Optional[Union[float, str]]


class EyeValues(BaseModel):
    sph: RawValue = Field("", description="D")
    cyl: RawValue = Field("", description="D")
    axis: RawValue = Field("", description="degrees")

    def refraction(self) -> Refraction:
        return Refraction(
            sph=normalize_or_zero(self.sph),
            cyl=normalize_or_zero(self.cyl),
            axis=normalize_axis_or_zero(self.axis),
        )


class SingleVisionPrescription(EyeValues):
    model_config = ConfigDict(extra="forbid")


class AddPowerPrescription(BaseModel):
    """Bifocal/progressive eye: distance (DV) and near (NV) values plus ADD."""
    model_config = ConfigDict(extra="forbid")

    dv: EyeValues
    nv: EyeValues = Field(default_factory=EyeValues)
    add: RawValue = Field("", description="D")


EyePrescription = Union[AddPowerPrescription, SingleVisionPrescription]


class PrescriptionPair(BaseModel):
    right_eye: EyePrescription
    left_eye: EyePrescription
