"""
Prescription Matching Service

Entry point used by the configurator: matches both eyes of a prescription
against the brand catalog and assembles per-eye price results.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from lensmatch.models.schema import (
    AddPowerPrescription, EyePrescription, PrescriptionPair, SingleVisionPrescription,
)
from lensmatch.services.catalog import Catalog, get_catalog
from lensmatch.services.lens_policy import BIFOCAL, PROGRESSIVE, WITH_POWER, get_add_power_plan
from lensmatch.services.matcher import find_best_match
from lensmatch.services.transposition import Refraction

log = logging.getLogger(__name__)

NO_MATCH_ERROR = "No matching range found for this prescription"


@dataclass(frozen=True)
class EyeMatch:
    """
    Match outcome for one eye.

    Either category/subcategory/matched_range/prices are set, or error is.
    ``prescription`` always holds the normalised values that were matched.
    """
    prescription: Refraction
    category: Optional[str] = None
    subcategory: Optional[str] = None
    matched_range: Optional[str] = None
    prices: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        rx = self.prescription._asdict()
        if not self.matched:
            return {"error": self.error, "prescription": rx}
        return {
            "category": self.category,
            "subcategory": self.subcategory,
            "range": self.matched_range,
            "prices": dict(self.prices),
            "prescription": rx,
        }


@dataclass(frozen=True)
class PrescriptionMatch:
    right_eye: EyeMatch
    left_eye: EyeMatch
    brand: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "right_eye": self.right_eye.to_dict(),
            "left_eye": self.left_eye.to_dict(),
            "brand": self.brand,
        }


@dataclass(frozen=True)
class AddPowerMatch:
    """Both ADD-power lens styles matched for the same prescription."""
    bifocal: PrescriptionMatch
    progressive: PrescriptionMatch


def select_refraction(eye: EyePrescription, power_type: Optional[str]) -> Refraction:
    """
    Values to match for ``power_type``: DV values for ADD-power lens styles,
    direct SPH/CYL/AXIS otherwise.

    Raises ValueError when the eye's shape does not fit the power type.
    """
    if get_add_power_plan(power_type) is not None:
        if not isinstance(eye, AddPowerPrescription):
            raise ValueError(f"{power_type} lenses need a DV/NV/ADD prescription")
        return eye.dv.refraction()
    if not isinstance(eye, SingleVisionPrescription):
        raise ValueError(f"{power_type or WITH_POWER} lenses need a single-vision prescription")
    return eye.refraction()


def match_eye(eye: EyePrescription, power_type: str, catalog: Catalog) -> EyeMatch:
    rx = select_refraction(eye, power_type)
    found = find_best_match(rx.sph, rx.cyl, rx.axis, catalog, power_type)
    if found is None:
        log.info("No %s range for %+.2f/%+.2f x %d", power_type, rx.sph, rx.cyl, rx.axis)
        return EyeMatch(prescription=rx, error=NO_MATCH_ERROR)
    return EyeMatch(
        prescription=rx,
        category=found.category,
        subcategory=found.subcategory,
        matched_range=found.row.get("range"),
        prices=dict(found.row),
    )


def match_prescription_data(prescription: PrescriptionPair, power_type: str = WITH_POWER,
                            catalog: Optional[Catalog] = None) -> PrescriptionMatch:
    """
    Match both eyes against the catalog.

    ``power_type`` selects both the values and the category walk: bifocal and
    progressive match each eye on its DV values, every other type matches
    direct values as single vision. Raises ValueError when an eye's shape
    does not fit the power type.
    """
    if catalog is None:
        catalog = get_catalog()

    return PrescriptionMatch(
        right_eye=match_eye(prescription.right_eye, power_type, catalog),
        left_eye=match_eye(prescription.left_eye, power_type, catalog),
        brand=catalog.brand,
    )


def match_add_power_prescription(prescription: PrescriptionPair,
                                 catalog: Optional[Catalog] = None) -> AddPowerMatch:
    """Match an ADD-power prescription for both bifocal and progressive lenses."""
    return AddPowerMatch(
        bifocal=match_prescription_data(prescription, BIFOCAL, catalog),
        progressive=match_prescription_data(prescription, PROGRESSIVE, catalog),
    )
