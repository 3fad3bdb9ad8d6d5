"""
Prescription Entry Rules

Keeps bifocal/progressive entries consistent while the customer types, and
lists the values the entry form offers. The matcher never enforces these
rules; it reads whatever DV values it is given.
"""

from typing import Dict, List

from lensmatch.models.schema import AddPowerPrescription, EyePrescription
from lensmatch.utils import normalize_or_zero

QUARTER_STEPS = 4

SPH_LIMIT = 20
CYL_LIMIT = 6
AXIS_MAX = 180
ADD_MIN = 1
ADD_MAX = 3


def _is_set(value) -> bool:
    return value is not None and value != ""


def sync_from_dv(rx: AddPowerPrescription) -> AddPowerPrescription:
    """Near vision uses the distance cylinder and axis."""
    nv = rx.nv.model_copy(update={"cyl": rx.dv.cyl, "axis": rx.dv.axis})
    return rx.model_copy(update={"nv": nv})


def sync_add_from_nv(rx: AddPowerPrescription) -> AddPowerPrescription:
    """After an NV SPH edit: ADD = NV SPH - DV SPH."""
    if not (_is_set(rx.dv.sph) and _is_set(rx.nv.sph)):
        return rx
    add = normalize_or_zero(rx.nv.sph) - normalize_or_zero(rx.dv.sph)
    return rx.model_copy(update={"add": f"{add:.2f}"})


def sync_nv_from_add(rx: AddPowerPrescription) -> AddPowerPrescription:
    """After an ADD edit: NV SPH = DV SPH + ADD."""
    if not (_is_set(rx.dv.sph) and _is_set(rx.add)):
        return rx
    nv_sph = normalize_or_zero(rx.dv.sph) + normalize_or_zero(rx.add)
    nv = rx.nv.model_copy(update={"sph": f"{nv_sph:.2f}"})
    return rx.model_copy(update={"nv": nv})


def has_required_values(eye: EyePrescription) -> bool:
    """
    Whether an eye has enough entered to be priced.

    Single vision needs SPH or CYL; ADD power needs DV SPH or DV CYL plus ADD.
    An empty SPH is still matched as plano.
    """
    if isinstance(eye, AddPowerPrescription):
        return (_is_set(eye.dv.sph) or _is_set(eye.dv.cyl)) and _is_set(eye.add)
    return _is_set(eye.sph) or _is_set(eye.cyl)


def _quarter_options(lo: int, hi: int) -> List[Dict[str, str]]:
    options = []
    for i in range(lo * QUARTER_STEPS, hi * QUARTER_STEPS + 1):
        value = f"{i / QUARTER_STEPS:.2f}"
        options.append({"value": value, "label": f"+{value}" if i >= 0 else value})
    return options


def power_options() -> Dict[str, List[Dict[str, str]]]:
    """Selectable SPH, CYL, AXIS and ADD values for the entry form."""
    return {
        "sph": _quarter_options(-SPH_LIMIT, SPH_LIMIT),
        "cyl": _quarter_options(-CYL_LIMIT, CYL_LIMIT),
        "axis": [{"value": str(i), "label": f"{i}°"} for i in range(0, AXIS_MAX + 1)],
        "add": _quarter_options(ADD_MIN, ADD_MAX),
    }
