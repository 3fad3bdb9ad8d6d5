"""
Lens Power-Type Policy

Maps the customer's power type onto the catalog categories walked by the
matcher. Bifocal and progressive lenses share one walk (near-plano cylinder,
compound, sphere/ADD) over different category tables; every other power type
is matched as single vision.
"""

from dataclasses import dataclass
from typing import Dict, Optional


WITH_POWER = "with-power"
BIFOCAL = "bifocal"
PROGRESSIVE = "progressive"

SINGLE_VISION = "single_vision"
MINUS_COMP = "Minus Comp"
PLUS_COMP = "Plus Comp"
SV_CROSS_COMP = "SV Cross Comp"
CYL_KT = "CYL_KT"
COMP_KT = "COMP_KT"


@dataclass(frozen=True)
class AddPowerPlan:
    """Category tables for one ADD-power lens style."""
    cyl_category: str   # near-plano SPH with cylinder, "<cyl>, <axis>°" rows
    comp_category: str  # SPH beyond 1.0 D with cylinder, compound rows
    sph_category: str   # sphere-only fallback, band/ADD rows


ADD_POWER_PLANS: Dict[str, AddPowerPlan] = {
    BIFOCAL: AddPowerPlan(
        cyl_category=CYL_KT,
        comp_category=COMP_KT,
        sph_category="Bifocal KT",
    ),
    PROGRESSIVE: AddPowerPlan(
        cyl_category="PROGRESSIVE__CYL",
        comp_category="PROGRESSIVE_COMP",
        sph_category="PROGRESSIVE_SPH",
    ),
}


def get_add_power_plan(power_type: Optional[str]) -> Optional[AddPowerPlan]:
    """Plan for an ADD-power type, or None when the type is single vision."""
    return ADD_POWER_PLANS.get(power_type or WITH_POWER)


def get_available_power_types() -> Dict[str, str]:
    """Get available power type keys and descriptions."""
    return {
        WITH_POWER: "Single vision - positive, negative or cylindrical",
        BIFOCAL: "Bifocal - distance and near segments, priced from Bifocal KT",
        PROGRESSIVE: "Progressive - distance to near corridor, priced from PROGRESSIVE tables",
    }
