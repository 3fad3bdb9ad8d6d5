"""
Prescription Category Matcher

Walks the catalog categories in a fixed, power-type specific order and
returns the first row whose range label accepts the prescription. When
nothing matches and the prescription has cylinder, the walk is repeated once
with the transposed prescription.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from lensmatch.services.catalog import Catalog, RANGE_KEY
from lensmatch.services.lens_policy import (
    AddPowerPlan, COMP_KT, CYL_KT, MINUS_COMP, PLUS_COMP, SINGLE_VISION,
    SV_CROSS_COMP, WITH_POWER, get_add_power_plan,
)
from lensmatch.services.range_predicates import (
    NEAR_PLANO_SPH, matches_band_range, matches_compound_range, matches_cyl_axis_range,
)
from lensmatch.services.transposition import transpose

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryMatch:
    """A catalog row accepted for a prescription."""
    category: str
    subcategory: str
    row: Dict[str, Any]


def _first_row(rows: List[Dict[str, Any]], accepts: Callable[[str], bool]) -> Optional[Dict[str, Any]]:
    for row in rows:
        if accepts(row.get(RANGE_KEY, "")):
            return row
    return None


def _match_add_power(sph: float, cyl: float, axis: int, catalog: Catalog, plan: AddPowerPlan) -> Optional[CategoryMatch]:
    if abs(sph) <= NEAR_PLANO_SPH and cyl != 0:
        row = _first_row(catalog.rows(plan.cyl_category), lambda r: matches_cyl_axis_range(sph, cyl, axis, r))
        if row:
            return CategoryMatch(plan.cyl_category, plan.cyl_category, row)

    if abs(sph) > NEAR_PLANO_SPH and cyl != 0:
        row = _first_row(catalog.rows(plan.comp_category), lambda r: matches_compound_range(sph, cyl, axis, r))
        if row:
            return CategoryMatch(plan.comp_category, plan.comp_category, row)

    row = _first_row(catalog.rows(plan.sph_category), lambda r: matches_band_range(sph, cyl, r))
    if row:
        return CategoryMatch(plan.sph_category, plan.sph_category, row)
    return None


def _match_single_vision(sph: float, cyl: float, axis: int, catalog: Catalog) -> Optional[CategoryMatch]:
    # plano prescriptions are priced from the first Minus Comp row whatever its label
    if sph == 0 and cyl == 0:
        minus_rows = catalog.single_vision_rows(MINUS_COMP)
        if minus_rows:
            return CategoryMatch(SINGLE_VISION, MINUS_COMP, minus_rows[0])

    def band(r: str) -> bool:
        return matches_band_range(sph, cyl, r)

    attempts = []
    if (sph > 0 and cyl < 0) or (sph < 0 and cyl > 0):
        attempts.append(SV_CROSS_COMP)
    if sph < 0 or (sph == 0 and cyl < 0):
        attempts.append(MINUS_COMP)
    if sph > 0 or (sph == 0 and cyl > 0):
        attempts.append(PLUS_COMP)

    for subcategory in attempts:
        row = _first_row(catalog.single_vision_rows(subcategory), band)
        if row:
            return CategoryMatch(SINGLE_VISION, subcategory, row)

    if cyl != 0 and axis != 0:
        row = _first_row(catalog.rows(CYL_KT), lambda r: matches_cyl_axis_range(sph, cyl, axis, r))
        if row:
            return CategoryMatch(CYL_KT, CYL_KT, row)

    if cyl != 0:
        row = _first_row(catalog.rows(COMP_KT), lambda r: matches_compound_range(sph, cyl, axis, r))
        if row:
            return CategoryMatch(COMP_KT, COMP_KT, row)
    return None


def try_match_prescription(sph: float, cyl: float, axis: int, catalog: Catalog,
                           power_type: str = WITH_POWER) -> Optional[CategoryMatch]:
    """Single pass over the categories for ``power_type``, no transposition."""
    plan = get_add_power_plan(power_type)
    if plan is not None:
        return _match_add_power(sph, cyl, axis, catalog, plan)
    return _match_single_vision(sph, cyl, axis, catalog)


def find_best_match(sph: float, cyl: float, axis: int, catalog: Catalog,
                    power_type: str = WITH_POWER) -> Optional[CategoryMatch]:
    """
    Find the catalog row for one eye.

    Args:
        sph, cyl: Diopters, already normalised
        axis: Degrees, already normalised
        catalog: Brand catalog to search
        power_type: "with-power", "bifocal" or "progressive"; anything else
            is matched as single vision

    Returns:
        The first accepting row, trying the prescription as written and then
        transposed, or None when both passes are exhausted.
    """
    result = try_match_prescription(sph, cyl, axis, catalog, power_type)
    if result:
        return result

    transposed = transpose(sph, cyl, axis)
    if transposed is None:
        return None
    log.debug("No %s match for %+.2f/%+.2f x %d, retrying transposed %+.2f/%+.2f x %d",
              power_type, sph, cyl, axis, transposed.sph, transposed.cyl, transposed.axis)
    return try_match_prescription(transposed.sph, transposed.cyl, transposed.axis, catalog, power_type)
