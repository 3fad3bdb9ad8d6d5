"""
Catalog Range Predicates

Each catalog row carries a ``range`` label written in one of four grammars.
The predicates here decide whether a (SPH, CYL, AXIS) prescription falls
inside such a label:

- Band ranges:     "-6.0 to -2.0", "-2.0 sph", "+3/+ ADD"
- CYL-axis pairs:  "+2, 90°"
- Compound ranges: "+2/+1 180°", "+2/-2, 180°", "-4/-2"

Labels are read leniently: numbers are taken from the start of each token, so
"+3/+ ADD" reads as base 3.0 and "90°" as 90.
"""

import math
import re
from typing import Optional, Tuple

from lensmatch.utils import leading_float, leading_int

STANDARD_AXES: Tuple[int, ...] = (45, 90, 135, 180)

# |band| -> inclusive |CYL| window
CYL_TIERS = {
    2.0: (0.25, 2.0),
    4.0: (2.25, 4.0),
    6.0: (4.25, 6.0),
}
DEFAULT_CYL_BAND = 2.0
OTHER_BAND_TOLERANCE = 0.5

SPH_SUFFIX_TOLERANCE = 1.0
NEAR_PLANO_SPH = 1.0
CYL_PAIR_TOLERANCE = 1.0
SIGN_AGNOSTIC_BELOW = 0.5

ADD_POSITIVE_SEQUENTIAL_ABOVE = 3.0
ADD_NEGATIVE_SEQUENTIAL_BELOW = -2.0
ADD_STEP = 0.25

AXIS_IN_LABEL_RX = re.compile(r"(\d+)°")


def standardize_axis(axis: int) -> int:
    """
    Map an axis onto the nearest catalog axis (45, 90, 135 or 180).

    Catalog rows are only authored at those four axes. 0 means "no axis" and
    maps to itself; ties keep the first candidate in STANDARD_AXES order.
    """
    axis = int(axis or 0)
    if axis == 0:
        return 0
    best = STANDARD_AXES[0]
    for candidate in STANDARD_AXES[1:]:
        if abs(candidate - axis) < abs(best - axis):
            best = candidate
    return best


def _whole_diopter(value: float) -> int:
    # round half up on magnitudes
    return int(math.floor(abs(value) + 0.5))


def _same_sign(value: float, reference: float) -> bool:
    if abs(value) < SIGN_AGNOSTIC_BELOW:
        return True
    return (value >= 0 and reference >= 0) or (value < 0 and reference < 0)


def _cyl_in_band(cyl: float, band: float) -> bool:
    cyl_abs = abs(cyl)
    band_abs = abs(band)
    window = CYL_TIERS.get(band_abs)
    if window is None:
        return abs(cyl_abs - band_abs) <= OTHER_BAND_TOLERANCE
    lo, hi = window
    return lo <= cyl_abs <= hi


def _matches_sph_label(sph: float, cyl: float, range_str: str) -> bool:
    target = leading_float(range_str)
    if target is None:
        return False
    return abs(sph - target) <= SPH_SUFFIX_TOLERANCE and cyl == 0


def _matches_to_label(sph: float, cyl: float, range_str: str) -> Optional[bool]:
    parts = range_str.split("to")
    if len(parts) != 2:
        return None
    max_sph = leading_float(parts[0])
    cyl_band = leading_float(parts[1])
    if max_sph is None or cyl_band is None:
        return False

    if max_sph < 0:
        sph_in_range = max_sph <= sph <= 0
    else:
        sph_in_range = 0 <= sph <= max_sph
    if not sph_in_range:
        return False

    # plano CYL only lands in the smallest band
    if cyl == 0:
        return abs(cyl_band) == DEFAULT_CYL_BAND
    return _cyl_in_band(cyl, cyl_band)


def _matches_add_label(sph: float, cyl: float, range_str: str) -> bool:
    base = leading_float(range_str)
    if base is None or cyl != 0:
        return False

    if base > 0:
        lower = 0.0
        if base > ADD_POSITIVE_SEQUENTIAL_ABOVE:
            lower = base - 1 + ADD_STEP
        return lower <= sph <= base
    if base < 0:
        upper = 0.0
        if base < ADD_NEGATIVE_SEQUENTIAL_BELOW:
            upper = base + 1 - ADD_STEP
        return base <= sph <= upper
    # "0/+ ADD" carries no direction
    return False


def matches_band_range(sph: float, cyl: float, range_str: str) -> bool:
    """
    Match SPH/CYL against a band label.

    Three forms are understood, checked in this order:

    - ``"<n> sph"``: SPH within 1.0 D of n, no cylinder.
    - ``"<maxSph> to <cylBand>"``: SPH between 0 and maxSph, CYL magnitude in
      the tier picked by |cylBand| (2.0 -> 0.25..2.0, 4.0 -> 2.25..4.0,
      6.0 -> 4.25..6.0).
    - ``"<base>/+ ADD"``: distance SPH inside the base's ADD window, no
      cylinder.

    Axis plays no part in band labels.
    """
    range_str = str(range_str)
    if "sph" in range_str:
        return _matches_sph_label(sph, cyl, range_str)
    if "to" in range_str:
        result = _matches_to_label(sph, cyl, range_str)
        if result is not None:
            return result
    if "ADD" in range_str:
        return _matches_add_label(sph, cyl, range_str)
    return False


def matches_cyl_axis_range(sph: float, cyl: float, axis: int, range_str: str) -> bool:
    """
    Match a near-plano prescription against a ``"<cyl>, <axis>°"`` label.

    SPH must be within 1.0 D of plano, CYL within 1.0 D of the label's
    cylinder, and the standardised axis equal to the label's axis.
    """
    range_str = str(range_str)
    if "," not in range_str:
        return False
    parts = range_str.split(",")
    range_cyl = leading_float(parts[0])
    range_axis = leading_int(parts[1].strip().replace("°", ""))
    if range_cyl is None or range_axis is None:
        return False

    return (
        abs(sph) <= NEAR_PLANO_SPH
        and abs(cyl - range_cyl) <= CYL_PAIR_TOLERANCE
        and standardize_axis(axis) == range_axis
    )


def matches_compound_range(sph: float, cyl: float, axis: int, range_str: str) -> bool:
    """
    Match against a compound ``"<sph>/<cyl> <axis>°"`` label.

    SPH and CYL are compared by whole-diopter category and sign. Values under
    0.5 D match either sign. Labels without an axis ignore the prescription
    axis.
    """
    range_str = str(range_str)
    if "/" not in range_str:
        return False
    parts = range_str.replace(",", "").split("/")
    range_sph = leading_float(parts[0])
    cyl_part = parts[1].strip()
    range_cyl = leading_float(cyl_part)
    if range_sph is None or range_cyl is None:
        return False

    range_axis = 0
    m = AXIS_IN_LABEL_RX.search(cyl_part)
    if m:
        range_axis = int(m.group(1))

    sph_match = _whole_diopter(sph) == _whole_diopter(range_sph) and _same_sign(sph, range_sph)
    cyl_match = _whole_diopter(cyl) == _whole_diopter(range_cyl) and _same_sign(cyl, range_cyl)

    if range_axis == 0:
        return sph_match and cyl_match
    return sph_match and cyl_match and standardize_axis(axis) == range_axis
