"""
Prescription transposition between plus- and minus-cylinder notation.
"""

from typing import NamedTuple, Optional

from lensmatch.utils import format_power


class Refraction(NamedTuple):
    """One eye's sphero-cylindrical values as matched against the catalog."""
    sph: float
    cyl: float
    axis: int


def transpose(sph: float, cyl: float, axis: int) -> Optional[Refraction]:
    """
    Rewrite a prescription in the optically equivalent opposite-cylinder form.

    SPH' = SPH + CYL, CYL' = -CYL, AXIS' = AXIS + 90 (kept within 1..180).
    Returns None when there is no cylinder to transpose.
    """
    if cyl == 0:
        return None
    new_axis = int(axis) + 90
    if new_axis > 180:
        new_axis -= 180
    return Refraction(sph=sph + cyl, cyl=-cyl, axis=new_axis)


def transpose_for_display(sph: float, cyl: float, axis: int) -> Optional[dict]:
    """Transposed values formatted the way the entry form shows them."""
    t = transpose(sph, cyl, axis)
    if t is None:
        return None
    return {"sph": format_power(t.sph), "cyl": format_power(t.cyl), "axis": t.axis}
