"""
Lens coating options derived from a matched catalog row.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from lensmatch.services.catalog import NOT_OFFERED, RANGE_KEY
from lensmatch.services.prescription_matcher import EyeMatch
from lensmatch.utils import round_half_up

COATING_NAMES: Dict[str, str] = {
    "HC": "Hard Coat",
    "ARC": "Anti-Reflective Coating",
    "HC_PG": "Hard Coat + Photogray",
    "ARC_PG": "ARC + Photogray",
    "ARC_POLY": "ARC Polycarbonate",
    "BLUCUT": "Blue Cut",
    "BLUCUT_PC_POLY": "Blue Cut PC Poly",
    "ARC_1_67": "ARC 1.67 Index",
    "BLUCUT_1_67": "Blue Cut 1.67 Index",
    "NIGHT_DRIVE": "Night Drive",
    "PG_BC_GREEN": "Photogray Blue Cut Green",
    "PG_BC_BLUE": "Photogray Blue Cut Blue",
    "PG_BC_KT_GREEN": "PG Blue Cut KT Green",
    "PG_BC_KT_BLUE": "PG Blue Cut KT Blue",
}


@dataclass(frozen=True)
class Coating:
    code: str
    name: str
    price: Union[int, float]

    def to_dict(self) -> Dict[str, Union[str, int, float]]:
        return {"code": self.code, "name": self.name, "price": self.price}


def coating_name(code: str) -> str:
    return COATING_NAMES.get(code, code)


def _is_offered(price) -> bool:
    # 0 / "" / None are empty cells, "-" is "not offered"
    return bool(price) and price != NOT_OFFERED


def get_available_coatings(eye_match: Optional[EyeMatch]) -> List[Coating]:
    """
    Coatings offered for a matched eye, in the row's catalog order.

    Errored or missing results have no coatings.
    """
    if eye_match is None or not eye_match.matched or not eye_match.prices:
        return []
    return [
        Coating(code=code, name=coating_name(code), price=price)
        for code, price in eye_match.prices.items()
        if code != RANGE_KEY and _is_offered(price)
    ]


def get_averaged_coatings(right_eye: Optional[EyeMatch], left_eye: Optional[EyeMatch]) -> List[Coating]:
    """
    Per-pair coating prices: the mean of both eyes, rounded half up.

    Only coatings offered for both eyes are kept; order follows the right eye.
    """
    left_prices = {c.code: c.price for c in get_available_coatings(left_eye)}
    averaged = []
    for coating in get_available_coatings(right_eye):
        if coating.code not in left_prices:
            continue
        price = round_half_up((coating.price + left_prices[coating.code]) / 2)
        averaged.append(Coating(code=coating.code, name=coating.name, price=price))
    return averaged
