"""Shared catalog fixtures for matcher tests."""

import copy

import pytest

from lensmatch.config import DEFAULT_CATALOG_PATH
from lensmatch.services.catalog import Catalog, load_catalog


TEST_CATALOG = {
    "brand": "Test Brand",
    "single_vision": {
        "Minus Comp": [
            {"range": "-6.0 to -2.0", "HC": 500, "ARC": "-", "BLUCUT": 700},
            {"range": "-6.0 to -4.0", "HC": 600, "ARC": 800, "BLUCUT": 900},
            {"range": "-6.0 to -6.0", "HC": 700, "ARC": 900, "BLUCUT": 1000},
        ],
        "Plus Comp": [
            {"range": "+6.0 to +2.0", "HC": 520, "ARC": 300, "BLUCUT": 720},
            {"range": "+6.0 to +4.0", "HC": 620, "ARC": 820, "BLUCUT": 920},
        ],
        "SV Cross Comp": [
            {"range": "-6.0 to +2.0", "HC": 550, "ARC": 750},
            {"range": "+6.0 to -2.0", "HC": 560, "ARC": 760},
        ],
    },
    "CYL_KT": [
        {"range": "-2, 90°", "HC": 900, "ARC": 1100},
        {"range": "-2, 180°", "HC": 910, "ARC": 1110},
        {"range": "+2, 90°", "HC": 920, "ARC": 1120},
    ],
    "COMP_KT": [
        {"range": "-8/-2 90°", "HC": 1200, "ARC": 1400},
        {"range": "+8/-2", "HC": 1250, "ARC": 1450},
    ],
    "Bifocal KT": [
        {"range": "+3/+ ADD", "HC": 1000, "ARC": 1200},
        {"range": "+4/+ ADD", "HC": 1100, "ARC": 1300},
        {"range": "-2/+ ADD", "HC": 1000, "ARC": 1200},
        {"range": "-3/+ ADD", "HC": 1100, "ARC": 1300},
    ],
    "PROGRESSIVE_SPH": [
        {"range": "+3/+ ADD", "HC": 2000, "ARC": 2400},
        {"range": "-2/+ ADD", "HC": 2000, "ARC": 2400},
        {"range": "-3/+ ADD", "HC": 2200, "ARC": 2600},
    ],
    "PROGRESSIVE__CYL": [
        {"range": "-2, 90°", "HC": 2500, "ARC": 2900},
        {"range": "-2, 180°", "HC": 2500, "ARC": 2900},
    ],
    "PROGRESSIVE_COMP": [
        {"range": "-3/-2 180°", "HC": 2800, "ARC": 3200},
        {"range": "+3/-2 90°", "HC": 2800, "ARC": 3200},
    ],
}


@pytest.fixture
def catalog_data():
    return copy.deepcopy(TEST_CATALOG)


@pytest.fixture
def catalog(catalog_data):
    return Catalog.from_dict(catalog_data)


@pytest.fixture(scope="session")
def bundled_catalog():
    return load_catalog(DEFAULT_CATALOG_PATH)
