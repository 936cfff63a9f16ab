# Shared fixtures for sponsor index tests
# =======================================

import pytest

from sponsorcheck.index_builder import build


@pytest.fixture
def registry_rows():
    """Rows shaped like the GOV.UK register export."""
    return [
        {"Organisation Name": "Tesco Stores Limited", "Town/City": "Welwyn Garden City", "Route": "Skilled Worker"},
        {"Organisation Name": "Barclays Bank", "Town/City": "London", "Route": "Skilled Worker"},
        {"Organisation Name": "Northwest Regional Health Trust", "Town/City": "Preston", "Route": "Skilled Worker"},
        {"Organisation Name": "TESCO STORES LTD", "Town/City": "Cheshunt", "Route": "Skilled Worker"},
        {"Organisation Name": "   ", "Town/City": "Leeds", "Route": "Skilled Worker"},
        {"Organisation Name": "Ltd", "Town/City": "Leeds", "Route": "Skilled Worker"},
        {"Organisation Name": "O'Brien's Bakery & Co", "Town/City": "Cork", "Route": "Skilled Worker"},
    ]


@pytest.fixture
def sponsor_index(registry_rows):
    index, _ = build(registry_rows)
    return index
