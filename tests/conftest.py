"""
Shared test fixtures: sample elements, API test client.
"""

import pytest
from fastapi.testclient import TestClient

from takeoff.main import app
from takeoff.models import ElementType, BarShape, StirrupModel
from takeoff.schemas import BarGroup, StirrupConfig, Support, SteelItem


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def beam():
    """4 m upper beam on a middle support: 2 straight Ø10 bottom, 2 U-shaped Ø8 top."""
    return SteelItem(
        id="V1",
        type=ElementType.UPPER_BEAM,
        quantity=1,
        length=4.0,
        bars=(
            BarGroup(count=2, gauge="10.0", segment_a=400, shape=BarShape.STRAIGHT),
            BarGroup(count=2, gauge="8.0", segment_a=400, shape=BarShape.U_UP,
                     segment_b=20, segment_c=20),
        ),
        stirrups=StirrupConfig(gauge="5.0", spacing=15, model=StirrupModel.RECT,
                               width=15, height=25),
        supports=(Support(position=200, width=20, left_gap=20, right_gap=20),),
    )


@pytest.fixture
def footing():
    """1.00 m x 0.80 m footing, 20 cm deep, Ø10 cage at 20 cm."""
    return SteelItem(
        id="S1",
        type=ElementType.FOOTING,
        quantity=2,
        length=1.0,
        width=0.8,
        height=0.2,
        stirrups=StirrupConfig(gauge="10.0", spacing=20),
    )


@pytest.fixture
def raw_extracted_beam():
    """An element record as the drawing reader returns it (camelCase, loose units)."""
    return {
        "type": "Viga Superior",
        "observation": "V3 sala",
        "quantity": "2",
        "length": 3.0,
        "width": 15,
        "height": 40,
        "stirrupGauge": "5",
        "stirrupSpacing": 0.15,
        "stirrupWidth": 0.12,
        "stirrupHeight": 35,
        "stirrupCount": 16,
        "mainBars": [
            {"count": 2, "gauge": "10", "usage": "Principal", "shape": "straight",
             "hookStart": 15, "hookEnd": 15},
            {"count": 2, "gauge": "8.0", "usage": "Costela", "placement": "top",
             "hookStart": 20, "hookEnd": 20},
        ],
    }
