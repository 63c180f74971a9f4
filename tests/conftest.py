import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from orrery.data_models import PlanetRecord
from orrery.projection import ViewParams


class MemorySource:
    """List-backed planet source with the same contract as the file sources."""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.loads = 0

    def load(self):
        self.loads += 1
        return list(self.records)

    def append(self, record):
        record.validate()
        self.records.append(record)

    def remove(self, index):
        if not 0 <= index < len(self.records):
            raise IndexError(index)
        del self.records[index]


@pytest.fixture
def planet_records():
    return [
        PlanetRecord("Mercury", 90.0, 0.04, 6.0, (169, 169, 169)),
        PlanetRecord("Earth", 220.0, 0.018, 11.0, (100, 149, 237)),
        PlanetRecord("Mars", 310.0, 0.014, 8.0, (188, 39, 50)),
        PlanetRecord("Jupiter", 620.0, 0.007, 26.0, (210, 180, 140)),
    ]


@pytest.fixture
def memory_source(planet_records):
    return MemorySource(planet_records)


@pytest.fixture
def front_view():
    """Camera looking straight down the Z axis: no yaw, no pitch, fov 800, center (800, 500)."""
    return ViewParams.from_angles(0.0, 0.0, 1500.0, 800.0, (800.0, 500.0))
