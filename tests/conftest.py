import json

import pytest

from gravity_core.data_models import Body
from gravity_core.vector import Vector


def make_body(mass, position, velocity=(0.0, 0.0), diameter=10.0, name="Body"):
    return Body(
        diameter=diameter,
        mass=mass,
        position=Vector(*position),
        velocity=Vector(*velocity),
        name=name,
    )


TRIO_SCENARIO = {
    "name": "Trio",
    "description": "heavy center with two light bodies",
    "bodies": [
        {"name": "Center", "diameter": 20, "mass": 1000, "position": [0, 0], "velocity": [0, 0]},
        {"name": "Right", "diameter": 6, "mass": 10, "position": [100, 0], "velocity": [0, 316.2], "color": [255, 0, 0]},
        {"name": "Left", "diameter": 6, "mass": 10, "position": [-100, 0], "velocity": [0, -316.2], "color": "0-255-0"},
    ],
}


@pytest.fixture
def scenario_dir(tmp_path):
    """A scenarios directory holding a single valid scenario, trio.json."""
    (tmp_path / "trio.json").write_text(json.dumps(TRIO_SCENARIO), encoding="utf-8")
    return tmp_path
