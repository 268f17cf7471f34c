import json
import logging

import pytest

from gravity_core.constants import DEFAULT_BODY_COLOR, DEFAULT_G
from gravity_core.scenario_loader import (
    SCENARIOS_DIR,
    ScenarioError,
    build_cluster,
    find_scenario,
    list_scenarios,
    load_scenario,
    parse_scenario,
)
from gravity_core.vector import Vector

from conftest import TRIO_SCENARIO


def write(directory, name, data):
    path = directory / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def test_load_scenario(scenario_dir):
    scenario = load_scenario("trio.json", str(scenario_dir))
    assert scenario.name == "Trio"
    assert scenario.file_name == "trio.json"
    assert scenario.description.startswith("heavy")
    assert scenario.time_step is None
    assert scenario.gravitational_constant == DEFAULT_G
    assert [b.name for b in scenario.bodies] == ["Center", "Right", "Left"]
    right = scenario.bodies[1]
    assert right.mass == 10.0
    assert right.diameter == 6.0
    assert right.position == Vector(100, 0)
    assert right.velocity == Vector(0, 316.2)
    assert right.acceleration is None


def test_colors_accept_lists_strings_and_defaults(scenario_dir):
    center, right, left = load_scenario("trio.json", str(scenario_dir)).bodies
    assert center.color == DEFAULT_BODY_COLOR
    assert right.color == (255, 0, 0)
    assert left.color == (0, 255, 0)


def test_colors_are_clamped():
    data = dict(TRIO_SCENARIO, bodies=[dict(TRIO_SCENARIO["bodies"][0], color=[300, -5, 128])])
    assert parse_scenario(data).bodies[0].color == (255, 0, 128)


def test_physics_overrides_are_read():
    data = dict(TRIO_SCENARIO, time_step=0.0003, gravitational_constant=500, softening=1.5)
    scenario = parse_scenario(data)
    assert scenario.time_step == 0.0003
    cluster = build_cluster(scenario)
    assert cluster.G == 500.0
    assert cluster.softening == 1.5
    assert not cluster.initialized


def test_missing_field_names_the_body():
    bodies = [dict(b) for b in TRIO_SCENARIO["bodies"]]
    del bodies[1]["mass"]
    with pytest.raises(ScenarioError, match="body 1"):
        parse_scenario(dict(TRIO_SCENARIO, bodies=bodies), "bad.json")


def test_invalid_mass_is_rejected():
    bodies = [dict(b) for b in TRIO_SCENARIO["bodies"]]
    bodies[2]["mass"] = -10
    with pytest.raises(ScenarioError, match="body 2"):
        parse_scenario(dict(TRIO_SCENARIO, bodies=bodies))


def test_empty_bodies_are_rejected():
    with pytest.raises(ScenarioError):
        parse_scenario({"name": "Nothing", "bodies": []})


@pytest.mark.parametrize("time_step", [0.01, 0.00005, 0.0])
def test_time_step_outside_slider_range_is_rejected(time_step):
    with pytest.raises(ScenarioError, match="time_step"):
        parse_scenario(dict(TRIO_SCENARIO, time_step=time_step), "fast.json")


def test_negative_softening_is_rejected():
    with pytest.raises(ScenarioError, match="softening"):
        parse_scenario(dict(TRIO_SCENARIO, softening=-1))


@pytest.mark.parametrize("field,value", [
    ("position", [5]),
    ("position", [1, 2, 3]),
    ("velocity", [0, 0, 0]),
    ("velocity", []),
])
def test_non_planar_vectors_name_the_body(field, value):
    bodies = [dict(b) for b in TRIO_SCENARIO["bodies"]]
    bodies[1][field] = value
    with pytest.raises(ScenarioError, match="body 1"):
        parse_scenario(dict(TRIO_SCENARIO, bodies=bodies))


def test_malformed_json_raises(tmp_path):
    write(tmp_path, "broken.json", "{ not json")
    with pytest.raises(ScenarioError, match="broken.json"):
        load_scenario("broken.json", str(tmp_path))


def test_missing_file_raises(tmp_path):
    with pytest.raises(ScenarioError):
        load_scenario("absent.json", str(tmp_path))


def test_list_scenarios_sorted_with_fallback_names(scenario_dir, caplog):
    write(scenario_dir, "a_broken.json", "[oops")
    write(scenario_dir, "notes.txt", "ignored")
    with caplog.at_level(logging.WARNING):
        items = list_scenarios(str(scenario_dir))
    assert items == [("a_broken.json", "a_broken"), ("trio.json", "Trio")]
    assert "a_broken.json" in caplog.text


def test_list_scenarios_missing_directory(tmp_path):
    assert list_scenarios(str(tmp_path / "nope")) == []


@pytest.mark.parametrize("name", ["Trio", "trio.json", "trio", "  Trio "])
def test_find_scenario(scenario_dir, name):
    assert find_scenario(name, str(scenario_dir)).name == "Trio"


def test_find_unknown_scenario(scenario_dir):
    with pytest.raises(ScenarioError, match="unknown scenario"):
        find_scenario("Andromeda", str(scenario_dir))


def test_bundled_scenarios_load_and_initialize():
    items = list_scenarios(SCENARIOS_DIR)
    assert items
    for file_name, _ in items:
        cluster = build_cluster(load_scenario(file_name, SCENARIOS_DIR))
        cluster.initialize()
        cluster.step(0.0005)
        assert cluster.total_momentum().norm() == pytest.approx(0.0, abs=1e-6)
