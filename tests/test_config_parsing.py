"""Tests for config loading and validation."""

import json
from pathlib import Path

import numpy as np
import pytest

from drag_area_simulator.core.models import Config, Mesh


def _base_config_dict() -> dict:
    return {
        "wind": [10.0, 0.0, 0.0],
        "mesh": {"shape": "unit_cube"},
        "simulation": {"samples": 32, "seed": 7, "steps": 5, "dt": 0.5, "jitter": True},
        "drag": {"air_density": 1.2, "drag_coefficient": 1.05},
    }


def test_defaults():
    config = Config()

    np.testing.assert_array_equal(config.wind, [1.0, 0.0, 0.0])
    assert config.mesh.n_triangles == 12
    assert config.simulation.samples == 64
    assert config.simulation.seed == 1337
    assert config.simulation.jitter is False
    assert config.drag.air_density == pytest.approx(1.225)
    assert config.drag.drag_coefficient == pytest.approx(1.0)


def test_empty_dict_uses_defaults():
    config = Config.from_dict({})

    np.testing.assert_array_equal(config.wind, [1.0, 0.0, 0.0])
    assert config.mesh.n_vertices == 8
    assert config.simulation.steps == 10
    assert config.simulation.far_distance == pytest.approx(1e6)


def test_values_are_read():
    config = Config.from_dict(_base_config_dict())

    np.testing.assert_array_equal(config.wind, [10.0, 0.0, 0.0])
    assert config.simulation.samples == 32
    assert config.simulation.seed == 7
    assert config.simulation.steps == 5
    assert config.simulation.dt == pytest.approx(0.5)
    assert config.simulation.jitter is True
    assert config.drag.air_density == pytest.approx(1.2)
    assert config.drag.drag_coefficient == pytest.approx(1.05)


def test_null_seed():
    data = _base_config_dict()
    data["simulation"]["seed"] = None
    assert Config.from_dict(data).simulation.seed is None


def test_square_plate_shape():
    data = _base_config_dict()
    data["mesh"] = {"shape": "square_plate", "side": 2.0}

    mesh = Config.from_dict(data).mesh
    lo, hi = mesh.bounds()
    np.testing.assert_array_equal(lo, [0, -1, -1])
    np.testing.assert_array_equal(hi, [0, 1, 1])


def test_shape_name_string():
    data = _base_config_dict()
    data["mesh"] = "unit_cube"
    assert Config.from_dict(data).mesh.n_triangles == 12


def test_inline_mesh():
    data = _base_config_dict()
    data["mesh"] = {
        "vertices": [[0, 0, 0], [0, 1, 0], [0, 0, 1]],
        "triangles": [[0, 1, 2]],
    }

    mesh = Config.from_dict(data).mesh
    assert mesh.n_vertices == 3
    assert mesh.triangles == [(0, 1, 2)]


def test_unknown_shape_rejected():
    data = _base_config_dict()
    data["mesh"] = {"shape": "sphere"}
    with pytest.raises(ValueError, match="Unknown mesh shape"):
        Config.from_dict(data)


def test_inline_mesh_missing_triangles_rejected():
    data = _base_config_dict()
    data["mesh"] = {"vertices": [[0, 0, 0]]}
    with pytest.raises(ValueError):
        Config.from_dict(data)


def test_bad_vertex_rejected():
    with pytest.raises(ValueError, match="3 coordinates"):
        Mesh.from_dict({"vertices": [[0, 0]], "triangles": []})


def test_bad_triangle_rejected():
    with pytest.raises(ValueError, match="3 indices"):
        Mesh.from_dict({"vertices": [[0, 0, 0]], "triangles": [[0, 0]]})


def test_wind_must_have_three_components():
    data = _base_config_dict()
    data["wind"] = [1.0, 2.0]
    with pytest.raises(ValueError, match="3 components"):
        Config.from_dict(data)


@pytest.mark.parametrize(
    "section, key, value",
    [
        ("simulation", "samples", 0),
        ("simulation", "steps", -1),
        ("simulation", "dt", -0.1),
        ("simulation", "far_distance", 0.0),
    ],
)
def test_out_of_range_values_rejected(section, key, value):
    data = _base_config_dict()
    data[section][key] = value
    with pytest.raises(ValueError):
        Config.from_dict(data)


def test_zero_steps_allowed():
    data = _base_config_dict()
    data["simulation"]["steps"] = 0
    assert Config.from_dict(data).simulation.steps == 0


def test_to_dict_roundtrip():
    config = Config.from_dict(_base_config_dict())
    again = Config.from_dict(config.to_dict())

    np.testing.assert_array_equal(again.wind, config.wind)
    np.testing.assert_array_equal(again.mesh.vertices, config.mesh.vertices)
    assert again.mesh.triangles == config.mesh.triangles
    assert again.simulation == config.simulation
    assert again.drag == config.drag


def test_from_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(_base_config_dict()))

    config = Config.from_json_file(path)
    np.testing.assert_array_equal(config.wind, [10.0, 0.0, 0.0])
    assert config.simulation.samples == 32


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        Config.from_json_file(tmp_path / "missing.json")


def test_default_config_file_loads():
    """The shipped default config is valid."""
    path = Path(__file__).parent.parent / "config" / "default_config.json"
    config = Config.from_json_file(path)
    np.testing.assert_array_equal(config.wind, [10.0, 0.0, 0.0])
    assert config.mesh.n_triangles == 12


@pytest.mark.parametrize(
    "key, value, field_name",
    [
        ("simulation", None, "simulation"),
        ("drag", [1.2, 1.0], "drag"),
        ("wind", "north", "wind"),
        ("wind", 5, "wind"),
        ("mesh", 3, "Mesh"),
    ],
)
def test_wrong_section_type_rejected(key, value, field_name):
    data = _base_config_dict()
    data[key] = value
    with pytest.raises(ValueError, match=field_name):
        Config.from_dict(data)


@pytest.mark.parametrize(
    "mesh, field_name",
    [
        ({"vertices": 5, "triangles": []}, "mesh.vertices"),
        ({"vertices": [[0, 0, 0]], "triangles": None}, "mesh.triangles"),
        ({"vertices": [5, 6, 7], "triangles": []}, "3 coordinates"),
        ({"vertices": [[0, 0, "x"]], "triangles": []}, "mesh.vertices"),
        ({"vertices": [[0, 0, None]], "triangles": []}, "mesh.vertices"),
        ({"vertices": [[0, 0, 0]], "triangles": [[0, 0, None]]}, "mesh.triangles"),
        ({"shape": "square_plate", "side": None}, "mesh.side"),
    ],
)
def test_malformed_mesh_values_rejected(mesh, field_name):
    data = _base_config_dict()
    data["mesh"] = mesh
    with pytest.raises(ValueError, match=field_name):
        Config.from_dict(data)


@pytest.mark.parametrize(
    "section, key, value",
    [
        ("simulation", "samples", None),
        ("simulation", "samples", "many"),
        ("simulation", "dt", [0.1]),
        ("simulation", "seed", {}),
        ("drag", "air_density", None),
        ("drag", "drag_coefficient", True),
    ],
)
def test_non_numeric_values_rejected(section, key, value):
    data = _base_config_dict()
    data[section][key] = value
    with pytest.raises(ValueError, match=f"{section}.{key}"):
        Config.from_dict(data)


def test_wind_component_must_be_number():
    data = _base_config_dict()
    data["wind"] = [1.0, None, 0.0]
    with pytest.raises(ValueError, match="wind"):
        Config.from_dict(data)


def test_top_level_must_be_object():
    with pytest.raises(ValueError, match="JSON object"):
        Config.from_dict([1, 2, 3])


def test_numeric_strings_accepted():
    data = _base_config_dict()
    data["simulation"]["samples"] = "16"
    data["drag"]["air_density"] = "1.1"
    config = Config.from_dict(data)
    assert config.simulation.samples == 16
    assert config.drag.air_density == pytest.approx(1.1)
