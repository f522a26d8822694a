from pathlib import Path

import pytest

from planar_homography.geometry.errors import InvalidInputError
from planar_homography.geometry.points import Point2D
from planar_homography.utils.config import (
    DEFAULT_TOLERANCES,
    get_tolerances,
    load_config,
    scene_correspondences,
)

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_default_config_loads():
    cfg = load_config(str(DEFAULT_CONFIG))
    names = [s["name"] for s in cfg["scenes"]]
    assert "worked_example" in names
    assert get_tolerances(cfg) == DEFAULT_TOLERANCES


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == {}


def test_tolerance_overrides():
    tol = get_tolerances({"tolerances": {"denominator_tol": "1e-6"}})
    assert tol["denominator_tol"] == 1e-6
    assert tol["max_condition"] == DEFAULT_TOLERANCES["max_condition"]

    assert get_tolerances({"tolerances": None}) == DEFAULT_TOLERANCES


def test_unknown_tolerance_rejected():
    with pytest.raises(KeyError, match="epsilon"):
        get_tolerances({"tolerances": {"epsilon": 1.0}})


def test_scene_correspondences():
    scene = {
        "name": "s",
        "source": [[0, 0], [1, 0], [1, 1], [0, 1]],
        "destination": [[0, 0], [2, 0], [2, 2], [0, 2]],
        "queries": [[0.5, 0.5]],
    }
    src, dst, queries = scene_correspondences(scene)
    assert src[2] == Point2D(1.0, 1.0)
    assert dst[1] == Point2D(2.0, 0.0)
    assert queries == [Point2D(0.5, 0.5)]

    del scene["queries"]
    assert scene_correspondences(scene)[2] == []


def test_scene_correspondences_missing_points():
    with pytest.raises(InvalidInputError, match="needs 'source'"):
        scene_correspondences({"name": "broken", "source": [[0, 0]] * 4})
    with pytest.raises(InvalidInputError, match="exactly 4"):
        scene_correspondences({"name": "short", "source": [[0, 0]] * 3,
                               "destination": [[0, 0]] * 4})
