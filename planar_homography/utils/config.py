"""
YAML configuration helpers.

The configuration file holds numerical tolerances for the estimator and
mapper, and a list of named scenes (four correspondences plus optional query
points) for the driver script.
"""

import yaml

from planar_homography.geometry.errors import InvalidInputError
from planar_homography.geometry.homography import (
    DEFAULT_COLLINEARITY_TOL,
    DEFAULT_DENOMINATOR_TOL,
    DEFAULT_MAX_CONDITION,
)
from planar_homography.geometry.validation import as_point, as_points

DEFAULT_TOLERANCES = {
    "max_condition": DEFAULT_MAX_CONDITION,
    "collinearity_tol": DEFAULT_COLLINEARITY_TOL,
    "denominator_tol": DEFAULT_DENOMINATOR_TOL,
}


def load_config(path: str) -> dict:
    with open(path, "r") as fh:
        cfg = yaml.safe_load(fh)
    return cfg or {}


def get_tolerances(cfg: dict) -> dict:
    """Merge the ``tolerances`` section of *cfg* over the library defaults.

    Raises
    ------
    KeyError
        If the section names an unknown tolerance.
    """
    overrides = cfg.get("tolerances") or {}
    unknown = sorted(set(overrides) - set(DEFAULT_TOLERANCES))
    if unknown:
        raise KeyError(f"Unknown tolerance(s) in config: {unknown}")

    tolerances = dict(DEFAULT_TOLERANCES)
    tolerances.update({k: float(v) for k, v in overrides.items()})
    return tolerances


def scene_correspondences(scene: dict):
    """Read the points of one scene entry.

    Parameters
    ----------
    scene : dict
        Mapping with ``source`` and ``destination`` (four ``[x, y]`` pairs
        each) and an optional ``queries`` list.

    Returns
    -------
    source, destination : list of Point2D
    queries : list of Point2D
    """
    name = scene.get("name", "<unnamed>")
    if "source" not in scene or "destination" not in scene:
        raise InvalidInputError(f"scene {name!r} needs 'source' and 'destination' points")

    source = as_points(scene["source"], f"{name}.source")
    destination = as_points(scene["destination"], f"{name}.destination")
    queries = [as_point(q, f"{name}.queries[{i}]")
               for i, q in enumerate(scene.get("queries") or [])]
    return source, destination, queries
