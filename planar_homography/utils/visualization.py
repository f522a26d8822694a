"""
Visualization utilities for homography scenes.

Figures are saved to disk rather than displayed interactively, so the module
works in headless runs.
"""

import os
import numpy as np
import matplotlib
matplotlib.use("Agg")          # non-interactive backend
import matplotlib.pyplot as plt

from planar_homography.geometry.errors import DegenerateMappingError
from planar_homography.geometry.homography import map_point


def ensure_output_dirs(scenes: list, base: str = "results") -> None:
    """Create one output subdirectory per scene name under *base*."""
    for scene in scenes:
        os.makedirs(os.path.join(base, scene), exist_ok=True)


def _grid_lines(points: list, steps: int = 10) -> list:
    """Polylines of a regular grid spanning the bounding box of *points*."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    gx = np.linspace(min(xs), max(xs), steps + 1)
    gy = np.linspace(min(ys), max(ys), steps + 1)

    lines = [[(x, y) for y in gy] for x in gx]
    lines += [[(x, y) for x in gx] for y in gy]
    return lines


def _map_polyline(line: list, params) -> list:
    mapped = []
    for p in line:
        try:
            mapped.append(map_point(p, params))
        except DegenerateMappingError:
            continue
    return mapped


def _plot_quad(ax, points: list, color: str) -> None:
    closed = list(points) + [points[0]]
    ax.plot([p[0] for p in closed], [p[1] for p in closed], "-", color=color, linewidth=2)
    for idx, p in enumerate(points):
        ax.plot(p[0], p[1], "o", color=color, markersize=6)
        ax.text(p[0], p[1], f" {idx + 1}", color=color, fontsize=9, weight="bold")


def save_mapping_plot(source: list, destination: list, params, queries: list,
                      scene: str, out_dir: str, grid_steps: int = 10) -> str:
    """Save a side-by-side view of the source plane and its image.

    The left panel shows the source quadrilateral with a regular grid and the
    query points; the right panel shows the destination quadrilateral with the
    same grid and queries mapped through *params*.  Grid points that map to
    infinity are left out.

    Parameters
    ----------
    source, destination : list of Point2D
        The four defining correspondences.
    params : HomographyParameters
        Homography mapping *source* onto *destination*.
    queries : list of Point2D
        Extra points to mark on both panels.
    scene : str
        Scene name; the figure is written to ``<out_dir>/<scene>/mapping.jpg``.
    out_dir : str
        Root output directory.
    grid_steps : int
        Number of grid cells along each axis.

    Returns
    -------
    str
        Path of the saved figure.
    """
    fig, axes = plt.subplots(1, 2, figsize=(14, 7))
    grid = _grid_lines(source, grid_steps)

    ax = axes[0]
    for line in grid:
        ax.plot([p[0] for p in line], [p[1] for p in line], "-", color="0.8", linewidth=0.7)
    _plot_quad(ax, source, "tab:blue")
    for q in queries:
        ax.plot(q[0], q[1], "r+", markersize=10, markeredgewidth=2)
    ax.set_title(f"{scene} – source plane")
    ax.set_aspect("equal")

    ax = axes[1]
    for line in grid:
        mapped = _map_polyline(line, params)
        if mapped:
            ax.plot([p.x for p in mapped], [p.y for p in mapped], "-", color="0.8", linewidth=0.7)
    _plot_quad(ax, destination, "tab:green")
    for q in _map_polyline(queries, params):
        ax.plot(q.x, q.y, "r+", markersize=10, markeredgewidth=2)
    ax.set_title(f"{scene} – destination plane")
    ax.set_aspect("equal")

    plt.tight_layout()
    path = os.path.join(out_dir, scene, "mapping.jpg")
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path
