#!/usr/bin/env python3
"""
run_homography.py – Four-point homography estimation and point mapping

Loads configuration from configs/default.yaml (or a user-specified file),
estimates the homography of every scene defined in the config, maps the
scene's query points through it and prints a summary.

Usage
-----
    python run_homography.py
    python run_homography.py --config configs/default.yaml
    python run_homography.py --scenes worked_example translation
    python run_homography.py --plot
"""

import argparse
import os
import sys
import time

# Ensure the project root is on the Python path when invoked directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from planar_homography.geometry.errors import HomographyError
from planar_homography.geometry.homography import (
    estimate_homography,
    map_point,
    reprojection_errors,
)
from planar_homography.utils.config import (
    get_tolerances,
    load_config,
    scene_correspondences,
)
from planar_homography.utils.visualization import ensure_output_dirs, save_mapping_plot


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def banner(text: str) -> None:
    width = 60
    print("\n" + "─" * width)
    print(f"  {text}")
    print("─" * width)


def format_point(p) -> str:
    return f"({p[0]:.4f}, {p[1]:.4f})"


# ──────────────────────────────────────────────────────────────────────────────
# Per-scene run
# ──────────────────────────────────────────────────────────────────────────────

def run_scene(scene_cfg: dict, tolerances: dict, results_dir: str,
              plot: bool) -> dict:
    """Estimate and apply the homography of a single scene; return summary metrics."""
    name = scene_cfg["name"]
    banner(f"Scene: {name}")

    metrics = {
        "scene": name,
        "status": "ok",
        "max_error": None,
        "mapped": [],
        "error": None,
    }

    try:
        src, dst, queries = scene_correspondences(scene_cfg)

        # ── 1. Estimate ───────────────────────────────────────────────────────
        print("  Stage 1 – Homography estimation (8x8 direct solve)")
        params = estimate_homography(
            src, dst,
            max_condition=tolerances["max_condition"],
            collinearity_tol=tolerances["collinearity_tol"],
        )
        for label, value in params._asdict().items():
            print(f"    {label} = {value: .10g}")

        errors = reprojection_errors(params, src, dst)
        metrics["max_error"] = max(errors)
        print(f"    Max reprojection error on defining points: {max(errors):.3g}")

        # ── 2. Map query points ───────────────────────────────────────────────
        print(f"  Stage 2 – Mapping {len(queries)} query point(s)")
        for q in queries:
            try:
                out = map_point(q, params, denominator_tol=tolerances["denominator_tol"])
            except HomographyError as exc:
                print(f"    {format_point(q)} -> [FAILED] {exc}")
                metrics["mapped"].append((q, None))
                continue
            print(f"    {format_point(q)} -> {format_point(out)}")
            metrics["mapped"].append((q, out))

        # ── 3. Plot ───────────────────────────────────────────────────────────
        if plot:
            path = save_mapping_plot(src, dst, params, queries, name, results_dir)
            print(f"  Saved mapping plot → {path}")

    except HomographyError as exc:
        print(f"  [FAILED] {type(exc).__name__}: {exc}")
        metrics["status"] = type(exc).__name__
        metrics["error"] = str(exc)

    return metrics


# ──────────────────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Estimate four-point homographies and map points through them"
    )
    p.add_argument(
        "--config", default="configs/default.yaml",
        help="Path to YAML configuration file (default: configs/default.yaml)",
    )
    p.add_argument(
        "--scenes", nargs="*", default=None,
        help="Subset of scene names to process (default: all scenes in config)",
    )
    p.add_argument(
        "--plot", action="store_true",
        help="Save a source/destination mapping figure per scene",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Load configuration
    if not os.path.exists(args.config):
        print(f"[ERROR] Config file not found: {args.config}")
        sys.exit(1)
    cfg = load_config(args.config)

    results_dir = cfg.get("results_dir", "results")
    scenes = cfg.get("scenes", [])
    tolerances = get_tolerances(cfg)

    # Optionally restrict to a subset of scenes
    if args.scenes:
        missing = sorted(set(args.scenes) - {s["name"] for s in scenes})
        if missing:
            print(f"[ERROR] Unknown scene(s): {missing}")
            sys.exit(1)
        scenes = [s for s in scenes if s["name"] in args.scenes]

    if args.plot:
        ensure_output_dirs([s["name"] for s in scenes], base=results_dir)

    banner("Four-Point Homography")
    print(f"  Config    : {args.config}")
    print(f"  Scenes    : {[s['name'] for s in scenes]}")
    print(f"  Tolerances: {tolerances}")
    print(f"  Plots     : {'enabled' if args.plot else 'disabled'}")

    t0 = time.time()
    all_metrics = []

    for sc in scenes:
        metrics = run_scene(sc, tolerances, results_dir, args.plot)
        all_metrics.append(metrics)

    # ── Summary table ──────────────────────────────────────────────────────
    banner("Results Summary")
    header = f"{'Scene':<16} {'Status':<24} {'Max err':>10} {'Mapped':>8}"
    print(header)
    print("─" * len(header))
    for m in all_metrics:
        err = f"{m['max_error']:.2e}" if m["max_error"] is not None else "–"
        mapped = sum(1 for _, out in m["mapped"] if out is not None)
        print(f"{m['scene']:<16} {m['status']:<24} {err:>10} "
              f"{mapped:>3}/{len(m['mapped']):<4}")

    elapsed = time.time() - t0
    print(f"\nCompleted in {elapsed:.2f}s")
    return all_metrics


if __name__ == "__main__":
    main()
