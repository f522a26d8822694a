import os

from planar_homography.geometry.homography import HomographyParameters, estimate_homography
from planar_homography.utils.visualization import ensure_output_dirs, save_mapping_plot

SQUARE = [(0, 0), (100, 0), (100, 100), (0, 100)]


def test_ensure_output_dirs(tmp_path):
    ensure_output_dirs(["a", "b"], base=str(tmp_path))
    assert (tmp_path / "a").is_dir()
    assert (tmp_path / "b").is_dir()


def test_save_mapping_plot(tmp_path):
    dst = [(10, 20), (120, 30), (110, 130), (20, 120)]
    params = estimate_homography(SQUARE, dst)
    ensure_output_dirs(["scene"], base=str(tmp_path))

    path = save_mapping_plot(SQUARE, dst, params, [(50, 50)], "scene", str(tmp_path))
    assert path == os.path.join(str(tmp_path), "scene", "mapping.jpg")
    assert os.path.getsize(path) > 0


def test_save_mapping_plot_skips_points_at_infinity(tmp_path):
    # grid x == -50 lies on the vanishing line
    params = HomographyParameters(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.02, 0.0)
    src = [(-100, 0), (0, 0), (0, 100), (-100, 100)]
    ensure_output_dirs(["horizon"], base=str(tmp_path))

    path = save_mapping_plot(src, src, params, [(-50, 50)], "horizon", str(tmp_path))
    assert os.path.isfile(path)
