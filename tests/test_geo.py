from __future__ import annotations

import pytest

from pyskytrack.geo import (
    clamp_zoom,
    normalize_coordinates,
    normalize_heading,
    normalize_longitude,
    radius_from_zoom,
)


@pytest.mark.parametrize(
    ("zoom", "expected"),
    [(0, 0.0), (1, 25.0), (5, 125.0), (10, 250.0), (20, 250.0)],
)
def test_radius_from_zoom_values(zoom: int, expected: float) -> None:
    assert radius_from_zoom(zoom) == pytest.approx(expected)


def test_radius_from_zoom_is_monotone_and_capped() -> None:
    radii = [radius_from_zoom(z) for z in range(0, 30)]
    assert radii == sorted(radii)
    assert max(radii) == 250.0


def test_radius_from_zoom_rejects_negative_zoom() -> None:
    with pytest.raises(ValueError):
        radius_from_zoom(-1)


def test_normalize_longitude_wraps_across_antimeridian() -> None:
    assert normalize_longitude(190.0) == pytest.approx(-170.0)
    assert normalize_longitude(-190.0) == pytest.approx(170.0)
    assert normalize_longitude(-0.09) == pytest.approx(-0.09)


def test_normalize_coordinates_clamps_latitude() -> None:
    assert normalize_coordinates(95.0, 10.0) == (90.0, pytest.approx(10.0))
    assert normalize_coordinates(-91.0, 370.0) == (-90.0, pytest.approx(10.0))


def test_normalize_coordinates_rejects_nan() -> None:
    with pytest.raises(ValueError):
        normalize_coordinates(float("nan"), 0.0)


def test_normalize_heading_and_clamp_zoom() -> None:
    assert normalize_heading(-90.0) == pytest.approx(270.0)
    assert normalize_heading(360.0) == 0.0
    assert clamp_zoom(25, 0, 19) == 19
    assert clamp_zoom(-3, 0, 19) == 0
    assert clamp_zoom(7.6, 0, 19) == 8
