# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import numpy as np
import pytest

from tradeglobe.geo.spherical import distance, interpolate, polygon_centroid


def test_interpolate_starts_and_ends_on_endpoints() -> None:
    points = interpolate((-8.0, 53.0), (-97.0, 39.0), 16)
    assert points.shape == (17, 2)
    assert points[0] == pytest.approx([-8.0, 53.0], abs=1e-9)
    assert points[-1] == pytest.approx([-97.0, 39.0], abs=1e-9)


def test_interpolate_follows_the_equator() -> None:
    points = interpolate((0.0, 0.0), (90.0, 0.0), 2)
    assert points[1] == pytest.approx([45.0, 0.0], abs=1e-9)


def test_interpolate_degenerate_repeats_origin() -> None:
    points = interpolate((3.0, 4.0), (3.0, 4.0), 4)
    assert np.allclose(points, [[3.0, 4.0]] * 5)


def test_distance_in_degrees() -> None:
    assert distance((0.0, 0.0), (90.0, 0.0)) == pytest.approx(90.0)
    assert distance((0.0, 90.0), (0.0, -90.0)) == pytest.approx(180.0)


def test_centroid_ignores_ring_winding() -> None:
    ccw = [(-10, 51), (-6, 51), (-6, 55), (-10, 55), (-10, 51)]
    cw = list(reversed(ccw))
    lon_a, lat_a = polygon_centroid([ccw])
    lon_b, lat_b = polygon_centroid([cw])
    assert lon_a == pytest.approx(-8.0, abs=1e-6)
    assert 52.5 < lat_a < 53.5
    assert (lon_a, lat_a) == pytest.approx((lon_b, lat_b))


def test_centroid_of_nothing_is_origin() -> None:
    assert polygon_centroid([]) == (0.0, 0.0)
