"""
Tests for Quadrilateral geometry
"""

import numpy as np
import pytest

from common.bounds import Bounds
from common.quadrilateral import Quadrilateral, to_quadrilateral


class TestQuadrilateral:
    """Tests for Quadrilateral"""

    @pytest.fixture
    def quad(self):
        return Quadrilateral.from_corners((10, 10), (10, 40), (50, 40), (50, 10))

    def test_corners_keep_order(self, quad):
        assert tuple(quad.p0) == (10, 10)
        assert tuple(quad.p1) == (10, 40)
        assert tuple(quad.p2) == (50, 40)
        assert tuple(quad.p3) == (50, 10)

    def test_bounding_box(self, quad):
        assert quad.min_x == 10 and quad.min_y == 10
        assert quad.max_x == 50 and quad.max_y == 40
        assert quad.bounding_box == Bounds(10, 10, 40, 30)
        assert quad.bounding_box_area == 1200

    def test_width_height(self, quad):
        assert quad.width == 40
        assert quad.height == 30

    def test_width_is_largest_edge_delta_not_bbox(self):
        # skewed shape: bbox is 0..30 wide, but no single edge spans it
        quad = Quadrilateral.from_corners((0, 0), (10, 20), (30, 20), (20, 0))
        assert quad.min_x == 0 and quad.max_x == 30
        assert quad.width == 20
        assert quad.height == 20

    def test_accepts_opencv_contour_shape(self):
        contour = np.array([[[1, 2]], [[1, 8]], [[9, 8]], [[9, 2]]], dtype=np.int32)
        quad = Quadrilateral(contour)
        assert quad.points.shape == (4, 2)
        assert quad.width == 8 and quad.height == 6

    def test_wrong_point_count(self):
        with pytest.raises(ValueError):
            Quadrilateral([(0, 0), (1, 1), (2, 2)])

    def test_points_are_read_only(self, quad):
        copy = quad.points
        copy[0, 0] = 999
        assert quad.p0[0] == 10

        with pytest.raises(ValueError):
            quad.p0[0] = 999

    def test_empty(self):
        empty = Quadrilateral.empty()
        assert empty.is_empty
        assert to_quadrilateral(None).is_empty
        with pytest.raises(ValueError):
            _ = empty.width

    def test_empty_passes_through_transforms(self):
        empty = Quadrilateral.empty()
        assert empty.transform(np.eye(2, 3)).is_empty
        assert empty.relabel(1).is_empty
        assert empty.mirror_x(100).is_empty

    def test_relabel(self, quad):
        relabeled = quad.relabel(1)
        assert tuple(relabeled.p0) == (10, 40)
        assert tuple(relabeled.p3) == (10, 10)
        assert quad.relabel(4) == quad
        assert quad.relabel(3) == Quadrilateral.from_corners((50, 10), (10, 10), (10, 40), (50, 40))

    def test_mirror_x(self, quad):
        mirrored = quad.mirror_x(128)
        assert tuple(mirrored.p0) == (118, 10)
        assert mirrored.min_x == 78 and mirrored.max_x == 118

    def test_transform_translation(self, quad):
        matrix = np.array([[1, 0, 5], [0, 1, -5]], dtype=np.float64)
        moved = quad.transform(matrix)
        assert tuple(moved.p0) == (15, 5)
        assert moved.width == quad.width

    def test_equality_and_hash(self, quad):
        same = Quadrilateral.from_corners((10, 10), (10, 40), (50, 40), (50, 10))
        assert quad == same
        assert hash(quad) == hash(same)
        assert quad != quad.relabel(1)
        assert Quadrilateral.empty() == Quadrilateral.empty()
        assert quad != Quadrilateral.empty()

    def test_to_quadrilateral_keeps_instance(self, quad):
        assert to_quadrilateral(quad) is quad
