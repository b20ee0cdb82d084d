"""
Immutable four point polygon used for tag candidates and marker slots
"""

import cv2
import numpy as np
from typing import Optional, Sequence, Union

from common.bounds import Bounds


class Quadrilateral:
    """
    Closed shape made of four ordered points P0..P3.

    Point order is kept exactly as supplied (usually whatever
    cv2.approxPolyDP produced) and is never re-wound; several
    orientation formulas depend on which corner is P0.

    A quadrilateral created without points is "empty" and marks
    a slot that holds no marker.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Optional[Union[np.ndarray, Sequence]] = None):
        """
        Args:
            points: Four 2-D points, shaped (4, 2) or (4, 1, 2) as returned
                    by OpenCV contour functions. None creates an empty slot.
        """
        if points is None:
            self._points = None
            return

        arr = np.array(points, dtype=np.float32)
        if arr.size != 8:
            raise ValueError(f"Quadrilateral needs exactly 4 points, got array of shape {arr.shape}")

        arr = arr.reshape(4, 2)
        arr.setflags(write=False)
        self._points = arr

    @classmethod
    def from_corners(cls, p0, p1, p2, p3) -> "Quadrilateral":
        """Build a quadrilateral from four (x, y) corners."""
        return cls([p0, p1, p2, p3])

    @classmethod
    def empty(cls) -> "Quadrilateral":
        return cls(None)

    @property
    def is_empty(self) -> bool:
        return self._points is None

    def _require_points(self) -> np.ndarray:
        if self._points is None:
            raise ValueError("Empty quadrilateral has no geometry")
        return self._points

    @property
    def points(self) -> np.ndarray:
        """Copy of the corners as a (4, 2) float32 array."""
        return self._require_points().copy()

    @property
    def p0(self) -> np.ndarray:
        return self._require_points()[0]

    @property
    def p1(self) -> np.ndarray:
        return self._require_points()[1]

    @property
    def p2(self) -> np.ndarray:
        return self._require_points()[2]

    @property
    def p3(self) -> np.ndarray:
        return self._require_points()[3]

    @property
    def min_x(self) -> float:
        return float(self._require_points()[:, 0].min())

    @property
    def min_y(self) -> float:
        return float(self._require_points()[:, 1].min())

    @property
    def max_x(self) -> float:
        return float(self._require_points()[:, 0].max())

    @property
    def max_y(self) -> float:
        return float(self._require_points()[:, 1].max())

    @property
    def bounding_box(self) -> Bounds:
        return Bounds.from_ltrb(self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def bounding_box_int(self) -> Bounds:
        return self.bounding_box.to_int()

    @property
    def bounding_box_area(self) -> float:
        return self.bounding_box.area()

    @property
    def width(self) -> float:
        """
        Largest X extent among the four edges.

        Not a true side length: taking the biggest per-edge delta keeps the
        value stable under mild perspective skew.
        """
        pts = self._require_points()
        deltas = np.abs(pts[:, 0] - np.roll(pts[:, 0], -1))
        return float(deltas.max())

    @property
    def height(self) -> float:
        """Largest Y extent among the four edges (see width)."""
        pts = self._require_points()
        deltas = np.abs(pts[:, 1] - np.roll(pts[:, 1], -1))
        return float(deltas.max())

    def transform(self, matrix: np.ndarray) -> "Quadrilateral":
        """
        Apply a 2x3 affine matrix to all corners.

        Args:
            matrix: Affine transform, e.g. from cv2.getRotationMatrix2D

        Returns:
            New quadrilateral with transformed corners (same corner order).
            An empty quadrilateral is returned unchanged.
        """
        if self.is_empty:
            return self
        moved = cv2.transform(self._points.reshape(-1, 1, 2), np.asarray(matrix, dtype=np.float64))
        return Quadrilateral(moved)

    def relabel(self, shift: int) -> "Quadrilateral":
        """
        Cyclically relabel corners so that P<shift> becomes P0.

        Points do not move; relabel(1) gives (P1, P2, P3, P0).
        """
        if self.is_empty:
            return self
        return Quadrilateral(np.roll(self._points, -(shift % 4), axis=0))

    def mirror_x(self, width: float) -> "Quadrilateral":
        """Mirror corners horizontally inside an image of given width (x' = width - x)."""
        if self.is_empty:
            return self
        mirrored = self._points.copy()
        mirrored[:, 0] = width - mirrored[:, 0]
        return Quadrilateral(mirrored)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quadrilateral):
            return NotImplemented
        if self.is_empty or other.is_empty:
            return self.is_empty and other.is_empty
        return bool(np.array_equal(self._points, other._points))

    def __hash__(self) -> int:
        if self.is_empty:
            return hash(None)
        return hash(self._points.tobytes())

    def __repr__(self) -> str:
        if self.is_empty:
            return "Quadrilateral(empty)"
        corners = ", ".join(f"({x:.1f}, {y:.1f})" for x, y in self._points)
        return f"Quadrilateral({corners})"


def to_quadrilateral(shape) -> Quadrilateral:
    """Accept a Quadrilateral, None (empty slot) or anything shaped like 4 points."""
    if isinstance(shape, Quadrilateral):
        return shape
    return Quadrilateral(shape)
