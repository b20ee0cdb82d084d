"""
Search over quarter-turn hypotheses for a consistent marker layout
"""

from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Tuple

import cv2
import numpy as np

from common.quadrilateral import Quadrilateral
from .classifier import ClassifiedCandidate, MarkerClassifier, markers_present


class MarkerLayout(IntEnum):
    """
    Orientation of the top-left and top-right markers.

    The value is the number of clockwise quarter turns that bring the layout
    back to VV, the upright tag (both top markers vertical).
    """
    VV = 0
    HV = 1
    HH = 2
    VH = 3


class LayoutMatch(NamedTuple):
    layout: MarkerLayout
    first_index: int   # top-left marker
    second_index: int  # top-right marker


class SearchOutcome(NamedTuple):
    angle_index: int
    match: LayoutMatch
    candidates: List[ClassifiedCandidate]


def quarter_turn_matrix(turns: int, image_size: Tuple[int, int]) -> np.ndarray:
    """
    Affine matrix rotating points clockwise by turns * 90 degrees about the image center.

    Clockwise means clockwise on screen (y axis pointing down), which is
    cv2.getRotationMatrix2D with a negative angle.

    Args:
        turns: Number of quarter turns, any integer (taken modulo 4)
        image_size: (width, height) of the image

    Returns:
        2x3 float64 matrix usable with cv2.transform
    """
    width, height = image_size
    matrix = cv2.getRotationMatrix2D((width / 2.0, height / 2.0), -90.0 * (turns % 4), 1.0)
    # quarter turns: 0/1 coefficients, translation on the half-pixel grid
    return np.round(matrix * 2.0) / 2.0


class OrientationSearch:
    """
    Finds the rotation hypothesis and marker layout of a tag.

    Each hypothesis rotates the whole candidate set by a quarter turn,
    reclassifies it and runs the layout matcher. Hypotheses are tried in the
    fixed order 0, 90, 180, 270 degrees and the first match wins.
    """

    def __init__(
        self,
        image_size: Tuple[int, int],
        classifier: MarkerClassifier,
        left_region_ratio: float = 0.3,
        top_region_ratio: float = 0.25,
        right_horizontal_ratio: float = 0.6,
        right_region_ratio: float = 0.7,
        tolerance_ratio: float = 0.05,
        debug: bool = False
    ):
        """
        Args:
            image_size: Sub-image size (width, height)
            classifier: Marker classifier for the same image size
            left_region_ratio: Top-left marker must start left of this fraction of width
            top_region_ratio: Top-left marker must start above this fraction of height
            right_horizontal_ratio: A horizontal top-right marker must start right of this fraction of width
            right_region_ratio: Top-right marker must end (and a vertical one start) right of this fraction
            tolerance_ratio: Vertical alignment tolerance as fraction of height
            debug: Print the search trace
        """
        self.width, self.height = image_size
        self.classifier = classifier
        self.left_region_ratio = left_region_ratio
        self.top_region_ratio = top_region_ratio
        self.right_horizontal_ratio = right_horizontal_ratio
        self.right_region_ratio = right_region_ratio
        self.tolerance_height = self.height * tolerance_ratio
        self.debug = debug

        self.rotation_matrices = [None] + [quarter_turn_matrix(turns, image_size) for turns in (1, 2, 3)]

    def rotate_candidates(self, rects: Sequence[Quadrilateral], angle_index: int) -> List[Quadrilateral]:
        """Rotate every candidate for the given hypothesis (index 0 leaves them untouched)."""
        matrix = self.rotation_matrices[angle_index]
        if matrix is None:
            return list(rects)
        return [rect.transform(matrix) for rect in rects]

    def search(self, rects: Sequence[Quadrilateral]) -> Optional[SearchOutcome]:
        """
        Try all four hypotheses.

        Args:
            rects: Candidates in sub-image coordinates

        Returns:
            SearchOutcome of the first successful hypothesis, or None
        """
        for angle_index in range(4):
            classified = self.classifier.classify_all(self.rotate_candidates(rects, angle_index))

            if not markers_present(classified):
                if self.debug:
                    print(f"  ⚠️  {angle_index * 90} deg: not enough markers")
                continue

            match = self.match_layout(classified)
            if match is not None:
                if self.debug:
                    print(f"  ✅ {angle_index * 90} deg: layout {match.layout.name} "
                          f"(markers {match.first_index}, {match.second_index})")
                return SearchOutcome(angle_index, match, classified)

            if self.debug:
                print(f"  ⚠️  {angle_index * 90} deg: no layout matched")

        return None

    def _in_top_left(self, rect: Quadrilateral) -> bool:
        return rect.min_x < self.width * self.left_region_ratio and rect.min_y < self.height * self.top_region_ratio

    def _tops_aligned(self, first: Quadrilateral, second: Quadrilateral) -> bool:
        return abs(second.min_y - first.min_y) < self.tolerance_height

    def _bottoms_aligned(self, first: Quadrilateral, second: Quadrilateral) -> bool:
        return abs(second.max_y - first.max_y) < self.tolerance_height

    def _in_right(self, rect: Quadrilateral, start_ratio: float) -> bool:
        return rect.min_x > self.width * start_ratio and rect.max_x > self.width * self.right_region_ratio

    def _pair_layout(self, first: ClassifiedCandidate, second: ClassifiedCandidate) -> Optional[MarkerLayout]:
        r1, r2 = first.rect, second.rect

        if first.is_horizontal_long_marker:
            if (second.is_horizontal_long_marker and self._tops_aligned(r1, r2) and
                    self._bottoms_aligned(r1, r2) and self._in_right(r2, self.right_horizontal_ratio)):
                return MarkerLayout.HH
            if (second.is_vertical_long_marker and self._tops_aligned(r1, r2) and
                    self._in_right(r2, self.right_region_ratio)):
                return MarkerLayout.HV

        if first.is_vertical_long_marker:
            if (second.is_horizontal_long_marker and self._tops_aligned(r1, r2) and
                    self._in_right(r2, self.right_horizontal_ratio)):
                return MarkerLayout.VH
            if (second.is_vertical_long_marker and self._tops_aligned(r1, r2) and
                    self._bottoms_aligned(r1, r2) and self._in_right(r2, self.right_region_ratio)):
                return MarkerLayout.VV

        return None

    def match_layout(self, candidates: Sequence[ClassifiedCandidate]) -> Optional[LayoutMatch]:
        """
        Look for a top-left/top-right marker pair in one hypothesis frame.

        Pairs are scanned in array order, top-left candidate in the outer
        loop. The first consistent pair wins.

        Returns:
            LayoutMatch or None
        """
        for i, first in enumerate(candidates):
            if not first.is_marker or not self._in_top_left(first.rect):
                continue

            for j, second in enumerate(candidates):
                if j == i or not second.is_marker:
                    continue

                layout = self._pair_layout(first, second)
                if layout is not None:
                    return LayoutMatch(layout, i, j)

        return None
