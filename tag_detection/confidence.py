"""
Confidence scoring from bottom corroborating markers
"""

from typing import Dict, Sequence, Tuple

from .classifier import ClassifiedCandidate
from .orientation import LayoutMatch, MarkerLayout


BASE_CONFIDENCE = 0.5
SINGLE_CORROBORATION_BONUS = 0.15
PAIR_CORROBORATION_BONUS = 0.2

# (bottom-left, bottom-right) marker orientation per layout, True = horizontal
BOTTOM_MARKERS_HORIZONTAL: Dict[MarkerLayout, Tuple[bool, bool]] = {
    MarkerLayout.VV: (True, True),
    MarkerLayout.HH: (False, False),
    MarkerLayout.VH: (False, True),
    MarkerLayout.HV: (True, False),
}


class ConfidenceScorer:
    """
    Raises the base confidence of a two-marker match with bottom markers.

    A complete tag carries four markers. The top pair decides the layout,
    the bottom pair only corroborates it:
      - 0.5  top pair only
      - 0.65 one bottom marker aligned with its top marker column
      - 0.85 both bottom markers, aligned with each other
    """

    def __init__(
        self,
        image_size: Tuple[int, int],
        left_region_ratio: float = 0.3,
        right_region_ratio: float = 0.7,
        bottom_region_ratio: float = 0.75,
        tolerance_ratio: float = 0.05
    ):
        self.width, self.height = image_size
        self.left_region_ratio = left_region_ratio
        self.right_region_ratio = right_region_ratio
        self.bottom_region_ratio = bottom_region_ratio
        self.tolerance_width = self.width * tolerance_ratio
        self.tolerance_height = self.height * tolerance_ratio

    def _has_orientation(self, candidate: ClassifiedCandidate, horizontal: bool) -> bool:
        if horizontal:
            return candidate.is_horizontal_long_marker
        return candidate.is_vertical_long_marker

    def score(self, candidates: Sequence[ClassifiedCandidate], match: LayoutMatch) -> float:
        """
        Args:
            candidates: Classified candidates of the winning hypothesis frame
            match: Layout match found in that frame

        Returns:
            Confidence in [0.5, 0.85]
        """
        first = candidates[match.first_index].rect
        second = candidates[match.second_index].rect
        left_horizontal, right_horizontal = BOTTOM_MARKERS_HORIZONTAL[match.layout]

        confidence = BASE_CONFIDENCE
        corroborating = None
        corroborating_side = None

        for index, candidate in enumerate(candidates):
            if index in (match.first_index, match.second_index) or not candidate.is_marker:
                continue

            rect = candidate.rect
            if rect.max_y <= self.height * self.bottom_region_ratio:
                continue

            if (rect.min_x < self.width * self.left_region_ratio and
                    abs(rect.min_x - first.min_x) < self.tolerance_width and
                    self._has_orientation(candidate, left_horizontal)):
                side = "left"
            elif (rect.max_x > self.width * self.right_region_ratio and
                    abs(rect.max_x - second.max_x) < self.tolerance_width and
                    self._has_orientation(candidate, right_horizontal)):
                side = "right"
            else:
                continue

            if corroborating is None:
                confidence += SINGLE_CORROBORATION_BONUS
                corroborating = rect
                corroborating_side = side
                continue

            if side != corroborating_side and abs(rect.max_y - corroborating.max_y) < self.tolerance_height:
                confidence += PAIR_CORROBORATION_BONUS
                break

        return confidence
