"""
Marker classification of tag candidates by size and aspect ratio
"""

from typing import List, NamedTuple, Sequence, Tuple

from common.quadrilateral import Quadrilateral


class ClassifiedCandidate(NamedTuple):
    """Candidate quadrilateral with its marker orientation flags."""

    rect: Quadrilateral
    is_horizontal_long_marker: bool = False
    is_vertical_long_marker: bool = False

    @property
    def is_marker(self) -> bool:
        return self.is_horizontal_long_marker or self.is_vertical_long_marker


class MarkerClassifier:
    """
    Labels quadrilaterals as horizontal marker, vertical marker or non-marker.

    A marker is a long thin rectangle: neither square nor an extreme sliver,
    and neither as large as the tag frame nor as small as noise.
    """

    def __init__(
        self,
        image_size: Tuple[int, int],
        max_size_ratio: float = 0.08,
        min_size_ratio: float = 0.03,
        min_aspect: float = 2.0,
        max_aspect: float = 4.5
    ):
        """
        Args:
            image_size: Sub-image size (width, height) in pixels
            max_size_ratio: Shapes wider AND taller than this fraction of the image are rejected
            min_size_ratio: Shapes narrower OR shorter than this fraction of the image are rejected
            min_aspect: Exclusive lower bound of the long/short side ratio
            max_aspect: Exclusive upper bound of the long/short side ratio
        """
        self.width, self.height = image_size
        self.max_size_ratio = max_size_ratio
        self.min_size_ratio = min_size_ratio
        self.min_aspect = min_aspect
        self.max_aspect = max_aspect

    def classify(self, rect: Quadrilateral) -> ClassifiedCandidate:
        """
        Classify a single quadrilateral.

        Args:
            rect: Candidate shape in sub-image coordinates

        Returns:
            ClassifiedCandidate; both flags False when the shape is not a marker
        """
        if rect.is_empty:
            return ClassifiedCandidate(rect)

        rect_width = rect.width
        rect_height = rect.height

        too_large = (rect_width > self.width * self.max_size_ratio and
                     rect_height > self.height * self.max_size_ratio)
        too_small = (rect_width < self.width * self.min_size_ratio or
                     rect_height < self.height * self.min_size_ratio)
        if too_large or too_small or rect_width == 0 or rect_height == 0:
            return ClassifiedCandidate(rect)

        wtoh = rect_width / rect_height
        htow = rect_height / rect_width

        return ClassifiedCandidate(
            rect,
            is_horizontal_long_marker=self.min_aspect < wtoh < self.max_aspect,
            is_vertical_long_marker=self.min_aspect < htow < self.max_aspect,
        )

    def classify_all(self, rects: Sequence[Quadrilateral]) -> List[ClassifiedCandidate]:
        """Classify every candidate, keeping array order."""
        return [self.classify(rect) for rect in rects]


def markers_present(candidates: Sequence[ClassifiedCandidate]) -> bool:
    """
    Quick precheck: is there enough marker material to try a layout match?

    Needs two horizontal, two vertical, or one of each.
    """
    horizontal = sum(1 for c in candidates if c.is_horizontal_long_marker)
    vertical = sum(1 for c in candidates if c.is_vertical_long_marker)

    return horizontal >= 2 or vertical >= 2 or (horizontal >= 1 and vertical >= 1)
