"""
Tag detector: orientation of a fiducial tag from its marker quadrilaterals
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from common.quadrilateral import Quadrilateral, to_quadrilateral
from .angle import is_source_mirrored, resolve_rotation_angle
from .classifier import MarkerClassifier
from .confidence import ConfidenceScorer
from .normalizer import TagNormalizer
from .orientation import OrientationSearch
from .result import TagDetectionResult


class TagDetector:
    """
    Detects whether a tag is present in a collection of quadrilaterals.

    The quadrilaterals must come from a fixed-size sub-image that covers the
    suspected tag only (usually a perspective-unwarped crop of the camera
    frame). The tag carries long thin markers in its corners; their layout
    tells how the tag is rotated and whether it is mirrored.

    All size-derived tolerances and rotation transforms are computed once
    here; detection itself keeps no state between calls.
    """

    def __init__(
        self,
        image_size: Tuple[int, int],
        max_size_ratio: float = 0.08,
        min_size_ratio: float = 0.03,
        min_aspect: float = 2.0,
        max_aspect: float = 4.5,
        left_region_ratio: float = 0.3,
        top_region_ratio: float = 0.25,
        right_horizontal_ratio: float = 0.6,
        right_region_ratio: float = 0.7,
        bottom_region_ratio: float = 0.75,
        tolerance_ratio: float = 0.05,
        background: int = 255,
        debug: bool = False
    ):
        """
        Initialize the detector.

        Args:
            image_size: Size (width, height) of the sub-image candidates are extracted from
            max_size_ratio: Candidates wider and taller than this fraction are frames, not markers
            min_size_ratio: Candidates narrower or shorter than this fraction are noise
            min_aspect: Exclusive lower bound of a marker's long/short side ratio
            max_aspect: Exclusive upper bound of a marker's long/short side ratio
            left_region_ratio: Right limit of the left marker column (fraction of width)
            top_region_ratio: Bottom limit of the top marker row (fraction of height)
            right_horizontal_ratio: Left limit of a horizontal top-right marker (fraction of width)
            right_region_ratio: Left limit of the right marker column (fraction of width)
            bottom_region_ratio: Top limit of the bottom marker row (fraction of height)
            tolerance_ratio: Alignment tolerance between markers (fraction of image size)
            background: Gray value painted by the normalizer
            debug: Print detection trace
        """
        if image_size is None or len(image_size) != 2:
            raise ValueError("image_size must be a (width, height) pair")

        width, height = int(image_size[0]), int(image_size[1])
        if width <= 0 or height <= 0:
            raise ValueError(f"Tag image size must be positive, got {width}x{height}")

        self.image_size = (width, height)
        self.debug = debug

        self.classifier = MarkerClassifier(
            self.image_size,
            max_size_ratio=max_size_ratio,
            min_size_ratio=min_size_ratio,
            min_aspect=min_aspect,
            max_aspect=max_aspect
        )
        self.orientation_search = OrientationSearch(
            self.image_size,
            self.classifier,
            left_region_ratio=left_region_ratio,
            top_region_ratio=top_region_ratio,
            right_horizontal_ratio=right_horizontal_ratio,
            right_region_ratio=right_region_ratio,
            tolerance_ratio=tolerance_ratio,
            debug=debug
        )
        self.scorer = ConfidenceScorer(
            self.image_size,
            left_region_ratio=left_region_ratio,
            right_region_ratio=right_region_ratio,
            bottom_region_ratio=bottom_region_ratio,
            tolerance_ratio=tolerance_ratio
        )
        self.normalizer = TagNormalizer(self.image_size, background=background, debug=debug)

    @property
    def width(self) -> int:
        return self.image_size[0]

    @property
    def height(self) -> int:
        return self.image_size[1]

    def detect(self, candidates: Iterable, source_quadrilateral) -> TagDetectionResult:
        """
        Detect the tag and its orientation.

        Args:
            candidates: Quadrilaterals found inside the sub-image (Quadrilateral
                        instances or (4, 2) / (4, 1, 2) point arrays)
            source_quadrilateral: Quadrilateral in the original camera frame the
                                  sub-image was cut from; only used for angle and
                                  mirroring

        Returns:
            TagDetectionResult; is_tag_present is False if no layout matched
        """
        rects = [to_quadrilateral(c) for c in candidates]
        source = to_quadrilateral(source_quadrilateral)

        outcome = self.orientation_search.search(rects)
        if outcome is None:
            if self.debug:
                print(f"  ✗ No tag among {len(rects)} candidates")
            return TagDetectionResult.not_found()

        angle_index, match, classified = outcome

        rotation_angle = resolve_rotation_angle(source, angle_index, match.layout)
        is_flipped = is_source_mirrored(source)
        image_rotation = (angle_index + int(match.layout)) % 4
        confidence = self.scorer.score(classified, match)

        markers = tuple(
            candidate.rect if candidate.is_marker else Quadrilateral.empty()
            for candidate in classified
        )

        result = TagDetectionResult(
            is_tag_present=True,
            rotation_angle=rotation_angle,
            image_rotation=image_rotation,
            markers_rotation=image_rotation - angle_index,
            is_flipped_horizontally=is_flipped,
            markers=markers,
            confidence=confidence,
            layout=match.layout,
            angle_index=angle_index
        )

        if self.debug:
            print(f"  ✓ Tag found: angle {rotation_angle:.1f} deg, image rotation {image_rotation}, "
                  f"flipped {is_flipped}, confidence {confidence:.2f}")

        return result

    def normalize_image(
        self,
        image: np.ndarray,
        result: TagDetectionResult,
        remove_padding: bool = True,
        remove_markers: bool = True
    ) -> np.ndarray:
        """
        Rotate, unmirror and clean the sub-image according to a detection result.

        See TagNormalizer.normalize.
        """
        return self.normalizer.normalize(image, result, remove_padding, remove_markers)

    def normalize_markers(self, result: TagDetectionResult) -> Tuple[Quadrilateral, ...]:
        """Markers of a detection result moved into the normalized image frame."""
        return self.normalizer.normalize_markers(result)

    def detect_and_normalize(
        self,
        image: np.ndarray,
        candidates: Iterable,
        source_quadrilateral,
        remove_padding: bool = True,
        remove_markers: bool = True
    ) -> Tuple[TagDetectionResult, Optional[np.ndarray]]:
        """
        Convenience pipeline: detect, then normalize if a tag was found.

        Returns:
            (result, normalized image or None)
        """
        result = self.detect(candidates, source_quadrilateral)
        if not result.is_tag_present:
            return result, None
        return result, self.normalize_image(image, result, remove_padding, remove_markers)
