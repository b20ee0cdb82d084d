"""
Visualization of tag candidates, markers and detection results
"""

import cv2
import numpy as np
from typing import Iterable, List, Optional, Tuple

from common.quadrilateral import Quadrilateral, to_quadrilateral
from .result import TagDetectionResult


class TagVisualizer:
    """
    Class for drawing debug overlays of tag detection.

    Candidates are drawn thin, markers colored by orientation and the
    source quadrilateral with numbered corners, so corner order problems
    are visible at a glance.
    """

    def __init__(
        self,
        candidate_color: Tuple[int, int, int] = (160, 160, 160),  # Gray in BGR
        horizontal_color: Tuple[int, int, int] = (255, 100, 0),  # Blue in BGR
        vertical_color: Tuple[int, int, int] = (0, 200, 0),  # Green in BGR
        source_color: Tuple[int, int, int] = (255, 0, 255),  # Magenta in BGR
        label_color: Tuple[int, int, int] = (127, 255, 0),  # Spring green in BGR
        thickness: int = 2
    ):
        """
        Initialize the visualizer.

        Args:
            candidate_color: Color of non-marker candidates in BGR format
            horizontal_color: Color of horizontal markers in BGR format
            vertical_color: Color of vertical markers in BGR format
            source_color: Color of the source quadrilateral in BGR format
            label_color: Color of corner index labels in BGR format
            thickness: Line thickness in pixels
        """
        self.candidate_color = candidate_color
        self.horizontal_color = horizontal_color
        self.vertical_color = vertical_color
        self.source_color = source_color
        self.label_color = label_color
        self.thickness = thickness

    def _to_bgr(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        return image.copy()

    def _draw_quad(self, image: np.ndarray, quad: Quadrilateral, color: Tuple[int, int, int], thickness: int):
        pts = np.round(quad.points).astype(np.int32).reshape(-1, 1, 2)
        cv2.polylines(image, [pts], True, color, thickness)

    def _draw_corner_labels(self, image: np.ndarray, quad: Quadrilateral):
        for index, corner in enumerate(quad.points):
            point = tuple(int(round(v)) for v in corner)
            cv2.circle(image, point, 5, self.source_color, self.thickness)
            cv2.putText(
                image,
                str(index),
                point,
                cv2.FONT_HERSHEY_PLAIN,
                1.5,
                self.label_color,
                self.thickness
            )

    def visualize(
        self,
        image: np.ndarray,
        candidates: Optional[Iterable] = None,
        markers: Optional[Iterable[Quadrilateral]] = None,
        source: Optional[Quadrilateral] = None
    ) -> Optional[np.ndarray]:
        """
        Draw candidates, markers and the source quadrilateral.

        Markers must be in the same frame as the image: raw result markers
        belong to the winning hypothesis frame, TagDetector.normalize_markers
        moves them into the normalized image frame.

        Args:
            image: Grayscale or BGR image
            candidates: Candidate quadrilaterals (drawn thin)
            markers: Marker slots, empty slots are skipped
            source: Quadrilateral to draw with numbered corners

        Returns:
            BGR copy with overlays, or None if image is None
        """
        if image is None:
            return None

        result = self._to_bgr(image)

        if candidates is not None:
            for candidate in candidates:
                self._draw_quad(result, to_quadrilateral(candidate), self.candidate_color, 1)

        if markers is not None:
            for marker in markers:
                if marker.is_empty:
                    continue
                color = self.horizontal_color if marker.width > marker.height else self.vertical_color
                self._draw_quad(result, marker, color, self.thickness)

        if source is not None:
            source = to_quadrilateral(source)
            self._draw_quad(result, source, self.source_color, self.thickness)
            self._draw_corner_labels(result, source)

        return result

    def describe(self, result: TagDetectionResult) -> List[str]:
        """Text lines summarizing a detection result."""
        if not result.is_tag_present:
            return ["No tag"]

        layout = result.layout.name if result.layout is not None else "?"
        return [
            f"Layout: {layout}",
            f"Angle: {result.rotation_angle:.1f}deg",
            f"Rotation: {result.image_rotation * 90}deg",
            f"Flipped: {'yes' if result.is_flipped_horizontally else 'no'}",
            f"Conf: {result.confidence:.2f}",
        ]

    def visualize_with_info(
        self,
        image: np.ndarray,
        result: TagDetectionResult,
        markers: Optional[Iterable[Quadrilateral]] = None,
        source: Optional[Quadrilateral] = None,
        font_scale: float = 0.4
    ) -> Optional[np.ndarray]:
        """
        Visualize markers with a text summary of the detection result.

        Args:
            image: Grayscale or BGR image
            result: Detection result to describe
            markers: Marker slots in the image frame
            source: Optional source quadrilateral
            font_scale: Text size

        Returns:
            BGR image with visualization and information
        """
        visualized = self.visualize(image, markers=markers, source=source)
        if visualized is None:
            return None

        line_height = max(10, int(30 * font_scale))
        y_offset = line_height
        for i, text in enumerate(self.describe(result)):
            # White outline
            cv2.putText(
                visualized,
                text,
                (4, y_offset + i * line_height),
                cv2.FONT_HERSHEY_SIMPLEX,
                font_scale,
                (255, 255, 255),
                2,
                cv2.LINE_AA
            )
            # Black text
            cv2.putText(
                visualized,
                text,
                (4, y_offset + i * line_height),
                cv2.FONT_HERSHEY_SIMPLEX,
                font_scale,
                (0, 0, 0),
                1,
                cv2.LINE_AA
            )

        return visualized

    def create_side_by_side(
        self,
        original: np.ndarray,
        visualized: np.ndarray
    ) -> Optional[np.ndarray]:
        """
        Create an image with two images side by side.

        Grayscale inputs are converted to BGR; the second image is resized
        to the height of the first.

        Returns:
            Combined image
        """
        if original is None or visualized is None:
            return original if original is not None else visualized

        original = self._to_bgr(original)
        visualized = self._to_bgr(visualized)

        # Ensure both images have the same height
        if original.shape[0] != visualized.shape[0]:
            height = original.shape[0]
            width = int(visualized.shape[1] * height / visualized.shape[0])
            visualized = cv2.resize(visualized, (width, height), interpolation=cv2.INTER_NEAREST)

        return np.hstack([original, visualized])
