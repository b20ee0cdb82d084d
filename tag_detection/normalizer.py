"""
Canonical tag image: upright, unmirrored, optionally de-padded and marker-free
"""

from typing import Sequence, Tuple

import cv2
import numpy as np

from common.quadrilateral import Quadrilateral
from .orientation import quarter_turn_matrix
from .result import TagDetectionResult


ROTATE_CODES = {
    1: cv2.ROTATE_90_CLOCKWISE,
    2: cv2.ROTATE_180,
    3: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


class TagNormalizer:
    """
    Rewrites a tag sub-image into its canonical form.

    Every step returns a new array; the caller's image is never modified.
    """

    def __init__(
        self,
        image_size: Tuple[int, int],
        background: int = 255,
        edge_ratio: float = 0.1,
        marker_margin: int = 5,
        debug: bool = False
    ):
        """
        Args:
            image_size: Sub-image size (width, height)
            background: Gray value used for exposed corners and erased areas
            edge_ratio: Markers closer than this fraction of the image size to an edge define the padding
            marker_margin: Pixels added around the marker envelope when erasing markers
            debug: Print padding and envelope values
        """
        self.width, self.height = image_size
        self.background = background
        self.edge_ratio = edge_ratio
        self.marker_margin = marker_margin
        self.debug = debug

    def normalize_markers(self, result: TagDetectionResult) -> Tuple[Quadrilateral, ...]:
        """
        Move markers into the frame of the normalized image.

        Args:
            result: Detection result with markers in the winning hypothesis frame

        Returns:
            Markers rotated by result.markers_rotation quarter turns and mirrored
            when the tag is flipped. Empty slots pass through.
        """
        matrix = quarter_turn_matrix(result.markers_rotation, (self.width, self.height))

        normalized = []
        for marker in result.markers:
            if marker.is_empty:
                normalized.append(marker)
                continue

            moved = marker.transform(matrix)
            if result.is_flipped_horizontally:
                moved = moved.mirror_x(self.width)
            normalized.append(moved)

        return tuple(normalized)

    def rotate_image(self, image: np.ndarray, turns: int) -> np.ndarray:
        """
        Rotate clockwise by turns * 90 degrees keeping the image size.

        Square images (and half turns) are rotated losslessly; quarter turns of
        rectangular images are cropped to the original size with the exposed
        area filled with the background value.
        """
        turns %= 4
        if turns == 0:
            return image.copy()

        if turns == 2 or self.width == self.height:
            return cv2.rotate(image, ROTATE_CODES[turns])

        center = ((self.width - 1) / 2.0, (self.height - 1) / 2.0)
        matrix = cv2.getRotationMatrix2D(center, -90.0 * turns, 1.0)
        return cv2.warpAffine(
            image,
            matrix,
            (self.width, self.height),
            flags=cv2.INTER_NEAREST,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=self.background
        )

    def compute_padding(self, markers: Sequence[Quadrilateral]) -> int:
        """
        Border width between the image edge and the tag.

        The upstream crop is rarely centered on the tag. Markers close to an
        edge tell how far the tag starts from it; the largest such distance is
        used as a symmetric border.

        Args:
            markers: Markers in normalized image coordinates

        Returns:
            Padding in whole pixels
        """
        longest = max(self.width, self.height)
        min_edge = self.edge_ratio * longest
        max_edge = longest - min_edge

        padding = 0.0
        for marker in markers:
            if marker.is_empty:
                continue
            if marker.min_x < min_edge:
                padding = max(padding, marker.min_x)
            if marker.min_y < min_edge:
                padding = max(padding, marker.min_y)
            if marker.max_x > max_edge:
                padding = max(padding, self.width - marker.max_x)
            if marker.max_y > max_edge:
                padding = max(padding, self.height - marker.max_y)

        limit = (min(self.width, self.height) - 1) // 2
        return int(min(max(padding, 0.0), limit))

    def marker_envelope(self, markers: Sequence[Quadrilateral]) -> Tuple[int, int]:
        """
        Size of the area to erase at each corner.

        Returns:
            (narrow, wide): largest short side and largest long side of all
            markers, each grown by the marker margin
        """
        short_sides = [min(m.width, m.height) for m in markers if not m.is_empty]
        long_sides = [max(m.width, m.height) for m in markers if not m.is_empty]

        narrow = int(np.ceil(max(short_sides, default=0.0))) + self.marker_margin
        wide = int(np.ceil(max(long_sides, default=0.0))) + self.marker_margin
        return narrow, wide

    def _fill(self, image: np.ndarray, x: int, y: int, w: int, h: int):
        if w <= 0 or h <= 0:
            return
        cv2.rectangle(image, (x, y), (x + w - 1, y + h - 1), self.background, thickness=-1)

    def erase_markers(self, image: np.ndarray, padding: int, narrow: int, wide: int) -> np.ndarray:
        """
        Paint background over the four marker corners of the padded interior.

        Upright tags carry vertical markers at the top corners and horizontal
        markers at the bottom corners.
        """
        erased = image.copy()
        right = self.width - padding
        bottom = self.height - padding

        self._fill(erased, padding, padding, narrow, wide)
        self._fill(erased, right - narrow, padding, narrow, wide)
        self._fill(erased, padding, bottom - narrow, wide, narrow)
        self._fill(erased, right - wide, bottom - narrow, wide, narrow)

        return erased

    def blank_padding(self, image: np.ndarray, padding: int) -> np.ndarray:
        """Paint background over the border strips instead of cropping them."""
        blanked = image.copy()
        if padding <= 0:
            return blanked

        self._fill(blanked, 0, 0, self.width, padding)
        self._fill(blanked, 0, self.height - padding, self.width, padding)
        self._fill(blanked, 0, 0, padding, self.height)
        self._fill(blanked, self.width - padding, 0, padding, self.height)
        return blanked

    def crop_padding(self, image: np.ndarray, padding: int) -> np.ndarray:
        if padding <= 0:
            return image.copy()
        return image[padding:self.height - padding, padding:self.width - padding].copy()

    def normalize(
        self,
        image: np.ndarray,
        result: TagDetectionResult,
        remove_padding: bool = True,
        remove_markers: bool = True
    ) -> np.ndarray:
        """
        Produce the canonical tag image.

        Args:
            image: Single-channel sub-image of the configured size
            result: Positive detection result for this sub-image
            remove_padding: Crop the border around the tag
            remove_markers: Erase marker ink (and blank the border when not cropping)

        Returns:
            New image owned by the caller
        """
        if not result.is_tag_present:
            raise ValueError("Cannot normalize image: tag is not present in detection result")

        if image is None or image.ndim != 2:
            raise ValueError("Tag image must be a single-channel 2-D array")

        if image.shape != (self.height, self.width):
            raise ValueError(
                f"Tag image size {image.shape[1]}x{image.shape[0]} does not match "
                f"detector size {self.width}x{self.height}"
            )

        normalized = self.rotate_image(image, result.image_rotation)
        if result.is_flipped_horizontally:
            normalized = cv2.flip(normalized, 1)

        if not (remove_padding or remove_markers):
            return normalized

        markers = self.normalize_markers(result)
        padding = self.compute_padding(markers)
        narrow, wide = self.marker_envelope(markers)

        if self.debug:
            print(f"  📏 Padding: {padding}px, marker envelope: {narrow}x{wide}px")

        if remove_markers:
            normalized = self.erase_markers(normalized, padding, narrow, wide)
            if not remove_padding:
                normalized = self.blank_padding(normalized, padding)

        if remove_padding:
            normalized = self.crop_padding(normalized, padding)

        return normalized
