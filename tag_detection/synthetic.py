"""
Synthetic tag images with known marker geometry
"""

from typing import List, Sequence, Tuple

import cv2
import numpy as np

from common.bounds import Bounds
from common.quadrilateral import Quadrilateral
from .normalizer import ROTATE_CODES
from .orientation import quarter_turn_matrix


def bar(x: float, y: float, w: float, h: float) -> Quadrilateral:
    """
    Axis-aligned rectangle as a quadrilateral.

    Corners run top-left, bottom-left, bottom-right, top-right, the order
    used for the unwarp target of a tag sub-image.
    """
    return Quadrilateral.from_corners((x, y), (x, y + h), (x + w, y + h), (x + w, y))


def upright_source(size: Tuple[int, int]) -> Quadrilateral:
    """Source quadrilateral of a sub-image that was cut out without rotation."""
    width, height = size
    return bar(0, 0, width, height)


def tag_markers(
    size: Tuple[int, int] = (128, 128),
    marker_length: int = 24,
    marker_thickness: int = 8,
    margin: int = 12
) -> List[Quadrilateral]:
    """
    Marker quadrilaterals of an upright tag.

    Returns:
        [top-left vertical, top-right vertical, bottom-left horizontal, bottom-right horizontal]
    """
    width, height = size
    markers = [
        bar(margin, margin, marker_thickness, marker_length),
        bar(width - margin - marker_thickness, margin, marker_thickness, marker_length),
        bar(margin, height - margin - marker_thickness, marker_length, marker_thickness),
        bar(width - margin - marker_length, height - margin - marker_thickness, marker_length, marker_thickness),
    ]

    frame = Bounds(0, 0, width, height)
    if not all(marker.bounding_box.isInside(frame) for marker in markers):
        raise ValueError(f"Markers do not fit into a {width}x{height} tag")
    return markers


def render_tag(
    size: Tuple[int, int] = (128, 128),
    marker_length: int = 24,
    marker_thickness: int = 8,
    margin: int = 12
) -> Tuple[np.ndarray, List[Quadrilateral]]:
    """
    Render an upright tag: black corner markers and an asymmetric glyph on white.

    Args:
        size: Image size (width, height)
        marker_length: Long side of a marker
        marker_thickness: Short side of a marker
        margin: Distance between the image edge and the markers

    Returns:
        (grayscale image, marker quadrilaterals as in tag_markers)
    """
    width, height = size
    image = np.full((height, width), 255, dtype=np.uint8)
    markers = tag_markers(size, marker_length, marker_thickness, margin)

    for marker in markers:
        box = marker.bounding_box_int
        image[box.top:box.bottom, box.left:box.right] = 0

    # "F"-like glyph, readable only in one orientation
    gx, gy = width // 3, height // 3
    gw, gh = width // 3, height // 3
    stroke = max(2, width // 32)
    cv2.rectangle(image, (gx, gy), (gx + stroke - 1, gy + gh - 1), 0, thickness=-1)
    cv2.rectangle(image, (gx, gy), (gx + gw - 1, gy + stroke - 1), 0, thickness=-1)
    cv2.rectangle(image, (gx, gy + gh // 2), (gx + gw * 2 // 3 - 1, gy + gh // 2 + stroke - 1), 0, thickness=-1)

    return image, markers


def rotate_quarter_turns(
    image: np.ndarray,
    shapes: Sequence[Quadrilateral],
    turns: int
) -> Tuple[np.ndarray, List[Quadrilateral]]:
    """
    Rotate a square tag image and its shapes clockwise by turns * 90 degrees.

    Shapes are moved with the same transform the detector uses for its
    hypotheses, so the rotated pair stays consistent.
    """
    height, width = image.shape[:2]
    turns %= 4
    if turns % 2 and width != height:
        raise ValueError("Quarter turns of synthetic tags need a square image")

    if turns == 0:
        return image.copy(), list(shapes)

    matrix = quarter_turn_matrix(turns, (width, height))
    return cv2.rotate(image, ROTATE_CODES[turns]), [shape.transform(matrix) for shape in shapes]


def mirror(image: np.ndarray, shapes: Sequence[Quadrilateral]) -> Tuple[np.ndarray, List[Quadrilateral]]:
    """Mirror a tag image and its shapes horizontally."""
    width = image.shape[1]
    return cv2.flip(image, 1), [shape.mirror_x(width) for shape in shapes]
