"""
Continuous rotation angle and mirroring from the source quadrilateral
"""

import math
from typing import Tuple

from common.quadrilateral import Quadrilateral
from .orientation import MarkerLayout


def edge_angles(quad: Quadrilateral) -> Tuple[float, float]:
    """
    Direction angles of edges P0->P1 and P0->P3 in degrees.

    Note the argument order: atan2 receives the X delta first, so 0 degrees
    points along +Y (down in image coordinates).

    Returns:
        (angle01, angle03)
    """
    p0, p1, p3 = quad.p0, quad.p1, quad.p3
    angle01 = math.degrees(math.atan2(float(p0[0] - p1[0]), float(p0[1] - p1[1])))
    angle03 = math.degrees(math.atan2(float(p0[0] - p3[0]), float(p0[1] - p3[1])))
    return angle01, angle03


def normalize_angle(angle: float) -> float:
    """Bring an angle into [0, 360)."""
    if angle < 0:
        angle += 360.0
    if angle >= 360.0:
        angle %= 360.0
    return angle


def resolve_rotation_angle(source: Quadrilateral, angle_index: int, layout: MarkerLayout) -> float:
    """
    Rotation angle of the tag in the camera frame.

    Args:
        source: Quadrilateral in the original frame the sub-image was unwarped from
        angle_index: Winning quarter-turn hypothesis (0-3)
        layout: Marker layout found for that hypothesis

    Returns:
        Angle in degrees, [0, 360)
    """
    rotated = source.relabel(angle_index)
    angle01, angle03 = edge_angles(rotated)

    if layout == MarkerLayout.VV:
        angle = 180.0 - angle01 if angle01 > 0 else 180.0 + abs(angle01)
    elif layout == MarkerLayout.VH:
        angle = 360.0 - angle03 if angle03 > 0 else abs(angle03)
    elif layout == MarkerLayout.HH:
        angle = 360.0 - angle01 if angle01 > 0 else -angle01
    else:
        angle = 180.0 - angle03

    return normalize_angle(angle)


def is_source_mirrored(source: Quadrilateral) -> bool:
    """
    Detect a mirrored tag from the corner order of the unrotated source quadrilateral.

    Only corners that appear swapped (P0 right of P2, or P1 right of P3, or
    the vertical equivalents) are examined further; the edge angle signs
    then tell whether the tag reads right-to-left.
    """
    p0, p1, p2, p3 = source.p0, source.p1, source.p2, source.p3
    flipped_h = p0[0] > p2[0] or p1[0] > p3[0]
    flipped_v = p0[1] > p2[1] or p1[1] < p3[1]

    if not (flipped_h or flipped_v):
        return False

    angle01, angle03 = edge_angles(source)
    return angle01 < 0 or angle03 > 0
