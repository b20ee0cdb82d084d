"""
Tag detection result record
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from common.quadrilateral import Quadrilateral
from .orientation import MarkerLayout


@dataclass(frozen=True)
class TagDetectionResult:
    """
    Result of tag detection.

    Attributes:
        is_tag_present: True if a marker layout was found
        rotation_angle: Rotation of the tag in the camera frame, degrees in [0, 360)
        image_rotation: Clockwise quarter turns that put the sub-image upright (both vertical markers up)
        markers_rotation: Clockwise quarter turns that align `markers` with the rotated image
        is_flipped_horizontally: True if the tag is mirrored
        markers: Marker slots index-aligned with the candidates, empty where no marker was found
        confidence: 0.5 for the top marker pair, up to 0.85 with both bottom markers
        layout: Marker layout of the winning hypothesis
        angle_index: Winning quarter-turn hypothesis
    """
    is_tag_present: bool
    rotation_angle: float = 0.0
    image_rotation: int = 0
    markers_rotation: int = 0
    is_flipped_horizontally: bool = False
    markers: Tuple[Quadrilateral, ...] = field(default_factory=tuple)
    confidence: float = 0.0
    layout: Optional[MarkerLayout] = None
    angle_index: Optional[int] = None

    @classmethod
    def not_found(cls) -> "TagDetectionResult":
        return cls(is_tag_present=False)

    @property
    def marker_count(self) -> int:
        return sum(1 for marker in self.markers if not marker.is_empty)
