"""
Tag Detection Module

Isolated module for fiducial tag orientation detection.
Finds the rotation and mirroring of a tag from its corner markers and
rewrites the tag image into an upright, marker-free canonical form.
"""

from .classifier import ClassifiedCandidate, MarkerClassifier
from .detector import TagDetector
from .matcher import TagMatcher, TagMatchResult
from .normalizer import TagNormalizer
from .orientation import MarkerLayout
from .result import TagDetectionResult
from .visualizer import TagVisualizer

__all__ = [
    'ClassifiedCandidate',
    'MarkerClassifier',
    'MarkerLayout',
    'TagDetectionResult',
    'TagDetector',
    'TagMatcher',
    'TagMatchResult',
    'TagNormalizer',
    'TagVisualizer',
]
