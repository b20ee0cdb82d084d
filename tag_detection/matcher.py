"""
Template comparison of normalized tag images
"""

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np


@dataclass
class TagMatchResult:
    ok: bool
    score: float = -1.0


class TagMatcher:
    """
    Compares a normalized tag image against a reference tag image.

    Typical references are a stored tag or the normalized tag from the
    previous frame. Both images should come out of the normalizer with the
    same padding and marker settings.
    """

    def __init__(self, match_threshold: float = 0.8, binarize: bool = True):
        """
        Args:
            match_threshold: Minimum normalized correlation for a match
            binarize: Otsu-threshold both images before comparing
        """
        self.match_threshold = match_threshold
        self.binarize = binarize

    def _prepare(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        if image.dtype != np.uint8:
            image = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
        if self.binarize:
            _, image = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        return image

    def score(self, image: np.ndarray, reference: np.ndarray) -> float:
        """
        Normalized correlation between two tag images.

        The reference is resized to the image size when they differ (padding
        removal can leave slightly different crops).

        Returns:
            Score in [-1, 1]; a constant image (no structure) scores 0
        """
        query = self._prepare(image)
        tmpl = self._prepare(reference)

        if tmpl.shape != query.shape:
            tmpl = cv2.resize(tmpl, (query.shape[1], query.shape[0]), interpolation=cv2.INTER_NEAREST)

        if query.std() == 0 or tmpl.std() == 0:
            return 0.0

        return float(cv2.matchTemplate(query, tmpl, cv2.TM_CCOEFF_NORMED)[0, 0])

    def match(self, image: Optional[np.ndarray], reference: Optional[np.ndarray]) -> TagMatchResult:
        if image is None or reference is None or image.size == 0 or reference.size == 0:
            return TagMatchResult(False)

        score = self.score(image, reference)
        return TagMatchResult(score >= self.match_threshold, score)
