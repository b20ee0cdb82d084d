"""
Tests for marker classification
"""

import pytest

from tag_detection.classifier import ClassifiedCandidate, MarkerClassifier, markers_present
from tag_detection.synthetic import bar
from common.quadrilateral import Quadrilateral


class TestMarkerClassifier:
    """Tests for MarkerClassifier"""

    @pytest.fixture
    def classifier(self):
        # 256 px: size filter keeps shapes between 7.68 px and 20.48 px on the short side
        return MarkerClassifier((256, 256))

    def test_classifier_init(self):
        classifier = MarkerClassifier((128, 64))
        assert classifier.width == 128
        assert classifier.height == 64
        assert classifier.max_size_ratio == 0.08
        assert classifier.min_size_ratio == 0.03
        assert classifier.min_aspect == 2.0
        assert classifier.max_aspect == 4.5

    def test_horizontal_marker(self, classifier):
        result = classifier.classify(bar(10, 10, 30, 10))
        assert result.is_horizontal_long_marker
        assert not result.is_vertical_long_marker
        assert result.is_marker

    def test_vertical_marker(self, classifier):
        result = classifier.classify(bar(10, 10, 10, 30))
        assert result.is_vertical_long_marker
        assert not result.is_horizontal_long_marker

    def test_square_is_not_marker(self, classifier):
        result = classifier.classify(bar(10, 10, 15, 15))
        assert not result.is_marker

    def test_too_large_is_not_marker(self, classifier):
        # both sides above 8% of the image: likely the tag frame
        result = classifier.classify(bar(10, 10, 60, 25))
        assert not result.is_marker

    def test_too_small_is_not_marker(self, classifier):
        result = classifier.classify(bar(10, 10, 30, 5))
        assert not result.is_marker

    def test_degenerate_is_not_marker(self, classifier):
        flat = Quadrilateral.from_corners((10, 10), (40, 10), (40, 10), (10, 10))
        assert not classifier.classify(flat).is_marker

    @pytest.mark.parametrize("width,height", [(40, 20), (45, 10)])
    def test_horizontal_ratio_bounds_are_exclusive(self, classifier, width, height):
        result = classifier.classify(bar(10, 10, width, height))
        assert not result.is_marker

    @pytest.mark.parametrize("width,height", [(20, 40), (10, 45)])
    def test_vertical_ratio_bounds_are_exclusive(self, classifier, width, height):
        result = classifier.classify(bar(10, 10, width, height))
        assert not result.is_marker

    @pytest.mark.parametrize("width,height", [(42, 20), (44, 10)])
    def test_ratios_just_inside_bounds(self, classifier, width, height):
        assert classifier.classify(bar(10, 10, width, height)).is_horizontal_long_marker
        assert classifier.classify(bar(10, 10, height, width)).is_vertical_long_marker

    def test_classify_all_keeps_order(self, classifier):
        rects = [bar(10, 10, 30, 10), bar(10, 10, 15, 15), bar(10, 10, 10, 30)]
        results = classifier.classify_all(rects)
        assert [r.rect for r in results] == rects
        assert [r.is_marker for r in results] == [True, False, True]

    def test_empty_slot(self, classifier):
        result = classifier.classify(Quadrilateral.empty())
        assert not result.is_marker


class TestMarkersPresent:
    """Tests for the marker presence precheck"""

    def _candidate(self, horizontal=False, vertical=False):
        return ClassifiedCandidate(bar(0, 0, 1, 1), horizontal, vertical)

    def test_two_horizontal(self):
        assert markers_present([self._candidate(horizontal=True), self._candidate(horizontal=True)])

    def test_two_vertical(self):
        assert markers_present([self._candidate(vertical=True), self._candidate(vertical=True)])

    def test_one_of_each(self):
        assert markers_present([self._candidate(horizontal=True), self._candidate(vertical=True)])

    def test_single_marker(self):
        assert not markers_present([self._candidate(horizontal=True), self._candidate()])

    def test_no_candidates(self):
        assert not markers_present([])
