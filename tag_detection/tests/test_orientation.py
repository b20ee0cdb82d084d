"""
Tests for quarter-turn hypothesis search
"""

import numpy as np
import pytest

from tag_detection.classifier import MarkerClassifier
from tag_detection.orientation import MarkerLayout, OrientationSearch, quarter_turn_matrix
from tag_detection.synthetic import bar, tag_markers


SIZE = (128, 128)


class TestQuarterTurnMatrix:
    """Tests for quarter_turn_matrix"""

    def test_clockwise_on_screen(self):
        matrix = quarter_turn_matrix(1, SIZE)
        point = matrix @ np.array([12.0, 12.0, 1.0])
        assert np.allclose(point, [116, 12])

    def test_half_turn(self):
        matrix = quarter_turn_matrix(2, SIZE)
        point = matrix @ np.array([12.0, 30.0, 1.0])
        assert np.allclose(point, [116, 98])

    def test_full_turn_is_identity(self):
        assert np.allclose(quarter_turn_matrix(4, SIZE), [[1, 0, 0], [0, 1, 0]])
        assert np.allclose(quarter_turn_matrix(0, SIZE), [[1, 0, 0], [0, 1, 0]])

    def test_negative_turns(self):
        assert np.allclose(quarter_turn_matrix(-1, SIZE), quarter_turn_matrix(3, SIZE))


class TestOrientationSearch:
    """Tests for OrientationSearch"""

    @pytest.fixture
    def search(self):
        return OrientationSearch(SIZE, MarkerClassifier(SIZE))

    def test_search_init(self, search):
        assert search.width == 128
        assert search.height == 128
        assert search.tolerance_height == pytest.approx(6.4)
        assert search.rotation_matrices[0] is None
        assert len(search.rotation_matrices) == 4

    @pytest.mark.parametrize("rects,layout", [
        ([bar(12, 12, 8, 24), bar(108, 12, 8, 24)], MarkerLayout.VV),
        ([bar(12, 12, 24, 8), bar(108, 12, 8, 24)], MarkerLayout.HV),
        ([bar(12, 12, 24, 8), bar(92, 12, 24, 8)], MarkerLayout.HH),
        ([bar(12, 12, 8, 24), bar(92, 12, 24, 8)], MarkerLayout.VH),
    ])
    def test_layouts_match_without_rotation(self, search, rects, layout):
        outcome = search.search(rects)
        assert outcome is not None
        assert outcome.angle_index == 0
        assert outcome.match.layout == layout
        assert (outcome.match.first_index, outcome.match.second_index) == (0, 1)

    def test_top_right_listed_first(self, search):
        outcome = search.search([bar(108, 12, 8, 24), bar(12, 12, 8, 24)])
        assert (outcome.match.first_index, outcome.match.second_index) == (1, 0)

    def test_misaligned_tops(self, search):
        # second marker starts 20 px lower, tolerance is 6.4 px
        assert search.match_layout(search.classifier.classify_all(
            [bar(12, 12, 8, 24), bar(108, 32, 8, 24)]
        )) is None

    def test_horizontal_top_right_too_far_left(self, search):
        # starts at x=60, horizontal top-right markers must start right of 76.8
        assert search.match_layout(search.classifier.classify_all(
            [bar(12, 12, 8, 24), bar(60, 12, 24, 8)]
        )) is None

    def test_first_pair_wins(self, search):
        rects = [bar(12, 12, 8, 24), bar(92, 12, 24, 8), bar(108, 12, 8, 24)]
        match = search.match_layout(search.classifier.classify_all(rects))
        assert match.layout == MarkerLayout.VH
        assert match.second_index == 1

    def test_partial_tag_found_at_quarter_turn(self, search):
        # only top-left vertical and bottom-left horizontal markers
        outcome = search.search([bar(12, 12, 8, 24), bar(12, 108, 24, 8)])
        assert outcome is not None
        assert outcome.angle_index == 1
        assert outcome.match.layout == MarkerLayout.VH
        assert (outcome.match.first_index, outcome.match.second_index) == (1, 0)

    def test_no_markers(self, search):
        assert search.search([bar(12, 12, 15, 15), bar(100, 12, 15, 15)]) is None
        assert search.search([]) is None

    def test_single_marker(self, search):
        assert search.search([bar(12, 12, 8, 24)]) is None

    def test_rotate_candidates(self, search):
        markers = tag_markers(SIZE)
        assert search.rotate_candidates(markers, 0) == markers

        rotated = search.rotate_candidates(markers, 1)
        assert rotated[0].min_x == pytest.approx(92)
        assert rotated[0].min_y == pytest.approx(12)
        assert rotated[0].width == pytest.approx(24)
        assert rotated[0].height == pytest.approx(8)

    def test_debug_output(self, capsys):
        search = OrientationSearch(SIZE, MarkerClassifier(SIZE), debug=True)
        search.search(tag_markers(SIZE))
        assert "layout VV" in capsys.readouterr().out
