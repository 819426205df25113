"""
Unit Tests for candidate lines and score normalization.
"""

import chess
import chess.engine
import pytest

from attacking_engine.search.candidates import CandidateLine, MATE_VALUE, NO_SCORE, normalize_score
from tests.fakes import make_line


class TestNormalizeScore:
    """Tests for mate/centipawn normalization."""

    @pytest.mark.parametrize("cp", [-350, -1, 0, 25, 900])
    def test_centipawns_pass_through(self, cp):
        assert normalize_score(chess.engine.Cp(cp)) == cp

    def test_mate_for_us(self):
        assert normalize_score(chess.engine.Mate(3)) == MATE_VALUE

    def test_mate_against_us(self):
        assert normalize_score(chess.engine.Mate(-2)) == -MATE_VALUE

    def test_mate_given(self):
        assert normalize_score(chess.engine.MateGiven) == MATE_VALUE

    def test_already_mated(self):
        """Mate(0): side to move is checkmated."""
        assert normalize_score(chess.engine.Mate(0)) == -MATE_VALUE


class TestCandidateLine:
    """Tests for CandidateLine."""

    def test_usable_line(self):
        line = make_line(1, chess.engine.Cp(10), ["e2e4", "e7e5"])

        assert line.is_usable
        assert line.move == chess.Move.from_uci("e2e4")
        assert line.centipawns == 10

    def test_line_without_pv_is_unusable(self):
        line = make_line(1, chess.engine.Cp(10), [])

        assert not line.is_usable
        assert line.move is None

    def test_line_without_score_is_unusable(self):
        line = make_line(2, None, ["e2e4"])

        assert not line.is_usable
        assert line.centipawns == NO_SCORE

    def test_from_info_uses_side_to_move(self):
        """Scores are taken from the searched side's point of view."""
        info = {
            "multipv": 1,
            "score": chess.engine.PovScore(chess.engine.Cp(40), chess.WHITE),
            "pv": [chess.Move.from_uci("e7e5")],
        }

        line = CandidateLine.from_info(1, info, chess.BLACK)

        assert line.centipawns == -40, "White +40 is Black -40"
        assert line.pv == [chess.Move.from_uci("e7e5")]

    def test_from_empty_info(self):
        line = CandidateLine.from_info(1, {}, chess.WHITE)

        assert line.score is None
        assert line.pv == []
        assert not line.is_usable
