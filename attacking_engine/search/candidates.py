"""
Candidate lines reported by the wrapped engine.

A multipv search returns one line per root move: its rank, a score and a
principal variation. Scores are reduced to a single integer so lines can
be compared regardless of whether they carry centipawns or a mate.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import chess
import chess.engine

# Mate scores collapse to these values (centipawn-equivalent)
MATE_VALUE = 10000

# Lower than any normalized score
NO_SCORE = -2 * MATE_VALUE


def normalize_score(score: chess.engine.Score) -> int:
    """
    Convert a score to centipawns from the side to move's point of view.

    Mate for us (or mate already delivered) is +10000, being mated is
    -10000, centipawn scores pass through.

    Args:
        score: Relative score (python-chess Cp, Mate or MateGiven)

    Returns:
        Centipawn-equivalent integer
    """
    if score == chess.engine.MateGiven:
        return MATE_VALUE
    if score.is_mate():
        return MATE_VALUE if score.mate() > 0 else -MATE_VALUE
    return score.score()


@dataclass
class CandidateLine:
    """One multipv line."""

    rank: int
    """1-based multipv index as reported by the engine"""

    score: Optional[chess.engine.Score]
    """Score relative to the side to move, None if the engine sent none"""

    pv: List[chess.Move] = field(default_factory=list)
    """Principal variation starting from the searched position"""

    @property
    def is_usable(self) -> bool:
        """A line can only be played if it has a score and at least one move."""
        return self.score is not None and len(self.pv) > 0

    @property
    def move(self) -> Optional[chess.Move]:
        return self.pv[0] if self.pv else None

    @property
    def centipawns(self) -> int:
        if self.score is None:
            return NO_SCORE
        return normalize_score(self.score)

    @classmethod
    def from_info(cls, rank: int, info: chess.engine.InfoDict, turn: chess.Color) -> "CandidateLine":
        """Build a line from a python-chess info dictionary."""
        pov_score = info.get("score")
        return cls(
            rank=rank,
            score=pov_score.pov(turn) if pov_score is not None else None,
            pv=list(info.get("pv", [])),
        )
