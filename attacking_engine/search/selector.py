"""
Candidate Selection

Picks the move to play from a multipv search:

    1. Normalize scores (mate → ±10000)
    2. Drop lines without a score or a principal variation
    3. Take the best normalized score as reference
    4. Keep lines with score >= min_centipawns and best - score <= max_cp_loss
    5. Score every kept line with the attacking evaluator on a hypothetical
       game (session history + the line, won by the side to move)
    6. Play the kept line with the highest attacking score; ties go to the
       line the engine ranked first
    7. If nothing is kept, play the engine's own best move

Evaluation failures only affect the line being evaluated: its attacking
score becomes MIN_ATTACKING_SCORE.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

import chess
import chess.pgn

from attacking_engine.evaluation.base import AttackingEvaluator, MIN_ATTACKING_SCORE
from attacking_engine.search.candidates import CandidateLine, NO_SCORE

if TYPE_CHECKING:
    from attacking_engine.session.options import EngineOptions

logger = logging.getLogger(__name__)


@dataclass
class ScoredCandidate:
    """A line that passed the centipawn filter, with its attacking score."""

    move: chess.Move
    centipawns: int
    loss: int
    """Centipawns below the best line"""
    attacking: float
    rank: int


@dataclass
class SelectionResult:
    """Chosen move plus everything needed to report how it was chosen."""

    move: Optional[chess.Move]
    candidates: List[ScoredCandidate] = field(default_factory=list)
    """Survivors, most attacking first"""

    @property
    def is_fallback(self) -> bool:
        """True when no line survived and the engine's own move was used."""
        return not self.candidates

    @property
    def score_cp(self) -> int:
        """Score reported to the GUI: attacking score mapped around 0, 0 on fallback."""
        if self.is_fallback:
            return 0
        return int((self.candidates[0].attacking - 0.5) * 100)


def build_hypothetical_game(
    board: chess.Board,
    pv: Sequence[chess.Move],
    our_color: chess.Color,
    our_name: str,
    opponent_name: str,
    headers: Optional[chess.pgn.Headers] = None,
) -> chess.pgn.Game:
    """
    Build the game that would result from playing pv in the current position.

    The pv is re-checked move by move and cut at the first illegal move.
    The game is labelled as won by our_color.

    Args:
        board: Current position with its move history
        pv: Principal variation starting at board
        our_color: Side the game is won by
        our_name: Header name for our side
        opponent_name: Header name for the other side
        headers: Session headers to start from (players and result are replaced)

    Returns:
        chess.pgn.Game from the session root through the (truncated) pv
    """
    board = board.copy()
    for move in pv:
        if not board.is_legal(move):
            logger.debug(f"PV truncated at illegal move {move.uci()}")
            break
        board.push(move)

    game = chess.pgn.Game.from_board(board)
    if headers is not None:
        for name, value in headers.items():
            game.headers[name] = value
    if our_color == chess.WHITE:
        game.headers["White"] = our_name
        game.headers["Black"] = opponent_name
        game.headers["Result"] = "1-0"
    else:
        game.headers["White"] = opponent_name
        game.headers["Black"] = our_name
        game.headers["Result"] = "0-1"
    return game


class CandidateSelector:
    """
    Re-ranks multipv lines by attacking score.

    Attributes:
        evaluator: Attacking evaluator used on kept lines
    """

    def __init__(self, evaluator: AttackingEvaluator):
        self.evaluator = evaluator

    def attacking_score(
        self,
        board: chess.Board,
        pv: Sequence[chess.Move],
        options: "EngineOptions",
        headers: Optional[chess.pgn.Headers] = None,
    ) -> float:
        """Attacking score of one line, MIN_ATTACKING_SCORE if evaluation fails."""
        game = build_hypothetical_game(board, pv, board.turn, options.our_name, options.opponent_name, headers)
        try:
            return self.evaluator.evaluate(game, options.our_name)
        except Exception as e:
            logger.warning(f"Attacking evaluation failed for {pv[0].uci()}: {e}")
            return MIN_ATTACKING_SCORE

    @staticmethod
    def filter_lines(lines: Sequence[CandidateLine], min_centipawns: int, max_cp_loss: int):
        """
        Apply the two centipawn thresholds.

        Returns:
            (kept usable lines in rank order, best normalized score)
        """
        usable = [line for line in lines if line.is_usable]
        if not usable:
            return [], NO_SCORE

        best = max(line.centipawns for line in usable)
        kept = [
            line
            for line in usable
            if line.centipawns >= min_centipawns and best - line.centipawns <= max_cp_loss
        ]
        return kept, best

    def select(
        self,
        board: chess.Board,
        lines: Sequence[CandidateLine],
        engine_best: Optional[chess.Move],
        options: "EngineOptions",
        headers: Optional[chess.pgn.Headers] = None,
    ) -> SelectionResult:
        """
        Choose a move from the lines of one search.

        Args:
            board: Searched position with its move history
            lines: Lines in the engine's rank order
            engine_best: Move the engine reported as best
            options: Thresholds and player names
            headers: Session headers carried into every hypothetical game

        Returns:
            SelectionResult; move is engine_best when no line survives
        """
        kept, best = self.filter_lines(lines, options.min_centipawns, options.max_cp_loss)

        candidates = []
        for line in kept:
            attacking = self.attacking_score(board, line.pv, options, headers)
            candidates.append(
                ScoredCandidate(
                    move=line.move,
                    centipawns=line.centipawns,
                    loss=best - line.centipawns,
                    attacking=attacking,
                    rank=line.rank,
                )
            )

        if not candidates:
            logger.info("No candidate passed the filter, using engine best move")
            return SelectionResult(move=engine_best)

        # sorted() is stable, so equal scores keep the engine's order
        candidates = sorted(candidates, key=lambda c: c.attacking, reverse=True)
        chosen = candidates[0]
        logger.info(
            f"Selected {chosen.move.uci()} (cp {chosen.centipawns}, attacking {chosen.attacking:.3f}) "
            f"from {len(candidates)}/{len(lines)} lines"
        )
        return SelectionResult(move=chosen.move, candidates=candidates)
