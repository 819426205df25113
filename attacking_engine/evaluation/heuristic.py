"""
Heuristic Attacking Evaluation

Default attacking scorer. It replays the game and, for each move of the
scored player, records a few features that attacking play tends to show:

    - checks: the move gives check
    - captures: the move captures something
    - king pressure: share of the enemy king zone attacked after the move
    - advanced pieces: share of our minor/major pieces in the enemy half
    - daring: the moved piece lands on a square the opponent attacks

Feature means are combined with a weight vector and squashed with a
logistic function, so the result lies in (0, 1).

Only the player's last ``window`` moves count; in a long game the
candidate continuation would otherwise barely move the average.
"""

from typing import List, Optional

import chess
import chess.pgn
import numpy as np

from attacking_engine.evaluation.base import AttackingEvaluator

FEATURE_NAMES = ("checks", "captures", "king_pressure", "advanced_pieces", "daring")

DEFAULT_WEIGHTS = np.array([2.0, 1.0, 3.0, 2.0, 1.0], dtype=np.float32)
DEFAULT_BIAS = -1.5

WINNING_RESULT = {chess.WHITE: "1-0", chess.BLACK: "0-1"}


def _king_zone(board: chess.Board, color: chess.Color) -> chess.SquareSet:
    king = board.king(color)
    if king is None:
        return chess.SquareSet()
    return chess.SquareSet(chess.BB_KING_ATTACKS[king] | chess.BB_SQUARES[king])


def _in_enemy_half(square: chess.Square, color: chess.Color) -> bool:
    rank = chess.square_rank(square)
    return rank >= 4 if color == chess.WHITE else rank <= 3


def move_features(board: chess.Board, move: chess.Move) -> List[float]:
    """
    Attacking features of one move.

    Args:
        board: Position before the move (left unchanged)
        move: Legal move for the side to move

    Returns:
        One value per FEATURE_NAMES entry, each in [0, 1]
    """
    us = board.turn
    gives_check = board.gives_check(move)
    is_capture = board.is_capture(move)

    board.push(move)
    try:
        zone = _king_zone(board, not us)
        attacked = sum(1 for square in zone if board.is_attacked_by(us, square))
        king_pressure = attacked / len(zone) if zone else 0.0

        pieces = [
            square
            for piece_type in (chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN)
            for square in board.pieces(piece_type, us)
        ]
        advanced = sum(1 for square in pieces if _in_enemy_half(square, us))
        advanced_share = advanced / len(pieces) if pieces else 0.0

        daring = board.is_attacked_by(not us, move.to_square)
    finally:
        board.pop()

    return [
        float(gives_check),
        float(is_capture),
        king_pressure,
        advanced_share,
        float(daring),
    ]


class HeuristicAttackingEvaluator(AttackingEvaluator):
    """
    Feature based attacking scorer.

    Attributes:
        weights: One weight per feature
        bias: Added before the logistic squash
        window: Number of the player's most recent moves to score (None = all)
    """

    def __init__(
        self,
        weights: Optional[np.ndarray] = None,
        bias: float = DEFAULT_BIAS,
        window: Optional[int] = 10,
    ):
        self.weights = np.asarray(weights if weights is not None else DEFAULT_WEIGHTS, dtype=np.float32)
        if self.weights.shape != (len(FEATURE_NAMES),):
            raise ValueError(f"Expected {len(FEATURE_NAMES)} weights, got shape {self.weights.shape}")
        self.bias = bias
        self.window = window

    def feature_matrix(self, game: chess.pgn.Game, color: chess.Color) -> np.ndarray:
        """Features of every move played by color, shape (n_moves, n_features)."""
        board = game.board()
        rows = []
        for move in game.mainline_moves():
            if board.turn == color:
                rows.append(move_features(board, move))
            board.push(move)

        if self.window is not None:
            rows = rows[-self.window:]
        return np.array(rows, dtype=np.float32).reshape(-1, len(FEATURE_NAMES))

    def evaluate(self, game: chess.pgn.Game, player_name: str) -> float:
        color = self.player_color(game, player_name)

        result = game.headers.get("Result")
        if result != WINNING_RESULT[color]:
            raise ValueError(f"{player_name} did not win this game (Result {result})")

        features = self.feature_matrix(game, color)
        if features.shape[0] == 0:
            raise ValueError(f"{player_name} has no moves in this game")

        activation = float(features.mean(axis=0) @ self.weights) + self.bias
        return float(1.0 / (1.0 + np.exp(-activation)))

    def __repr__(self) -> str:
        return f"HeuristicAttackingEvaluator(window={self.window})"
