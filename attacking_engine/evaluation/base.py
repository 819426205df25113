"""
Abstract Attacking Evaluator Interface

An attacking evaluator looks at a finished (or hypothetical) game and
says how attacking one player's play was. The selector only needs this
single number, so scoring strategies are swappable.

Key Principles:
    1. The game must be labelled as won by the player being scored
       (Result header 1-0 or 0-1 matching the player's colour)
    2. The player is identified by name through the White/Black headers
    3. Higher = more attacking. Scores are usually in [0, 1] but are not clamped
    4. Evaluators raise on games they cannot score; callers decide the fallback
"""

from abc import ABC, abstractmethod

import chess
import chess.pgn

# Score used by callers when evaluation fails
MIN_ATTACKING_SCORE = 0.0


class AttackingEvaluator(ABC):
    """Abstract base class for attacking-play scorers."""

    @abstractmethod
    def evaluate(self, game: chess.pgn.Game, player_name: str) -> float:
        """
        Score how attacking player_name's play in game is.

        Args:
            game: PGN game whose headers name the players and the result
            player_name: Value of the White or Black header to score

        Returns:
            float: Attacking score, higher is more attacking

        Raises:
            ValueError: If the player is not in the game or did not win
        """
        pass

    def player_color(self, game: chess.pgn.Game, player_name: str) -> chess.Color:
        """
        Find which side player_name played.

        Raises:
            ValueError: If neither header matches
        """
        if game.headers.get("White") == player_name:
            return chess.WHITE
        if game.headers.get("Black") == player_name:
            return chess.BLACK
        raise ValueError(f"Player {player_name!r} not found in game headers")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
