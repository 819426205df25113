"""
Game Session

Holds the game the GUI is currently playing: a root position, the moves
played from it and the PGN headers. The current position is always the
root position with every applied move replayed on top of it.

A session is never edited in place by the protocol layer: "position" and
"ucinewgame" build a fresh session and swap it in.
"""

import datetime
from typing import Iterable, List, Optional

import chess
import chess.pgn

from attacking_engine.exceptions import PositionError

DEFAULT_EVENT = "UCI game"


class GameSession:
    """
    One game: root position + applied moves + headers.

    Attributes:
        board: Current position. Its move stack is the applied move list.
        headers: PGN headers describing the game
    """

    def __init__(self, board: Optional[chess.Board] = None, event: str = DEFAULT_EVENT):
        """
        Args:
            board: Root position (default: standard starting position).
                   Any move stack on it is discarded.
            event: PGN Event header
        """
        self.board = board.copy(stack=False) if board is not None else chess.Board()
        self.headers = chess.pgn.Headers(
            Event=event,
            Date=datetime.date.today().strftime("%Y.%m.%d"),
        )

    @classmethod
    def from_fen(cls, fen: str) -> "GameSession":
        """
        Start a session from a FEN string.

        Raises:
            PositionError: If the FEN cannot be parsed
        """
        try:
            board = chess.Board(fen)
        except ValueError as e:
            raise PositionError(f"Invalid FEN: {fen} ({e})") from e
        return cls(board)

    @property
    def moves(self) -> List[chess.Move]:
        return list(self.board.move_stack)

    def push_uci(self, token: str) -> chess.Move:
        """
        Apply one move given in UCI notation.

        Raises:
            PositionError: If the token is malformed or illegal here
        """
        try:
            move = self.board.parse_uci(token)
        except ValueError as e:
            raise PositionError(f"Invalid move: {token}") from e
        self.board.push(move)
        return move

    def apply_moves(self, tokens: Iterable[str]) -> int:
        """
        Apply moves in order, stopping at the first bad one.

        Moves applied before the bad token stay applied; the remaining
        tokens are dropped.

        Returns:
            Number of moves applied

        Raises:
            PositionError: For the first malformed or illegal token
        """
        applied = 0
        for token in tokens:
            self.push_uci(token)
            applied += 1
        return applied

    def __repr__(self) -> str:
        return f"GameSession(fen={self.board.fen()!r}, moves={len(self.board.move_stack)})"
