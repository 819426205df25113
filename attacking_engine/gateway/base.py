"""
Abstract Engine Gateway Interface

The proxy never talks to the wrapped engine directly. It goes through an
EngineGateway so that another engine backend (or a fake in tests) can be
dropped in without touching the dispatcher or the selector.

Contract:
    1. open() either succeeds or raises EngineUnavailable
    2. configure() is best effort: unsupported options are ignored
    3. search() blocks until the wrapped engine reports its best move
    4. search() may return fewer lines than requested, or unusable ones
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Union

import chess
import chess.engine

from attacking_engine.search.candidates import CandidateLine


@dataclass
class SearchOutcome:
    """Result of one multipv search."""

    lines: List[CandidateLine] = field(default_factory=list)
    """Lines in the engine's rank order"""

    best_move: Optional[chess.Move] = None
    """Move the engine itself would play, None if it reported none"""


class EngineGateway(ABC):
    """
    Handle to a wrapped UCI engine.

    Attributes:
        name: Engine's self-reported name (after open)
        author: Engine's self-reported author (after open)
    """

    name: str = "unknown"
    author: str = "unknown"

    @abstractmethod
    def open(self, path: str) -> None:
        """
        Launch the engine and complete the UCI handshake.

        Raises:
            EngineUnavailable: If the engine cannot be started
        """

    @abstractmethod
    def configure(self, name: str, value: Union[int, str]) -> None:
        """Pass an option through to the engine. Ignored if unsupported."""

    @abstractmethod
    def search(self, board: chess.Board, limit: chess.engine.Limit, multipv: int) -> SearchOutcome:
        """
        Run a multipv search on the board (including its move history).

        Raises:
            SearchError: If the engine fails during the search
            EngineTerminated: If the engine process died (it must be reopened)
        """

    @abstractmethod
    def new_game(self) -> None:
        """Tell the engine the next search belongs to a new game."""

    def close(self) -> None:
        """Release the engine. Default: nothing to release."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
