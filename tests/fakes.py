"""
In-memory stand-ins for the wrapped engine and the attacking evaluator.
"""

from typing import Dict, Iterable, List, Optional

import chess
import chess.engine

from attacking_engine.evaluation.base import AttackingEvaluator
from attacking_engine.exceptions import EngineTerminated, EngineUnavailable, SearchError
from attacking_engine.gateway.base import EngineGateway, SearchOutcome
from attacking_engine.search.candidates import CandidateLine


def make_line(rank: int, score: Optional[chess.engine.Score], pv: Iterable[str]) -> CandidateLine:
    """CandidateLine from UCI move strings."""
    return CandidateLine(rank=rank, score=score, pv=[chess.Move.from_uci(m) for m in pv])


class FakeGateway(EngineGateway):
    """Records every call and returns a canned SearchOutcome."""

    def __init__(
        self,
        outcome: Optional[SearchOutcome] = None,
        fail_open: bool = False,
        fail_search: bool = False,
        crash_search: bool = False,
        open_error: Optional[Exception] = None,
        configure_error: Optional[Exception] = None,
    ):
        self.outcome = outcome if outcome is not None else SearchOutcome()
        self.fail_open = fail_open
        self.fail_search = fail_search
        self.crash_search = crash_search
        self.open_error = open_error
        self.configure_error = configure_error
        self.opened_with: List[str] = []
        self.configured: List[tuple] = []
        self.searches: List[tuple] = []
        self.new_games = 0
        self.closed = False

    def open(self, path):
        if self.fail_open:
            raise EngineUnavailable(f"Cannot start engine {path!r}")
        if self.open_error is not None:
            raise self.open_error
        self.opened_with.append(path)
        self.name = "FakeFish"
        self.author = "Tester"

    def configure(self, name, value):
        if self.configure_error is not None:
            raise self.configure_error
        self.configured.append((name, value))

    def search(self, board, limit, multipv):
        self.searches.append((board.fen(), limit, multipv))
        if self.fail_search:
            raise SearchError("Engine failed during search")
        if self.crash_search:
            raise EngineTerminated("Engine terminated during search")
        return self.outcome

    def new_game(self):
        self.new_games += 1

    def close(self):
        self.closed = True


class ScriptedEvaluator(AttackingEvaluator):
    """
    Returns a fixed score per candidate, keyed by the first move after
    the first base_plies moves of the game.
    """

    def __init__(self, scores: Dict[str, float], base_plies: int = 0, failing: Iterable[str] = ()):
        self.scores = scores
        self.base_plies = base_plies
        self.failing = set(failing)
        self.calls = []

    def evaluate(self, game, player_name):
        self.calls.append((game, player_name))
        first = list(game.mainline_moves())[self.base_plies].uci()
        if first in self.failing:
            raise RuntimeError(f"cannot score {first}")
        return self.scores[first]
