"""
python-chess backed engine gateway.

Launches the wrapped engine with ``chess.engine.SimpleEngine.popen_uci``
and runs multipv searches through ``SimpleEngine.analysis``: the aggregated
multipv info becomes the candidate lines, and the final ``bestmove`` is
kept separately as the engine's own choice.

MultiPV is not set with configure(); python-chess manages that option and
sends it with every search.
"""

import asyncio
import logging
import shutil
from typing import Optional, Union

import chess
import chess.engine

from attacking_engine.exceptions import EngineTerminated, EngineUnavailable, SearchError
from attacking_engine.gateway.base import EngineGateway, SearchOutcome
from attacking_engine.search.candidates import CandidateLine

logger = logging.getLogger(__name__)


class UciEngineGateway(EngineGateway):
    """Gateway to a UCI engine subprocess."""

    def __init__(self, timeout: Optional[float] = 10.0):
        """
        Args:
            timeout: Seconds allowed for the UCI handshake
        """
        self.timeout = timeout
        self.engine: Optional[chess.engine.SimpleEngine] = None
        self.path: Optional[str] = None
        # Changing this key makes python-chess send ucinewgame before the next search
        self._game_key = object()

    def open(self, path: str) -> None:
        if not path:
            raise EngineUnavailable("No engine path configured")

        self.close()

        command = shutil.which(path) or path
        logger.info(f"Launching engine: {command}")

        try:
            self.engine = chess.engine.SimpleEngine.popen_uci(command, timeout=self.timeout)
        except (OSError, chess.engine.EngineError, chess.engine.EngineTerminatedError) as e:
            raise EngineUnavailable(f"Cannot start engine {path!r}: {e}") from e
        except asyncio.TimeoutError as e:
            raise EngineUnavailable(f"Engine {path!r} did not answer the uci handshake") from e

        self.path = path
        self.name = self.engine.id.get("name", path)
        self.author = self.engine.id.get("author", "unknown")
        logger.info(f"Engine ready: {self.name} by {self.author}")

    def configure(self, name: str, value: Union[int, str]) -> None:
        if self.engine is None:
            logger.warning(f"Cannot configure {name}: engine not started")
            return

        if name not in self.engine.options:
            logger.debug(f"Engine has no option {name}, ignored")
            return

        try:
            self.engine.configure({name: value})
            logger.debug(f"Engine option {name} = {value}")
        except chess.engine.EngineError as e:
            logger.warning(f"Engine rejected {name}={value}: {e}")

    def search(self, board: chess.Board, limit: chess.engine.Limit, multipv: int) -> SearchOutcome:
        if self.engine is None:
            raise SearchError("Engine not started")

        logger.debug(f"Search: multipv={multipv}, limit={limit}, fen={board.fen()}")

        try:
            with self.engine.analysis(board, limit, multipv=multipv, game=self._game_key) as analysis:
                best = analysis.wait()
                infos = analysis.multipv
        except chess.engine.EngineTerminatedError as e:
            raise EngineTerminated(f"Engine terminated during search: {e}") from e
        except chess.engine.EngineError as e:
            raise SearchError(f"Engine failed during search: {e}") from e

        lines = [
            CandidateLine.from_info(info.get("multipv", rank), info, board.turn)
            for rank, info in enumerate(infos, start=1)
        ]
        logger.debug(f"Search done: {len(lines)} lines, bestmove={best.move}")

        return SearchOutcome(lines=lines, best_move=best.move)

    def new_game(self) -> None:
        self._game_key = object()

    def close(self) -> None:
        if self.engine is None:
            return

        logger.info(f"Stopping engine: {self.name}")
        try:
            self.engine.quit()
        except chess.engine.EngineTerminatedError:
            logger.debug("Engine already terminated")
        finally:
            self.engine = None
