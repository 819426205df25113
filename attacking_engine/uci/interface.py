"""
UCI Protocol Implementation

This module implements the UCI side the GUI talks to. Searches are handed
to the wrapped engine through the gateway, and the returned multipv lines
go through the candidate selector before a move is sent back.

UCI Commands Supported:
    - uci: Identify engine, list options
    - setoption: Set an option
    - isready: Start the wrapped engine if needed, synchronization
    - ucinewgame: Start new game
    - position: Set board position
    - go: Search and answer with bestmove
    - stop: Accepted, no effect (searches are synchronous)
    - quit: Shutdown engine

Threading:
    - Single thread. A "go" blocks the command loop until the wrapped
      engine answers, so "stop" can only arrive after the search is over.

Error handling:
    - Handlers raise AttackingEngineError subclasses; process_command() is
      the one place that turns errors into "info string" lines.
    - "go" always answers with a bestmove, falling back to the engine's
      own move, the first legal move or 0000.

References:
    - UCI Protocol: https://www.chessprogramming.org/UCI
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, TextIO

import chess

from attacking_engine import __author__
from attacking_engine.evaluation.base import AttackingEvaluator
from attacking_engine.evaluation.heuristic import HeuristicAttackingEvaluator
from attacking_engine.exceptions import (
    AttackingEngineError,
    ConfigurationError,
    EngineTerminated,
    EngineUnavailable,
    PositionError,
    SearchError,
)
from attacking_engine.gateway.base import EngineGateway, SearchOutcome
from attacking_engine.gateway.uci import UciEngineGateway
from attacking_engine.search.limits import SearchLimit
from attacking_engine.search.selector import CandidateSelector, SelectionResult
from attacking_engine.session.manager import SessionManager
from attacking_engine.session.options import EngineOptions

ENGINE_NAME = "AttackingEngine"
NULL_MOVE = "0000"

DEFAULT_LOG_FILE = Path.home() / ".attacking_engine" / "engine.log"

logger = logging.getLogger(__name__)


def setup_logger(log_file: Optional[Path] = DEFAULT_LOG_FILE, debug=True):
    """
    Setup file-based logger for UCI debugging.

    stdout belongs to the protocol, so logs only go to a file.

    Args:
        log_file: Log file path, None disables logging output
        debug: If True, log at DEBUG level; otherwise INFO level

    Returns:
        Configured package logger
    """
    package_logger = logging.getLogger("attacking_engine")
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.handlers.clear()

    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return package_logger

    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)

    return package_logger


class UCIEngine:
    """
    UCI front end of the attacking proxy.

    Attributes:
        manager: Session, options and wrapped engine lifecycle
        selector: Picks the move among the wrapped engine's lines
        input_stream: Where commands are read from (default: stdin)
        output_stream: Where responses go (default: stdout)

    Methods:
        run: Main UCI command loop
        process_command: Handle one command line
        handle_uci, handle_setoption, handle_isready, handle_position,
        handle_go, handle_ucinewgame, handle_stop, handle_quit
    """

    def __init__(
        self,
        options: Optional[EngineOptions] = None,
        gateway_factory: Callable[[], EngineGateway] = UciEngineGateway,
        evaluator: Optional[AttackingEvaluator] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
    ):
        """
        Initialize the UCI front end. The wrapped engine is started lazily.

        Args:
            options: Initial options (default: EngineOptions())
            gateway_factory: Creates the wrapped engine gateway
            evaluator: Attacking evaluator (default: HeuristicAttackingEvaluator)
            input_stream: Command source (default: sys.stdin)
            output_stream: Response sink (default: sys.stdout)
        """
        self.manager = SessionManager(gateway_factory, options)
        self.selector = CandidateSelector(evaluator if evaluator else HeuristicAttackingEvaluator())
        self.input_stream = input_stream
        self.output_stream = output_stream

    @property
    def options(self) -> EngineOptions:
        return self.manager.options

    @property
    def board(self) -> chess.Board:
        return self.manager.session.board

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def send(self, line: str):
        """Write one protocol line and flush."""
        print(line, file=self.output_stream or sys.stdout, flush=True)
        logger.debug(f"<<< {line}")

    def info(self, text: str):
        """Write a diagnostic line."""
        self.send(f"info string {text}")

    # ------------------------------------------------------------------
    # Command loop
    # ------------------------------------------------------------------

    def run(self):
        """
        Main UCI command loop.

        Reads one command per line until "quit" or end of input, then
        shuts the wrapped engine down.
        """
        logger.info(f"=== {ENGINE_NAME} Started ===")
        stream = self.input_stream or sys.stdin

        try:
            while True:
                line = stream.readline()
                if not line:
                    logger.info("EOF received, shutting down")
                    break
                if not self.process_command(line):
                    break
        finally:
            self.manager.shutdown()
            logger.info(f"=== {ENGINE_NAME} Stopped ===")

    def process_command(self, line: str) -> bool:
        """
        Handle one command line.

        Any error is reported as an "info string" line; it never ends the loop.

        Args:
            line: Raw input line (e.g., "position startpos moves e2e4")

        Returns:
            False if the loop should stop (quit), True otherwise
        """
        command = line.strip()
        if not command:
            return True

        logger.debug(f">>> {command}")

        tokens = command.split()
        cmd = tokens[0].lower()

        try:
            if cmd == "uci":
                self.handle_uci()

            elif cmd == "setoption":
                self.handle_setoption(tokens)

            elif cmd == "isready":
                self.handle_isready()

            elif cmd == "ucinewgame":
                self.handle_ucinewgame()

            elif cmd == "position":
                self.handle_position(tokens)

            elif cmd == "go":
                self.handle_go(tokens)

            elif cmd == "stop":
                self.handle_stop()

            elif cmd == "quit":
                self.handle_quit()
                return False

            else:
                logger.debug(f"Unknown command: {command}")
                self.info(f"Unknown command: {tokens[0]}")

        except AttackingEngineError as e:
            logger.warning(f"{type(e).__name__}: {e}")
            self.info(str(e))
        except Exception as e:
            logger.error(f"Command error: {e}", exc_info=True)
            self.info(f"Error processing command: {e}")

        return True

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def handle_uci(self):
        """
        Handle 'uci' command - identify engine and list options.

        Response:
            id name <wrapped engine> as AttackingEngine
            id author <wrapped engine author> + <our authors>
            option name ... (one per option)
            uciok
        """
        logger.info("Handling: uci")

        name = ENGINE_NAME
        author = __author__
        try:
            gateway = self.manager.ensure_gateway()
            name = f"{gateway.name} as {ENGINE_NAME}"
            author = f"{gateway.author} + {__author__}"
        except EngineUnavailable as e:
            self.info(str(e))
        finally:
            # uciok is sent even when starting the engine raised
            self.send(f"id name {name}")
            self.send(f"id author {author}")
            for line in self.options.uci_lines():
                self.send(line)
            self.send("uciok")

    def handle_setoption(self, tokens: List[str]):
        """
        Handle 'setoption' command.

        Format:
            setoption name <name> value <value>

        Args:
            tokens: Command tokens (e.g., ['setoption', 'name', 'Hash', 'value', '64'])

        Raises:
            ConfigurationError: Malformed command, unknown option or bad value
            EngineUnavailable: New Engine path cannot be started
        """
        logger.info(f"Handling: setoption {' '.join(tokens[1:])}")

        params = tokens[1:]
        lowered = [token.lower() for token in params]

        if "name" not in lowered:
            raise ConfigurationError("Invalid setoption parameters")
        name_idx = lowered.index("name")

        if "value" not in lowered[name_idx + 1:]:
            raise ConfigurationError("Invalid setoption parameters")
        value_idx = lowered.index("value", name_idx + 1)

        if name_idx + 1 >= value_idx or value_idx + 1 >= len(params):
            raise ConfigurationError("Invalid setoption parameters")

        name = " ".join(params[name_idx + 1:value_idx])
        value = " ".join(params[value_idx + 1:])

        spec = self.manager.set_option(name, value)
        self.info(f"Set {spec.uci_name} to: {getattr(self.options, spec.field)}")

    def handle_isready(self):
        """
        Handle 'isready' command - start the wrapped engine, synchronize.

        Response:
            readyok (also when the engine could not be started)
        """
        logger.info("Handling: isready")

        try:
            self.manager.ensure_gateway()
        except EngineUnavailable as e:
            self.info(str(e))
        finally:
            self.send("readyok")

    def handle_ucinewgame(self):
        """Handle 'ucinewgame' command - reset the session."""
        logger.info("Handling: ucinewgame")
        self.manager.reset_game()

    def handle_position(self, tokens: List[str]):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position startpos moves e2e4 e7e5
            position fen <FEN string>
            position fen <FEN string> moves e2e4

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', 'e2e4'])

        Raises:
            PositionError: Bad position type, bad FEN or invalid move
        """
        logger.info(f"Handling: position {' '.join(tokens[1:])}")

        params = tokens[1:]
        if not params:
            logger.warning("Position command with insufficient arguments")
            return

        lowered = [token.lower() for token in params]
        moves_idx = lowered.index("moves") if "moves" in lowered else len(params)

        if lowered[0] == "startpos":
            fen = None
        elif lowered[0] == "fen":
            if moves_idx <= 1:
                raise PositionError("Invalid FEN")
            fen = " ".join(params[1:moves_idx])
        else:
            raise PositionError("Invalid position parameters")

        session = self.manager.set_start_position(fen, params[moves_idx + 1:])

        fen = session.board.fen()
        logger.info(f"Position updated: {fen[:60]}{'...' if len(fen) > 60 else ''}")

    def handle_go(self, tokens: List[str]):
        """
        Handle 'go' command - search, select, answer.

        Formats:
            go depth 12
            go movetime 5000
            go wtime 300000 btime 300000 winc 2000 binc 2000 movestogo 40

        Output:
            info string PV: ... (one per candidate)
            info depth 1 score cp <attacking score mapped to centipawns>
            bestmove <move>

        Args:
            tokens: Command tokens (e.g., ['go', 'depth', '5'])
        """
        logger.info(f"Handling: go {' '.join(tokens[1:])}")

        board = self.board.copy()

        if not any(board.legal_moves):
            self.info("No legal moves in this position")
            self.send(f"bestmove {NULL_MOVE}")
            return

        outcome: Optional[SearchOutcome] = None
        try:
            limit = SearchLimit.from_go(tokens[1:])
            gateway = self.manager.ensure_gateway()
            engine_limit = limit.to_engine_limit(self.options.move_overhead, self.options.default_movetime)

            outcome = gateway.search(board, engine_limit, self.options.multipv)
            result = self.selector.select(
                board, outcome.lines, outcome.best_move, self.options, headers=self.manager.session.headers
            )
            self.report_selection(result)

            if result.move is None:
                raise SearchError("Engine reported no best move")
            if not board.is_legal(result.move):
                raise SearchError(f"Selected move {result.move.uci()} is illegal")
            move = result.move

        except Exception as e:
            logger.error(f"Search error: {e}", exc_info=True)
            self.info(f"Error during search: {e}")
            if isinstance(e, EngineTerminated):
                # Next command that needs the engine starts a new one
                self.manager.shutdown()
            move = self._fallback_move(board, outcome)
            if move is not None:
                logger.warning(f"Using fallback move: {move.uci()}")

        self.send(f"bestmove {move.uci() if move is not None else NULL_MOVE}")

    def report_selection(self, result: SelectionResult):
        """Emit the diagnostic lines describing a selection."""
        for candidate in sorted(result.candidates, key=lambda c: c.rank):
            self.info(
                f"PV: {candidate.move.uci()} (cp: {candidate.centipawns}, "
                f"diff: {candidate.loss}, attacking: {candidate.attacking:.3f})"
            )

        if result.is_fallback:
            self.info("No valid candidates found, using best move from engine")
        else:
            chosen = result.candidates[0]
            self.info(f"Selected move: {chosen.move.uci()} (attacking score: {chosen.attacking:.3f})")

        self.send(f"info depth 1 score cp {result.score_cp}")

    def _fallback_move(self, board: chess.Board, outcome: Optional[SearchOutcome]) -> Optional[chess.Move]:
        """Engine's own best move if it is legal, else the first legal move."""
        if outcome is not None and outcome.best_move is not None and board.is_legal(outcome.best_move):
            return outcome.best_move
        return next(iter(board.legal_moves), None)

    def handle_stop(self):
        """
        Handle 'stop' command.

        Searches run synchronously, so by the time "stop" is read the search
        has already answered. Accepted and ignored.
        """
        logger.info("Handling: stop (no search in progress)")

    def handle_quit(self):
        """Handle 'quit' command - shutdown the wrapped engine."""
        logger.info("Handling: quit - shutting down engine")
        self.manager.shutdown()
