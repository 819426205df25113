"""
Session Manager

Owns the state that lives across UCI commands: the current game session,
the engine options and the wrapped engine gateway.

The gateway has an explicit two-state lifecycle:

    UNINITIALIZED --open() ok--> READY
    READY --Engine option changed--> UNINITIALIZED --open()--> ...

Anything that needs the engine calls ensure_gateway() first. A failed
start leaves the state UNINITIALIZED, so the next command retries.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from attacking_engine.gateway.base import EngineGateway
from attacking_engine.session.options import EngineOptions, OPTION_SPECS, OptionSpec
from attacking_engine.session.state import GameSession

logger = logging.getLogger(__name__)


class GatewayState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class SessionManager:
    """
    Position, new game and option handling.

    Attributes:
        session: Current game
        options: Current engine options
        gateway: Wrapped engine (usable only when gateway_state is READY)
        gateway_state: Lifecycle state of the gateway
    """

    def __init__(
        self,
        gateway_factory: Callable[[], EngineGateway],
        options: Optional[EngineOptions] = None,
    ):
        """
        Args:
            gateway_factory: Creates a fresh, unopened gateway
            options: Initial options (default: EngineOptions())
        """
        self.gateway_factory = gateway_factory
        self.options = options if options is not None else EngineOptions()
        self.session = GameSession()
        self.gateway: Optional[EngineGateway] = None
        self.gateway_state = GatewayState.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        return self.gateway_state is GatewayState.READY

    # ------------------------------------------------------------------
    # Gateway lifecycle
    # ------------------------------------------------------------------

    def ensure_gateway(self) -> EngineGateway:
        """
        Start the wrapped engine unless it is already running.

        Pass-through options (Hash, Threads) set while no engine was
        running are applied here.

        Raises:
            EngineUnavailable: If the engine cannot be started
        """
        if self.gateway_state is GatewayState.READY:
            return self.gateway

        gateway = self.gateway_factory()
        gateway.open(self.options.engine_path)

        try:
            for spec in OPTION_SPECS:
                if spec.forward_as is not None:
                    gateway.configure(spec.forward_as, getattr(self.options, spec.field))
        except Exception:
            logger.error("Applying options failed, closing engine")
            gateway.close()
            raise

        self.gateway = gateway
        self.gateway_state = GatewayState.READY
        logger.info(f"Initialized external engine: {gateway.name}")
        return gateway

    def shutdown(self) -> None:
        """Close the wrapped engine if it is running."""
        if self.gateway is not None:
            self.gateway.close()
        self.gateway = None
        self.gateway_state = GatewayState.UNINITIALIZED

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_start_position(self, fen: Optional[str], move_tokens: List[str]) -> GameSession:
        """
        Replace the session with a new one and apply moves.

        Args:
            fen: Root position, None for the standard starting position
            move_tokens: UCI moves to apply in order

        Returns:
            The new session

        Raises:
            PositionError: For an invalid FEN (session unchanged) or for the
                           first invalid move (session replaced, moves up to
                           that point applied)
        """
        session = GameSession.from_fen(fen) if fen is not None else GameSession()
        self.session = session

        session.apply_moves(move_tokens)
        logger.debug(f"Position: {session.board.fen()} after {len(session.moves)} moves")

        return session

    def reset_game(self) -> GameSession:
        """Start a new game at the standard starting position."""
        self.session = GameSession()
        if self.is_ready:
            self.gateway.new_game()
        logger.info("New game")
        return self.session

    def set_option(self, name: str, value: str) -> OptionSpec:
        """
        Validate and apply an option.

        Changing Engine restarts the wrapped engine. Hash and Threads are
        passed to a running engine immediately, otherwise on start.

        Raises:
            ConfigurationError: Unknown option or invalid value (nothing changed)
            EngineUnavailable: The new Engine path cannot be started
        """
        spec = self.options.set(name, value)
        new_value = getattr(self.options, spec.field)
        logger.info(f"Set {spec.uci_name} to: {new_value}")

        if spec.field == "engine_path":
            self.shutdown()
            self.ensure_gateway()
        elif spec.forward_as is not None and self.is_ready:
            self.gateway.configure(spec.forward_as, new_value)

        return spec

