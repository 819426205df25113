"""
Unit Tests for the game session and the session manager.
"""

import chess
import chess.engine
import pytest

from attacking_engine.exceptions import ConfigurationError, EngineUnavailable, PositionError
from attacking_engine.session.manager import GatewayState, SessionManager
from attacking_engine.session.state import GameSession
from tests.fakes import FakeGateway


class TestGameSession:
    """Tests for GameSession."""

    def test_default_is_start_position(self):
        session = GameSession()

        assert session.board.fen() == chess.STARTING_FEN
        assert session.moves == []

    def test_replay(self):
        session = GameSession()
        session.apply_moves(["e2e4", "e7e5"])

        expected = chess.Board()
        expected.push_san("e4")
        expected.push_san("e5")

        assert session.board.fen() == expected.fen()
        assert [m.uci() for m in session.moves] == ["e2e4", "e7e5"]

    def test_illegal_move_stops_application(self):
        session = GameSession()

        with pytest.raises(PositionError, match="e7e4"):
            session.apply_moves(["e2e4", "e7e5", "g1f3", "e7e4", "b8c6"])

        assert [m.uci() for m in session.moves] == ["e2e4", "e7e5", "g1f3"]

    def test_garbage_move_token(self):
        session = GameSession()

        with pytest.raises(PositionError):
            session.push_uci("hello")

        assert session.moves == []

    def test_from_fen(self):
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

        session = GameSession.from_fen(fen)

        # python-chess writes "-" when no en passant capture is legal
        assert session.board.fen() == chess.Board(fen).fen()
        assert session.board.turn == chess.BLACK

    def test_invalid_fen(self):
        with pytest.raises(PositionError, match="Invalid FEN"):
            GameSession.from_fen("invalid_fen")

    def test_stack_of_given_board_is_dropped(self):
        board = chess.Board()
        board.push_san("e4")

        session = GameSession(board)

        assert session.moves == []
        assert session.board.root().fen() == board.fen()

    def test_headers(self):
        session = GameSession(event="Club match")

        assert session.headers["Event"] == "Club match"
        assert session.headers["Date"] != "????.??.??"


class TestSessionManager:
    """Tests for SessionManager."""

    @pytest.fixture
    def gateway(self):
        return FakeGateway()

    @pytest.fixture
    def manager(self, gateway):
        return SessionManager(lambda: gateway)

    def test_starts_uninitialized(self, manager, gateway):
        assert manager.gateway_state is GatewayState.UNINITIALIZED
        assert gateway.opened_with == []

    def test_ensure_gateway_opens_once(self, manager, gateway):
        manager.ensure_gateway()
        manager.ensure_gateway()

        assert gateway.opened_with == ["stockfish"]
        assert manager.is_ready

    def test_ensure_gateway_forwards_deferred_options(self, manager, gateway):
        manager.set_option("Hash", "64")
        manager.set_option("Threads", "2")
        assert gateway.configured == [], "Nothing is forwarded before the engine runs"

        manager.ensure_gateway()

        assert ("Hash", 64) in gateway.configured
        assert ("Threads", 2) in gateway.configured

    def test_option_forwarded_when_ready(self, manager, gateway):
        manager.ensure_gateway()
        gateway.configured.clear()

        manager.set_option("hash", "128")

        assert gateway.configured == [("Hash", 128)]

    def test_threshold_not_forwarded(self, manager, gateway):
        manager.ensure_gateway()
        gateway.configured.clear()

        manager.set_option("MaxCpLoss", "10")

        assert gateway.configured == []
        assert manager.options.max_cp_loss == 10

    def test_engine_change_restarts_gateway(self):
        gateways = []

        def factory():
            gateways.append(FakeGateway())
            return gateways[-1]

        manager = SessionManager(factory)
        manager.ensure_gateway()

        manager.set_option("Engine", "/opt/engines/komodo")

        assert len(gateways) == 2
        assert gateways[0].closed
        assert gateways[1].opened_with == ["/opt/engines/komodo"]
        assert manager.gateway is gateways[1]

    def test_failed_start_stays_uninitialized(self):
        manager = SessionManager(lambda: FakeGateway(fail_open=True))

        with pytest.raises(EngineUnavailable):
            manager.ensure_gateway()

        assert manager.gateway_state is GatewayState.UNINITIALIZED
        assert manager.gateway is None

    def test_retry_after_failed_start(self):
        attempts = [FakeGateway(fail_open=True), FakeGateway()]
        manager = SessionManager(lambda: attempts.pop(0))

        with pytest.raises(EngineUnavailable):
            manager.ensure_gateway()
        manager.ensure_gateway()

        assert manager.is_ready

    def test_unknown_option_does_not_mutate(self, manager):
        before = manager.options.as_dict()

        with pytest.raises(ConfigurationError):
            manager.set_option("Ponder", "true")

        assert manager.options.as_dict() == before

    def test_set_start_position_replaces_session(self, manager):
        old = manager.session

        manager.set_start_position(None, ["e2e4"])

        assert manager.session is not old
        assert [m.uci() for m in manager.session.moves] == ["e2e4"]

    def test_set_start_position_keeps_partial_moves(self, manager):
        with pytest.raises(PositionError):
            manager.set_start_position(None, ["e2e4", "e2e4", "d7d5"])

        assert [m.uci() for m in manager.session.moves] == ["e2e4"]

    def test_invalid_fen_keeps_old_session(self, manager):
        manager.set_start_position(None, ["e2e4"])
        old = manager.session

        with pytest.raises(PositionError):
            manager.set_start_position("not a fen", [])

        assert manager.session is old

    def test_reset_game_is_idempotent(self, manager):
        manager.set_start_position(None, ["e2e4", "e7e5"])

        manager.reset_game()
        once = manager.session.board.fen()
        manager.reset_game()

        assert once == manager.session.board.fen() == chess.STARTING_FEN

    def test_reset_game_notifies_ready_gateway(self, manager, gateway):
        manager.reset_game()
        assert gateway.new_games == 0, "No engine running, nothing to notify"

        manager.ensure_gateway()
        manager.reset_game()

        assert gateway.new_games == 1

    def test_shutdown(self, manager, gateway):
        manager.ensure_gateway()

        manager.shutdown()

        assert gateway.closed
        assert manager.gateway_state is GatewayState.UNINITIALIZED

    def test_failed_configure_closes_gateway(self):
        gateway = FakeGateway(configure_error=chess.engine.EngineTerminatedError("engine process died"))
        manager = SessionManager(lambda: gateway)

        with pytest.raises(chess.engine.EngineTerminatedError):
            manager.ensure_gateway()

        assert gateway.closed, "Started engine must not be left running"
        assert manager.gateway is None
        assert manager.gateway_state is GatewayState.UNINITIALIZED
