"""
Error taxonomy.

Every command handler raises one of these; the UCI loop turns them into
``info string`` diagnostics and keeps reading commands.
"""


class AttackingEngineError(Exception):
    """Base class for recoverable errors raised while handling a command."""


class ConfigurationError(AttackingEngineError):
    """Unknown option, out-of-range value or malformed setoption command."""


class PositionError(AttackingEngineError):
    """Unparseable FEN or an invalid move in a position command."""


class EngineUnavailable(AttackingEngineError):
    """The wrapped engine could not be launched or does not speak UCI."""


class SearchError(AttackingEngineError):
    """The wrapped engine failed while searching."""


class EngineTerminated(SearchError):
    """The wrapped engine process died; it has to be started again."""
