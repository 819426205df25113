"""
Session Module

State tracked across UCI commands.

Key Components:
    - GameSession: root position + applied moves + headers
    - EngineOptions / OPTION_SPECS: UCI options with defaults and ranges
    - SessionManager: position, ucinewgame and setoption handling,
      lazy start of the wrapped engine
"""

from attacking_engine.session.options import EngineOptions, OptionSpec, OPTION_SPECS, find_option
from attacking_engine.session.state import GameSession
from attacking_engine.session.manager import GatewayState, SessionManager

__all__ = [
    'EngineOptions',
    'OptionSpec',
    'OPTION_SPECS',
    'find_option',
    'GameSession',
    'GatewayState',
    'SessionManager',
]
