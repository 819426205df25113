"""
Engine Gateway Module

Everything the proxy needs from the wrapped engine goes through an
EngineGateway. The default implementation drives a UCI engine subprocess
with python-chess.

Data Flow:
    chess.Board + chess.engine.Limit → gateway.search() → SearchOutcome
                                                          (lines, best_move)
"""

from attacking_engine.gateway.base import EngineGateway, SearchOutcome
from attacking_engine.gateway.uci import UciEngineGateway

__all__ = ['EngineGateway', 'SearchOutcome', 'UciEngineGateway']
