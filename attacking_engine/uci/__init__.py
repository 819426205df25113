"""
UCI Protocol Interface

The GUI side of the proxy. The GUI talks UCI to us exactly as it would
to the wrapped engine; we forward searches and answer with our own pick.

Protocol Flow:
    GUI → "uci"
    Proxy → "id name Stockfish 17 as AttackingEngine"
    Proxy → "option name Internalmultipv type spin default 3 min 1 max 100"
    Proxy → "uciok"
    GUI → "isready"
    Proxy → "readyok"
    GUI → "position startpos moves e2e4"
    GUI → "go wtime 300000 btime 300000"
    Proxy → "info string PV: e7e5 (cp: -25, diff: 0, attacking: 0.412)"
    Proxy → "info depth 1 score cp -8"
    Proxy → "bestmove e7e5"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from attacking_engine.uci.interface import UCIEngine, setup_logger

__all__ = ['UCIEngine', 'setup_logger']
