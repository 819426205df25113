"""
Attacking UCI Engine

A UCI proxy that sits between a chess GUI and a regular UCI engine
(Stockfish by default). It asks the wrapped engine for several principal
variations, keeps the ones that are close enough to the objective best,
and plays the move whose line looks the most attacking.

## Architecture

1. **session**: Game state and engine options
   - GameSession: current game replayed from a root position
   - EngineOptions: UCI options with defaults and bounds
   - SessionManager: position/new game/setoption handling, lazy engine start

2. **gateway**: Wrapped engine access
   - EngineGateway (ABC): open/configure/search/new_game/close
   - UciEngineGateway: python-chess SimpleEngine backed implementation

3. **evaluation**: Attacking score of a (hypothetical) game
   - AttackingEvaluator (ABC)
   - HeuristicAttackingEvaluator: feature based default

4. **search**: Candidate handling
   - SearchLimit: "go" parameters
   - CandidateLine: one multipv line reported by the wrapped engine
   - CandidateSelector: filter by centipawns, rank by attacking score

5. **uci**: Protocol dispatcher
   - UCIEngine: command loop

## Quick Start

```bash
python -m attacking_engine.uci /usr/bin/stockfish
```

Then register the command with a chess GUI (Arena, CuteChess, ...).
"""

__version__ = "0.1.0"
__author__ = "Attacking Engine contributors"
__license__ = "MIT"

from attacking_engine.exceptions import (
    AttackingEngineError,
    ConfigurationError,
    EngineTerminated,
    EngineUnavailable,
    PositionError,
    SearchError,
)

__all__ = [
    'AttackingEngineError',
    'ConfigurationError',
    'EngineTerminated',
    'EngineUnavailable',
    'PositionError',
    'SearchError',
]
