"""
Search Module

Turns one "go" command into one move: parse the limits, collect the
wrapped engine's multipv lines and pick the most attacking acceptable one.

Key Components:
    - SearchLimit: go parameters, converted to chess.engine.Limit
    - CandidateLine: one multipv line and its normalized score
    - CandidateSelector: centipawn filter + attacking re-ranking
"""

from attacking_engine.search.candidates import CandidateLine, normalize_score, MATE_VALUE
from attacking_engine.search.limits import SearchLimit
from attacking_engine.search.selector import (
    CandidateSelector,
    ScoredCandidate,
    SelectionResult,
    build_hypothetical_game,
)

__all__ = [
    'CandidateLine',
    'normalize_score',
    'MATE_VALUE',
    'SearchLimit',
    'CandidateSelector',
    'ScoredCandidate',
    'SelectionResult',
    'build_hypothetical_game',
]
