"""
Evaluation Module

Attacking evaluators score a whole game for one player. The selector
builds a hypothetical game per candidate line (history + the line, marked
as won by the side to move) and asks the evaluator how attacking it is.

Key Components:
    - AttackingEvaluator (ABC): Interface used by the selector
    - HeuristicAttackingEvaluator: Feature based default

Data Flow:
    chess.pgn.Game + player name → evaluator.evaluate() → float
                                                         (higher = more attacking)
"""

from attacking_engine.evaluation.base import AttackingEvaluator, MIN_ATTACKING_SCORE
from attacking_engine.evaluation.heuristic import HeuristicAttackingEvaluator

__all__ = ['AttackingEvaluator', 'HeuristicAttackingEvaluator', 'MIN_ATTACKING_SCORE']
