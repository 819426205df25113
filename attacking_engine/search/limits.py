"""
Search limits parsed from the "go" command.

Times on the wire are milliseconds; python-chess wants seconds. The
configured move overhead is taken off both clocks so the proxy's own work
(attacking evaluation of every candidate) fits in the time the GUI gave.
"""

from dataclasses import dataclass
from typing import List, Optional

import chess.engine

# go parameters that map 1:1 onto SearchLimit attributes
_GO_PARAMETERS = frozenset((
    "depth", "nodes", "movetime", "wtime", "btime", "winc", "binc", "movestogo",
))


@dataclass
class SearchLimit:
    """How long the wrapped engine may search. All times in milliseconds."""

    depth: Optional[int] = None
    nodes: Optional[int] = None
    movetime: Optional[int] = None
    wtime: Optional[int] = None
    btime: Optional[int] = None
    winc: Optional[int] = None
    binc: Optional[int] = None
    movestogo: Optional[int] = None

    @classmethod
    def from_go(cls, tokens: List[str]) -> "SearchLimit":
        """
        Parse the parameters of a go command.

        Unknown tokens (infinite, ponder, searchmoves, ...) are skipped.
        A known keyword without a following value is ignored.

        Args:
            tokens: Tokens after "go" (e.g., ['wtime', '60000', 'btime', '60000'])

        Raises:
            ValueError: If a known keyword is followed by a non-number
        """
        limit = cls()
        i = 0
        while i < len(tokens):
            attribute = tokens[i].lower()
            if attribute in _GO_PARAMETERS and i + 1 < len(tokens):
                # Some GUIs send fractional or negative clock values
                setattr(limit, attribute, int(float(tokens[i + 1])))
                i += 2
            else:
                i += 1
        return limit

    @property
    def is_unbounded(self) -> bool:
        """True if nothing would ever stop the search."""
        return all(
            value is None
            for value in (self.depth, self.nodes, self.movetime, self.wtime, self.btime)
        )

    def to_engine_limit(self, move_overhead: int = 0, default_movetime: Optional[int] = None) -> chess.engine.Limit:
        """
        Build the python-chess limit for the wrapped engine.

        Args:
            move_overhead: Milliseconds subtracted from both clocks (never below zero)
            default_movetime: Used as movetime when the limit is unbounded

        Returns:
            chess.engine.Limit with times in seconds
        """
        movetime = self.movetime
        if self.is_unbounded and default_movetime is not None:
            movetime = default_movetime

        def seconds(ms: Optional[int], overhead: int = 0) -> Optional[float]:
            if ms is None:
                return None
            return max(0, ms - overhead) / 1000.0

        return chess.engine.Limit(
            time=seconds(movetime),
            depth=self.depth,
            nodes=self.nodes,
            white_clock=seconds(self.wtime, move_overhead),
            black_clock=seconds(self.btime, move_overhead),
            white_inc=seconds(self.winc),
            black_inc=seconds(self.binc),
            remaining_moves=self.movestogo,
        )
