"""
Engine options exposed over UCI.

Each option has a default and, for spin options, a closed range. The
table drives both validation in ``setoption`` and the ``option name ...``
lines sent in reply to ``uci``.
"""

from dataclasses import dataclass, fields
from typing import Iterator, Optional, Union

from attacking_engine.exceptions import ConfigurationError


@dataclass(frozen=True)
class OptionSpec:
    """Description of one UCI option."""

    uci_name: str
    """Name as shown to the GUI"""

    field: str
    """Attribute on EngineOptions"""

    kind: str = "spin"
    """UCI option type: "spin" or "string" """

    minimum: Optional[int] = None
    maximum: Optional[int] = None

    forward_as: Optional[str] = None
    """Name of the wrapped engine's option this one is passed through to"""

    def parse(self, raw: str) -> Union[int, str]:
        """
        Convert and validate a raw setoption value.

        Raises:
            ConfigurationError: If the value is empty, not an integer or out of range
        """
        if self.kind == "string":
            if not raw:
                raise ConfigurationError(f"{self.uci_name} must not be empty")
            return raw

        try:
            value = int(raw)
        except ValueError as e:
            raise ConfigurationError(f"{self.uci_name} expects an integer, got {raw!r}") from e

        if not self.minimum <= value <= self.maximum:
            raise ConfigurationError(
                f"{self.uci_name} must be between {self.minimum} and {self.maximum}, got {value}"
            )
        return value


OPTION_SPECS = (
    OptionSpec("Engine", "engine_path", kind="string"),
    OptionSpec("Internalmultipv", "multipv", minimum=1, maximum=100),
    OptionSpec("Hash", "hash", minimum=1, maximum=100000, forward_as="Hash"),
    OptionSpec("Threads", "threads", minimum=1, maximum=1000, forward_as="Threads"),
    OptionSpec("MinCentipawns", "min_centipawns", minimum=-1000, maximum=1000),
    OptionSpec("MaxCpLoss", "max_cp_loss", minimum=0, maximum=10000),
    OptionSpec("MoveOverhead", "move_overhead", minimum=0, maximum=5000),
    OptionSpec("DefaultMovetime", "default_movetime", minimum=1, maximum=600000),
)

_SPECS_BY_NAME = {spec.uci_name.lower(): spec for spec in OPTION_SPECS}


def find_option(name: str) -> Optional[OptionSpec]:
    """Case-insensitive lookup of an option by its UCI name."""
    return _SPECS_BY_NAME.get(name.lower())


@dataclass
class EngineOptions:
    """Tunable parameters of the proxy."""

    # Wrapped engine
    engine_path: str = "stockfish"
    """Path or command name of the wrapped UCI engine"""

    multipv: int = 3
    """Number of lines requested from the wrapped engine"""

    hash: int = 4
    """Hash size in MB, passed through"""

    threads: int = 1
    """Search threads, passed through"""

    # Candidate filter
    min_centipawns: int = -20
    """Lines scoring below this are never played"""

    max_cp_loss: int = 50
    """Lines more than this many centipawns below the best line are never played"""

    # Time management
    move_overhead: int = 50
    """Milliseconds shaved off both clocks before searching"""

    default_movetime: int = 1000
    """Milliseconds to search when "go" carries no limit"""

    # Names written into the headers of hypothetical games
    our_name: str = "AttackingEngine"
    opponent_name: str = "Opponent"

    def __post_init__(self):
        """Validate configuration after initialization."""
        for spec in OPTION_SPECS:
            spec.parse(str(getattr(self, spec.field)))

    def set(self, name: str, raw: str) -> OptionSpec:
        """
        Set an option by UCI name.

        Nothing is changed unless the name is known and the value valid.

        Returns:
            The spec of the option that was set

        Raises:
            ConfigurationError: Unknown name or invalid value
        """
        spec = find_option(name)
        if spec is None:
            raise ConfigurationError(f"Unknown option: {name}")

        setattr(self, spec.field, spec.parse(raw))
        return spec

    def uci_lines(self) -> Iterator[str]:
        """Yield the ``option name ...`` lines for the handshake."""
        for spec in OPTION_SPECS:
            value = getattr(self, spec.field)
            if spec.kind == "string":
                yield f"option name {spec.uci_name} type string default {value}"
            else:
                yield (
                    f"option name {spec.uci_name} type spin default {value} "
                    f"min {spec.minimum} max {spec.maximum}"
                )

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
