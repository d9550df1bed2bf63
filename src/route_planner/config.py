"""
Configuration for the Layover Router.

Settings are process-wide constants: read once at startup (from the
environment, after loading a .env file) and never mutated afterwards.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from src.astar.graph import DEFAULT_GROUND_HOP_THRESHOLD_KM
from src.astar.search import DEFAULT_MAX_LAYOVERS, StateKeying

DEFAULT_DATA_DIR = Path("data/openflights")

ENV_MAX_LAYOVERS = "ROUTER_MAX_LAYOVERS"
ENV_GROUND_HOP_KM = "ROUTER_GROUND_HOP_KM"
ENV_MAX_EXPANSIONS = "ROUTER_MAX_EXPANSIONS"
ENV_DEADLINE_SECONDS = "ROUTER_DEADLINE_SECONDS"
ENV_STATE_KEYING = "ROUTER_STATE_KEYING"
ENV_DATA_DIR = "ROUTER_DATA_DIR"


@dataclass(frozen=True)
class RouterSettings:
    """
    Immutable router configuration.

    Attributes:
        max_layovers: Cap on direct-connection legs per route.
        ground_hop_threshold_km: Max distance for a ground hop (km).
        state_keying: Search bookkeeping strategy.
        max_expansions: Per-query expansion budget (None = unbounded).
        deadline_seconds: Per-query wall-clock budget (None = unbounded).
        data_dir: Directory holding airports.dat and routes.dat.
    """

    max_layovers: int = DEFAULT_MAX_LAYOVERS
    ground_hop_threshold_km: float = DEFAULT_GROUND_HOP_THRESHOLD_KM
    state_keying: StateKeying = StateKeying.COMPOSITE
    max_expansions: Optional[int] = None
    deadline_seconds: Optional[float] = None
    data_dir: Path = DEFAULT_DATA_DIR

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.max_layovers < 1:
            raise ValueError(f"max_layovers must be >= 1, got {self.max_layovers}")
        if self.ground_hop_threshold_km <= 0:
            raise ValueError(
                f"ground_hop_threshold_km must be > 0, got {self.ground_hop_threshold_km}"
            )
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError(f"max_expansions must be >= 1, got {self.max_expansions}")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ValueError(f"deadline_seconds must be > 0, got {self.deadline_seconds}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RouterSettings":
        """
        Build settings from environment variables.

        Loads a .env file first when reading the real environment. Unset
        variables fall back to the defaults.

        Args:
            environ: Mapping to read instead of ``os.environ`` (tests).

        Raises:
            ValueError: If a variable cannot be parsed or is out of range.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        def _get(name: str) -> Optional[str]:
            value = environ.get(name)
            if value is None or value.strip() == "":
                return None
            return value.strip()

        kwargs = {}

        max_layovers = _get(ENV_MAX_LAYOVERS)
        if max_layovers is not None:
            kwargs["max_layovers"] = int(max_layovers)

        ground_hop_km = _get(ENV_GROUND_HOP_KM)
        if ground_hop_km is not None:
            kwargs["ground_hop_threshold_km"] = float(ground_hop_km)

        state_keying = _get(ENV_STATE_KEYING)
        if state_keying is not None:
            kwargs["state_keying"] = StateKeying(state_keying.lower())

        max_expansions = _get(ENV_MAX_EXPANSIONS)
        if max_expansions is not None:
            kwargs["max_expansions"] = int(max_expansions)

        deadline_seconds = _get(ENV_DEADLINE_SECONDS)
        if deadline_seconds is not None:
            kwargs["deadline_seconds"] = float(deadline_seconds)

        data_dir = _get(ENV_DATA_DIR)
        if data_dir is not None:
            kwargs["data_dir"] = Path(data_dir)

        return cls(**kwargs)
