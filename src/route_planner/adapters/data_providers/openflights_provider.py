"""
OpenFlights Data Provider - CSV to DataFrame adapter.

Reads the OpenFlights ``airports.dat`` and ``routes.dat`` files and
transforms them into AirportSchema / ConnectionSchema DataFrames.
Connection distances are computed with the vectorized haversine.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from src.astar.distance import haversine_km_vectorized
from src.route_planner.adapters.repositories.route_graph_repo import build_code_index
from src.route_planner.ports.airport_data_provider import AirportDataProvider
from src.route_planner.schemas.airport import (
    AirportDataFrame,
    AirportSchema,
    ConnectionDataFrame,
    ConnectionSchema,
)

logger = logging.getLogger(__name__)

AIRPORTS_FILE = "airports.dat"
ROUTES_FILE = "routes.dat"

# OpenFlights writes missing values as \N
NULL_MARKER = "\\N"

# Leading columns of airports.dat; later columns (altitude, timezone, ...)
# differ between dataset versions and are not needed.
AIRPORT_COLUMNS = ["id", "name", "city", "country", "iata", "icao", "latitude", "longitude"]

ROUTE_COLUMNS = [
    "airline",
    "airline_id",
    "source_code",
    "source_id",
    "destination_code",
    "destination_id",
    "codeshare",
    "stops",
    "equipment",
]

CODE_COLUMNS = ("iata", "icao")
TEXT_COLUMNS = ("name", "city", "country")


def _clean_text(value: object, upper: bool) -> Optional[str]:
    if pd.isna(value):
        return None
    text = str(value).strip()
    if not text:
        return None
    return text.upper() if upper else text


def _nullable_text(series: pd.Series, upper: bool = False) -> pd.Series:
    """Strip text and map blanks to None, keeping the column as object dtype."""
    return series.astype(object).map(lambda value: _clean_text(value, upper))


class OpenFlightsDataProvider(AirportDataProvider):
    """
    Data provider for OpenFlights-format CSV files.

    Attributes:
        data_dir: Directory containing airports.dat and routes.dat.
    """

    def __init__(self, data_dir: Union[str, Path] = "data/openflights") -> None:
        """
        Initialize the OpenFlights data provider.

        Args:
            data_dir: Directory holding the two data files.
        """
        self._data_dir = Path(data_dir)

    @property
    def airports_path(self) -> Path:
        return self._data_dir / AIRPORTS_FILE

    @property
    def routes_path(self) -> Path:
        return self._data_dir / ROUTES_FILE

    def _require(self, path: Path) -> Path:
        if not path.exists():
            raise FileNotFoundError(f"OpenFlights data file not found: {path}")
        return path

    def get_airports_df(self) -> AirportDataFrame:
        """
        Load airports.dat and transform it to AirportSchema.

        Returns:
            DataFrame validated against AirportSchema.
        """
        raw = pd.read_csv(
            self._require(self.airports_path),
            header=None,
            names=AIRPORT_COLUMNS,
            usecols=range(len(AIRPORT_COLUMNS)),
            na_values=[NULL_MARKER],
            keep_default_na=False,
            encoding="utf-8",
        )

        result = pd.DataFrame()
        result["id"] = pd.to_numeric(raw["id"], errors="raise").astype(np.int64)
        result["latitude"] = raw["latitude"].astype(float)
        result["longitude"] = raw["longitude"].astype(float)
        for column in CODE_COLUMNS:
            result[column] = _nullable_text(raw[column], upper=True)
        for column in TEXT_COLUMNS:
            result[column] = _nullable_text(raw[column])

        validated = AirportSchema.validate(result)

        logger.info("Loaded %d airports from %s", len(validated), self.airports_path)
        return validated

    def get_connections_df(self) -> ConnectionDataFrame:
        """
        Load routes.dat and transform it to ConnectionSchema.

        Steps:
        1. Keep non-stop routes only
        2. Resolve missing airport ids through IATA/ICAO codes
        3. Drop routes touching unknown airports and self-loops
        4. De-duplicate ordered (source, destination) pairs
        5. Compute great-circle distances in bulk

        Returns:
            DataFrame validated against ConnectionSchema.
        """
        airports = self.get_airports_df()

        raw = pd.read_csv(
            self._require(self.routes_path),
            header=None,
            names=ROUTE_COLUMNS,
            dtype=str,
            na_values=[NULL_MARKER],
            keep_default_na=False,
        )
        total = len(raw)

        # 1. Non-stop only; missing stop counts are treated as direct
        stops = pd.to_numeric(raw["stops"], errors="coerce").fillna(0)
        routes = raw[stops == 0]

        # 2. Resolve ids, falling back to codes
        code_index = build_code_index(airports)
        source_ids = pd.to_numeric(routes["source_id"], errors="coerce")
        destination_ids = pd.to_numeric(routes["destination_id"], errors="coerce")
        source_ids = source_ids.fillna(routes["source_code"].str.upper().map(code_index))
        destination_ids = destination_ids.fillna(
            routes["destination_code"].str.upper().map(code_index)
        )

        connections = pd.DataFrame(
            {"source_id": source_ids, "destination_id": destination_ids}
        )

        # 3. Unknown airports and self-loops
        known = set(airports["id"].tolist())
        valid = (
            connections["source_id"].isin(known)
            & connections["destination_id"].isin(known)
            & (connections["source_id"] != connections["destination_id"])
        )
        dropped = int((~valid).sum())
        if dropped:
            logger.warning(
                "Dropped %d routes referencing unknown airports or looping on themselves",
                dropped,
            )
        connections = connections[valid].astype(np.int64)

        # 4. Several airlines fly the same pair
        connections = connections.drop_duplicates(
            subset=["source_id", "destination_id"]
        ).reset_index(drop=True)

        # 5. Distances
        coords = airports.set_index("id")[["latitude", "longitude"]]
        src = coords.loc[connections["source_id"]].to_numpy()
        dst = coords.loc[connections["destination_id"]].to_numpy()
        if len(connections):
            connections["distance"] = haversine_km_vectorized(
                src[:, 0], src[:, 1], dst[:, 0], dst[:, 1]
            )
        else:
            connections["distance"] = pd.Series(dtype=float)

        validated = ConnectionSchema.validate(connections)

        logger.info(
            "Loaded %d connections from %s (%d raw routes)",
            len(validated),
            self.routes_path,
            total,
        )
        return validated

    @property
    def name(self) -> str:
        """Human-readable provider name."""
        return "OpenFlights CSV"

    @property
    def is_available(self) -> bool:
        """Check if both data files exist."""
        return self.airports_path.exists() and self.routes_path.exists()
