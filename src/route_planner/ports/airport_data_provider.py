"""
Airport Data Provider port interface.

Defines the abstract contract for data sources that provide airports and
direct connections. Implementations handle the specifics of each backend.
"""

from abc import ABC, abstractmethod

from src.route_planner.schemas.airport import AirportDataFrame, ConnectionDataFrame


class AirportDataProvider(ABC):
    """
    Abstract interface for airport and connection data providers.

    Data providers return validated DataFrames directly. Schema validation
    happens at the boundary (in the provider), not per-row.

    Implementations:
    - OpenFlightsDataProvider: airports.dat / routes.dat CSV files
    - MockDataProvider: In-memory DataFrames for testing
    """

    @abstractmethod
    def get_airports_df(self) -> AirportDataFrame:
        """
        Return all airports as a validated DataFrame.

        Returns:
            DataFrame validated against AirportSchema.

        Raises:
            pandera.errors.SchemaError: If data fails validation.
            FileNotFoundError: If the data source is unavailable.
        """
        ...

    @abstractmethod
    def get_connections_df(self) -> ConnectionDataFrame:
        """
        Return all direct connections as a validated DataFrame.

        Every source_id and destination_id must reference a row of
        ``get_airports_df()``; distances are in kilometers.

        Returns:
            DataFrame validated against ConnectionSchema.

        Raises:
            pandera.errors.SchemaError: If data fails validation.
            FileNotFoundError: If the data source is unavailable.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this data provider.

        Returns:
            Provider identifier (e.g., "OpenFlights CSV").
        """
        ...

    @property
    def is_available(self) -> bool:
        """
        Check if the data source is currently available.

        Default implementation returns True. Override for providers
        that need health checks.
        """
        return True
