"""
Route query schema.

Defines the contract for search parameters passed to the route finder.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RouteQuery:
    """
    Immutable route search request.

    Codes are normalized to upper case so IATA/ICAO lookups are
    case-insensitive. Frozen to prevent accidental mutation during
    concurrent access.

    Attributes:
        source: Source airport IATA or ICAO code.
        destination: Destination airport IATA or ICAO code.
    """

    source: str
    destination: str

    def __post_init__(self) -> None:
        """Validate the query after initialization."""
        if not self.source:
            raise ValueError("source cannot be empty")
        if not self.destination:
            raise ValueError("destination cannot be empty")

    @classmethod
    def create(cls, source: str, destination: str) -> "RouteQuery":
        """
        Factory method normalizing both codes.

        Args:
            source: Source airport code, any case, surrounding blanks allowed.
            destination: Destination airport code.

        Returns:
            Validated RouteQuery instance.
        """
        return cls(
            source=(source or "").strip().upper(),
            destination=(destination or "").strip().upper(),
        )
