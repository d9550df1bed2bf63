"""
Airport and connection data schemas using Pandera.

Defines the contract for location data flowing from data providers into
the graph builder. Schema validation happens at layer boundaries only,
not per-row.
"""

from typing import Optional

import pandera as pa
from pandera.typing import DataFrame, Series


class AirportSchema(pa.DataFrameModel):
    """
    Contract for airport (location) data.

    Only id and coordinates are required by the graph builder. Codes and
    display fields are nullable: many OpenFlights rows have no IATA code.
    """

    id: Series[int] = pa.Field(
        unique=True,
        nullable=False,
        description="Unique airport id",
    )
    latitude: Series[float] = pa.Field(
        ge=-90,
        le=90,
        description="Latitude in decimal degrees",
    )
    longitude: Series[float] = pa.Field(
        ge=-180,
        le=180,
        description="Longitude in decimal degrees",
    )
    iata: Series[str] = pa.Field(
        nullable=True,
        description="IATA code (e.g., 'TLL')",
    )
    icao: Series[str] = pa.Field(
        nullable=True,
        description="ICAO code (e.g., 'EETN')",
    )
    name: Optional[Series[str]] = pa.Field(
        nullable=True,
        description="Airport name",
    )
    city: Optional[Series[str]] = pa.Field(
        nullable=True,
        description="City served",
    )
    country: Optional[Series[str]] = pa.Field(
        nullable=True,
        description="Country",
    )

    class Config:
        # Extra columns pass through unchanged
        strict = False
        coerce = True
        name = "AirportSchema"
        description = "Airport locations required by the route graph"


class ConnectionSchema(pa.DataFrameModel):
    """
    Contract for direct connections between airports.

    Distances are in kilometers and must be non-negative.
    """

    source_id: Series[int] = pa.Field(
        nullable=False,
        description="Departure airport id",
    )
    destination_id: Series[int] = pa.Field(
        nullable=False,
        description="Arrival airport id",
    )
    distance: Series[float] = pa.Field(
        ge=0,
        description="Connection distance in kilometers",
    )

    class Config:
        strict = False
        coerce = True
        name = "ConnectionSchema"
        description = "Direct connections required by the route graph"


AirportDataFrame = DataFrame[AirportSchema]
ConnectionDataFrame = DataFrame[ConnectionSchema]
