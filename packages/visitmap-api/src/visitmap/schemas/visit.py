"""Schemas for visit records and map markers."""

from pydantic import BaseModel


class VisitRecord(BaseModel):
    """A single recorded visit. Immutable once created."""

    ip: str
    country: str
    time: str

    model_config = {"frozen": True}


class VisitMarker(BaseModel):
    """Aggregated visits for one country, positioned for a world map."""

    country: str
    latitude: float
    longitude: float
    visits: int
