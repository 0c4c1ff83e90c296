import math
from pydantic import BaseModel, Field
from typing import Dict

from app.core.errors import ValidationError


class Place(BaseModel):
    """A point of interest returned by the Overpass proxy. Never persisted."""
    id: int
    lat: float
    lon: float
    name: str
    type: str
    tags: Dict[str, str] = Field(default_factory=dict)


class CategoryInfo(BaseModel):
    id: str
    label: str


class BoundingBox(BaseModel):
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def parse(cls, raw: str, field: str = "bbox") -> "BoundingBox":
        """Parse "south,west,north,east"; raises ValidationError naming `field`."""
        parts = [p.strip() for p in raw.split(",")]
        if len(parts) != 4:
            raise ValidationError(field, "Bounding box must be 'south,west,north,east'")
        try:
            south, west, north, east = (float(p) for p in parts)
        except ValueError:
            raise ValidationError(field, "Bounding box values must be numbers")

        if not all(math.isfinite(v) for v in (south, west, north, east)):
            raise ValidationError(field, "Bounding box values must be finite")
        if not (-90 <= south <= 90 and -90 <= north <= 90):
            raise ValidationError(field, "Latitudes must be between -90 and 90")
        if not (-180 <= west <= 180 and -180 <= east <= 180):
            raise ValidationError(field, "Longitudes must be between -180 and 180")
        if south > north:
            raise ValidationError(field, "South must not be greater than north")

        return cls(south=south, west=west, north=north, east=east)

    def as_overpass(self) -> str:
        return f"{self.south},{self.west},{self.north},{self.east}"
