from pydantic import Field, field_validator
from typing import Optional

from app.models.base_model import CamelModel


class SavedPlaceCreate(CamelModel):
    """Fields a user supplies when bookmarking a Place; userId comes from auth."""
    osm_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    type: str = Field(..., min_length=1)
    address: Optional[str] = None
    notes: Optional[str] = None
    # Initial flags, so "save as favourite" is one call rather than create + toggle
    is_favorited: bool = False
    visited: bool = False

    @field_validator("osm_id", mode="before")
    @classmethod
    def _osm_id_as_string(cls, value):
        # The map hands us Overpass ids as integers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("osm_id", "name", "type")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class SavedPlace(SavedPlaceCreate):
    id: int
    user_id: str
