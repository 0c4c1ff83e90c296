from pydantic import Field
from typing import List, Tuple

from app.models.base_model import CamelModel


class DirectionsResponse(CamelModel):
    # [lat, lon] pairs, in travel order
    path: List[Tuple[float, float]] = Field(default_factory=list)
    distance_meters: float
    duration_seconds: float
