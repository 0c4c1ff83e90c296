import httpx
import logging
import math
import pydantic
from typing import List, Optional

from app.core.categories import category_filters, classify
from app.core.config import settings
from app.core.errors import UpstreamError
from app.core.logger import logs
from app.models.places_model import BoundingBox, Place
from app.services.query_builder import build_overpass_query

class PlacesService:
    """Search proxy over the Overpass API. No cache: every call re-queries upstream."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.overpass_url = settings.OVERPASS_URL
        self.transport = transport

    async def search(self, categories: Optional[str] = None, bbox: Optional[str] = None) -> List[Place]:
        tokens = categories.split(",") if categories else []
        box = BoundingBox.parse(bbox) if bbox else BoundingBox.parse(settings.DEFAULT_BBOX)

        query = build_overpass_query(box, category_filters(tokens), timeout=settings.OVERPASS_TIMEOUT)
        logs.log(logging.INFO, "Fetching from Overpass", extra={"categories": tokens, "bbox": box.as_overpass()})
        logs.log(logging.DEBUG, query)

        elements = await self._fetch_elements(query)
        places = [p for p in (self._to_place(el) for el in elements) if p is not None]

        logs.log(logging.INFO, f"Overpass returned {len(elements)} elements, {len(places)} usable places")
        return places

    async def _fetch_elements(self, query: str) -> list:
        async with httpx.AsyncClient(transport=self.transport, timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
            try:
                response = await client.post(self.overpass_url, data={"data": query})
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logs.upstream_failure("Overpass", e)
                raise UpstreamError()

        elements = data.get("elements") if isinstance(data, dict) else None
        if not isinstance(elements, list):
            logs.log(logging.ERROR, "Overpass response has no element list")
            raise UpstreamError()
        return elements

    def _to_place(self, element: dict) -> Optional[Place]:
        """Normalize one Overpass element; None if it has no usable id or position."""
        if not isinstance(element, dict):
            return None

        element_id = element.get("id")
        if not isinstance(element_id, int) or isinstance(element_id, bool):
            return None

        lat, lon = self._coordinates(element)
        if lat is None or lon is None:
            return None

        tags = element.get("tags")
        if not isinstance(tags, dict):
            tags = {}
        place_type = classify(tags)

        try:
            return Place(
                id=element_id,
                lat=lat,
                lon=lon,
                name=tags.get("name") or f"{place_type} (Unnamed)",
                type=place_type,
                tags=tags
            )
        except pydantic.ValidationError as e:
            # Non-string tag values or names
            logs.log(logging.DEBUG, f"Dropping Overpass element {element_id}: {e.error_count()} invalid fields")
            return None

    @staticmethod
    def _coordinates(element: dict) -> tuple:
        # Nodes carry lat/lon; ways only have the centroid from `out center`
        center = element.get("center") or {}
        lat = element.get("lat")
        lon = element.get("lon")
        if lat is None or lon is None:
            lat, lon = center.get("lat"), center.get("lon")

        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v) for v in (lat, lon)):
            return None, None
        return float(lat), float(lon)
