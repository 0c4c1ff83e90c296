import httpx
import logging
from typing import Optional

from app.core.config import settings
from app.core.errors import NoRouteError, UpstreamError
from app.core.logger import logs
from app.models.base_model import Coordinate
from app.models.directions_model import DirectionsResponse

DIRECTIONS_FAILED = "Failed to fetch directions"

class DirectionsService:
    """Driving directions relayed from an OSRM server."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.OSRM_URL.rstrip("/")
        self.transport = transport

    async def get_directions(self, origin: Coordinate, destination: Coordinate) -> DirectionsResponse:
        # OSRM wants lon,lat
        coords = f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        url = f"{self.base_url}/route/v1/driving/{coords}"
        params = {"overview": "full", "geometries": "geojson"}

        logs.log(logging.INFO, f"Requesting route {origin.lat},{origin.lon} -> {destination.lat},{destination.lon}")

        async with httpx.AsyncClient(transport=self.transport, timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
            try:
                resp = await client.get(url, params=params)
            except httpx.HTTPError as e:
                logs.upstream_failure("OSRM", e)
                raise UpstreamError(DIRECTIONS_FAILED)

        try:
            data = resp.json()
        except ValueError:
            data = None

        # OSRM reports "no route" with a 400 status, so check the code first
        if isinstance(data, dict) and data.get("code") == "NoRoute":
            raise NoRouteError()

        if resp.is_error or not isinstance(data, dict):
            logs.log(logging.ERROR, f"OSRM returned {resp.status_code}", extra={"code": data.get("code") if isinstance(data, dict) else None})
            raise UpstreamError(DIRECTIONS_FAILED)

        routes = data.get("routes")
        if routes is None or routes == []:
            raise NoRouteError()
        if not isinstance(routes, list):
            logs.log(logging.ERROR, f"OSRM routes is a {type(routes).__name__}, not a list")
            raise UpstreamError(DIRECTIONS_FAILED)

        return self._to_response(routes[0])

    @staticmethod
    def _to_response(route: dict) -> DirectionsResponse:
        try:
            coordinates = route["geometry"]["coordinates"]
            # GeoJSON is [lon, lat]; the rest of the app is [lat, lon]
            path = [(float(point[1]), float(point[0])) for point in coordinates]
            return DirectionsResponse(
                path=path,
                distance_meters=float(route["distance"]),
                duration_seconds=float(route["duration"])
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logs.upstream_failure("OSRM", e, extra={"reason": "malformed route"})
            raise UpstreamError(DIRECTIONS_FAILED)
