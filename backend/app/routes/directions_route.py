from fastapi import APIRouter, Depends, Query

from app.models.base_model import Coordinate, ErrorResponse
from app.models.directions_model import DirectionsResponse
from app.services.Directions_service import DirectionsService

router = APIRouter(prefix="/api", tags=["directions"])

def get_directions_service() -> DirectionsService:
    return DirectionsService()

@router.get(
    "/directions",
    response_model=DirectionsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def get_directions_endpoint(
    origin: str = Query(..., description="lat,lon"),
    destination: str = Query(..., description="lat,lon"),
    service: DirectionsService = Depends(get_directions_service)
):
    return await service.get_directions(
        Coordinate.parse(origin, "origin"),
        Coordinate.parse(destination, "destination")
    )
