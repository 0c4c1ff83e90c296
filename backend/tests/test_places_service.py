import httpx
import pytest

from app.core.categories import CATEGORY_IDS
from app.core.errors import UpstreamError, ValidationError
from app.services.Places_service import PlacesService

from conftest import json_transport, overpass_body


OVERPASS_PAYLOAD = {
    "elements": [
        {"type": "node", "id": 1, "lat": 30.27, "lon": -97.74, "tags": {"leisure": "park", "name": "Pease Park"}},
        {"type": "way", "id": 2, "center": {"lat": 30.28, "lon": -97.75}, "tags": {"leisure": "playground"}},
        {"type": "way", "id": 3, "tags": {"tourism": "museum", "name": "No Coordinates"}},
        {"type": "node", "id": 4, "lat": 30.29, "lon": -97.76, "tags": {"amenity": "cafe", "name": "Cafe"}},
        {"type": "node", "id": 5, "lat": 30.30, "tags": {"tourism": "gallery"}},
        {"type": "node", "id": 6, "lat": 0.0, "lon": 0.0},
    ]
}


@pytest.mark.asyncio
async def test_search_normalizes_elements():
    service = PlacesService(transport=json_transport(OVERPASS_PAYLOAD))

    places = await service.search("park,playground")

    assert [p.id for p in places] == [1, 2, 4, 6]

    park, playground, cafe, bare = places
    assert park.type == "park"
    assert park.name == "Pease Park"
    assert (park.lat, park.lon) == (30.27, -97.74)
    assert park.tags == {"leisure": "park", "name": "Pease Park"}

    # Ways are positioned at their centroid
    assert (playground.lat, playground.lon) == (30.28, -97.75)
    assert playground.name == "playground (Unnamed)"

    assert cafe.type == "unknown"
    assert bare.name == "unknown (Unnamed)"
    assert bare.tags == {}


@pytest.mark.asyncio
async def test_search_posts_query_with_default_bbox():
    calls = []
    service = PlacesService(transport=json_transport({"elements": []}, calls=calls))

    assert await service.search("museum") == []

    assert len(calls) == 1
    request = calls[0]
    assert request.method == "POST"
    query = overpass_body(request)
    assert "[bbox:30.25,-97.8,30.35,-97.7]" in query
    assert "[timeout:90]" in query
    assert 'node["tourism"="museum"];' in query
    assert 'way["tourism"="museum"];' in query
    assert "leisure" not in query
    assert query.endswith("out center;")


@pytest.mark.asyncio
async def test_search_uses_given_bbox():
    calls = []
    service = PlacesService(transport=json_transport({"elements": []}, calls=calls))

    await service.search("park", bbox="40.7,-74.02,40.8,-73.93")

    assert "[bbox:40.7,-74.02,40.8,-73.93]" in overpass_body(calls[0])


@pytest.mark.asyncio
@pytest.mark.parametrize("categories", [None, "", "zoo,aquarium", " , "])
async def test_no_recognized_category_queries_everything(categories):
    calls = []
    service = PlacesService(transport=json_transport({"elements": []}, calls=calls))

    await service.search(categories)
    await service.search(",".join(CATEGORY_IDS))

    assert overpass_body(calls[0]) == overpass_body(calls[1])


@pytest.mark.asyncio
async def test_upstream_error_status():
    service = PlacesService(transport=json_transport({"remark": "busy"}, status_code=429))

    with pytest.raises(UpstreamError) as exc:
        await service.search("park")
    assert exc.value.message == "Failed to fetch map data"


@pytest.mark.asyncio
async def test_upstream_unparseable_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(UpstreamError):
        await PlacesService(transport=transport).search("park")


@pytest.mark.asyncio
async def test_upstream_missing_elements():
    with pytest.raises(UpstreamError):
        await PlacesService(transport=json_transport({"remark": "runtime error"})).search("park")


@pytest.mark.asyncio
async def test_upstream_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        await PlacesService(transport=httpx.MockTransport(handler)).search("park")


@pytest.mark.asyncio
async def test_bad_bbox_fails_before_calling_upstream():
    calls = []
    service = PlacesService(transport=json_transport({"elements": []}, calls=calls))

    with pytest.raises(ValidationError) as exc:
        await service.search("park", bbox="not,a,box")

    assert exc.value.field == "bbox"
    assert calls == []


@pytest.mark.asyncio
async def test_malformed_tags_do_not_break_search():
    payload = {
        "elements": [
            {"type": "node", "id": 1, "lat": 30.27, "lon": -97.74, "tags": ["leisure", "park"]},
            {"type": "node", "id": 2, "lat": 30.28, "lon": -97.75, "tags": {"leisure": "park", "capacity": 40}},
            {"type": "node", "id": 3, "lat": 30.29, "lon": -97.76, "tags": {"leisure": "park", "name": "Pease Park"}},
        ]
    }

    places = await PlacesService(transport=json_transport(payload)).search("park")

    assert [p.id for p in places] == [1, 3]
    assert places[0].tags == {}
    assert places[0].type == "unknown"
