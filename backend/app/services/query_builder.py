"""
Overpass QL query construction.
"""
from typing import Sequence

from app.models.places_model import BoundingBox


def build_overpass_query(bbox: BoundingBox, filters: Sequence[str], timeout: int = 90) -> str:
    """
    Combine a global bbox, a server-side timeout and the element filters
    into one query. Ways come back with a `center` (out center).

    >>> print(build_overpass_query(BoundingBox(south=1, west=2, north=3, east=4), ['node["leisure"="park"]']))
    [out:json][timeout:90][bbox:1.0,2.0,3.0,4.0];
    (
    node["leisure"="park"];
    );
    out center;
    """
    lines = [f"[out:json][timeout:{timeout}][bbox:{bbox.as_overpass()}];", "("]
    lines.extend(f"{part};" for part in filters)
    lines.extend([");", "out center;"])
    return "\n".join(lines)
