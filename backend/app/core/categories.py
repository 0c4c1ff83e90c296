"""
The six point-of-interest categories this app knows about.

This table is the single source for: the Overpass filters sent by the search
proxy, the type assigned to returned elements, and the category list served
to the frontend (GET /api/places/categories).
"""
from dataclasses import dataclass
from typing import Iterable, List

UNKNOWN_TYPE = "unknown"

# Overpass element kinds queried per category; ways are returned with a centroid
ELEMENT_KINDS = ("node", "way")


@dataclass(frozen=True)
class Category:
    id: str
    label: str
    tag_key: str
    tag_value: str

    def filters(self) -> List[str]:
        return [f'{kind}["{self.tag_key}"="{self.tag_value}"]' for kind in ELEMENT_KINDS]

    def matches(self, tags: dict) -> bool:
        return tags.get(self.tag_key) == self.tag_value


# Order is also the classification precedence
CATEGORIES = (
    Category("playground", "Playgrounds", "leisure", "playground"),
    Category("park", "Parks", "leisure", "park"),
    Category("museum", "Museums", "tourism", "museum"),
    Category("gallery", "Galleries", "tourism", "gallery"),
    Category("science_centre", "Science Centers", "amenity", "science_centre"),
    Category("planetarium", "Planetariums", "amenity", "planetarium"),
)

CATEGORY_IDS = tuple(c.id for c in CATEGORIES)


def normalize_token(token: str) -> str:
    return token.strip().lower()


def category_filters(tokens: Iterable[str]) -> List[str]:
    """
    Map requested category tokens to Overpass element filters.

    Unknown tokens are ignored. The result follows table order with no
    repeats, so it depends only on which categories were asked for. When
    nothing recognised was asked for, every category's filters are returned.
    """
    wanted = {normalize_token(t) for t in tokens if t is not None}
    selected = [c for c in CATEGORIES if c.id in wanted] or list(CATEGORIES)

    filters: List[str] = []
    for category in selected:
        filters.extend(category.filters())
    return filters


def classify(tags: dict) -> str:
    """Return the first category (in precedence order) whose tag pair is present."""
    for category in CATEGORIES:
        if category.matches(tags):
            return category.id
    return UNKNOWN_TYPE
