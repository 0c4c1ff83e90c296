"""
Pure helpers behind the Streamlit page: formatting, marker selection,
escaped place cards and the route shown under the selected place.
"""
from html import escape

MAX_MARKERS = 100

def format_distance(meters: float) -> str:
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{int(meters)} m"

def format_duration(seconds: float) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}min"
    return f"{minutes} min"

def visible_places(places: list, name_filter: str) -> list:
    """Filter by name, named places first, capped at MAX_MARKERS."""
    if name_filter.strip():
        needle = name_filter.strip().lower()
        places = [p for p in places if needle in p["name"].lower()]
    named = [p for p in places if not p["name"].endswith("(Unnamed)")]
    unnamed = [p for p in places if p["name"].endswith("(Unnamed)")]
    return (named + unnamed)[:MAX_MARKERS]

def place_options(places: list) -> dict:
    """Selectbox options keyed by OSM id; unnamed places share labels, never ids."""
    return {p["id"]: p for p in places}

def option_label(place: dict, category_labels: dict) -> str:
    return f"{place['name']} · {category_labels.get(place['type'], place['type'])}"

def place_card(title: str, detail: str = "", inline: bool = False) -> str:
    """
    Card markup for st.markdown(unsafe_allow_html=True).
    Names and addresses come from OpenStreetMap, so both are escaped.
    """
    separator = " · " if inline else "<br>"
    body = f"<b>{escape(title)}</b>"
    if detail:
        body += separator + (escape(detail) if inline else f"<small>{escape(detail)}</small>")
    return f'<div class="place-card">{body}</div>'

def route_for(stored: dict | None, place_id: int) -> dict | None:
    """The stored route, only while it still belongs to the selected place."""
    if stored and stored.get("placeId") == place_id:
        return stored["route"]
    return None
