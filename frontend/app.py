import os

import requests
import streamlit as st

from place_display import (
    format_distance,
    format_duration,
    option_label,
    place_card,
    place_options,
    route_for,
    visible_places,
)

# Page configuration
st.set_page_config(
    page_title="Family Places Explorer",
    page_icon="🛝",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS for better UI
st.markdown("""
<style>
    .main-header {
        font-size: 2.3rem;
        color: #2E7D32;
        text-align: center;
        padding: 1rem 0;
        font-weight: bold;
    }
    .place-card {
        padding: 0.8rem 1rem;
        border-radius: 0.5rem;
        margin: 0.4rem 0;
        border-left: 4px solid #43A047;
        background-color: rgba(67, 160, 71, 0.08);
    }
    .success-box {
        padding: 1rem;
        background-color: #207a27;
        border-radius: 0.5rem;
        border-left: 4px solid #43A047;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)

# Backend API configuration
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

# Map starts on the same city centre the backend searches by default
CITY_CENTER = (30.2672, -97.7431)

# Initialize session state
if "token" not in st.session_state:
    st.session_state.token = None

if "user_id" not in st.session_state:
    st.session_state.user_id = None

if "selected_categories" not in st.session_state:
    st.session_state.selected_categories = []

if "route" not in st.session_state:
    st.session_state.route = None

def call_backend(method: str, path: str, **kwargs) -> dict:
    """
    Call the backend and return {"status": ..., "data": ...}.
    Failures come back as {"status": ..., "error": message} instead of raising.
    """
    headers = kwargs.pop("headers", {})
    if st.session_state.token:
        headers["Authorization"] = f"Bearer {st.session_state.token}"

    try:
        response = requests.request(method, f"{BACKEND_URL}{path}", headers=headers, timeout=120, **kwargs)
    except requests.exceptions.ConnectionError:
        return {"status": None, "error": "Cannot connect to backend. Make sure the backend is running on port 8000."}
    except requests.exceptions.Timeout:
        return {"status": None, "error": "Request timed out. Try fewer categories."}

    if response.status_code == 204:
        return {"status": 204, "data": None}

    try:
        body = response.json()
    except ValueError:
        body = {}

    if not response.ok:
        return {"status": response.status_code, "error": body.get("message", "Something went wrong")}
    return {"status": response.status_code, "data": body}

def check_backend_health() -> bool:
    """Check if backend is running."""
    try:
        response = requests.get(f"{BACKEND_URL}/health", timeout=2)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False

def show_error(result: dict, action: str):
    """401 means "sign in", anything else is a generic failure."""
    if result.get("status") == 401:
        st.warning(f"🔐 Sign in required. Please sign in to {action}.")
    else:
        st.error(f"❌ {result['error']}")

def load_categories() -> list:
    result = call_backend("GET", "/api/places/categories")
    return result.get("data") or []

def load_saved_places() -> list:
    if not st.session_state.token:
        return []
    result = call_backend("GET", "/api/saved-places")
    return result.get("data") or []

def save_or_toggle(place: dict, saved: dict | None, flag: str):
    """Create the bookmark with the flag already set, or flip it on the existing one."""
    if saved is None:
        payload = {
            "osmId": str(place["id"]),
            "name": place["name"],
            "lat": place["lat"],
            "lon": place["lon"],
            "type": place["type"],
            "address": place.get("tags", {}).get("addr:street", ""),
            "notes": "",
            "isFavorited": flag == "favorite",
            "visited": flag == "visited",
        }
        return call_backend("POST", "/api/saved-places", json=payload)
    return call_backend("PATCH", f"/api/saved-places/{saved['id']}/{flag}")

# Header
st.markdown('<div class="main-header">🛝 Family Places Explorer</div>', unsafe_allow_html=True)
st.markdown("<p style='text-align: center; color: #666;'>Playgrounds, parks, museums and more, close to home</p>", unsafe_allow_html=True)

categories = load_categories()
category_labels = {c["id"]: c["label"] for c in categories}

# Sidebar
with st.sidebar:
    st.header("⚙️ Settings")

    # Backend status
    backend_status = check_backend_health()
    if backend_status:
        st.markdown('<div class="success-box">✅ Backend Connected</div>', unsafe_allow_html=True)
    else:
        st.markdown('⚠️ Backend Disconnected<br><small>Run: <code>python run.py</code> in backend folder</small>', unsafe_allow_html=True)

    st.divider()

    # Account
    st.subheader("👤 Account")
    if st.session_state.token:
        st.write(f"Signed in as **{st.session_state.user_id}**")
        if st.button("Sign out"):
            st.session_state.token = None
            st.session_state.user_id = None
            st.rerun()
    else:
        username = st.text_input("Username")
        if st.button("Sign in") and username.strip():
            result = call_backend("POST", "/api/login", json={"username": username})
            if "error" in result:
                st.error(result["error"])
            else:
                st.session_state.token = result["data"]["accessToken"]
                st.session_state.user_id = result["data"]["userId"]
                st.rerun()

    st.divider()

    # Category toggles
    st.subheader("📍 Categories")
    st.session_state.selected_categories = [
        c["id"] for c in categories
        if st.checkbox(c["label"], value=c["id"] in st.session_state.selected_categories, key=f"cat_{c['id']}")
    ]

    name_filter = st.text_input("🔎 Search by name")

if not backend_status:
    st.warning("⚠️ Backend is not running. Please start the backend server first.")
    st.code("cd backend && python run.py", language="bash")
    st.stop()

saved_places = load_saved_places()
saved_by_osm_id = {p["osmId"]: p for p in saved_places}

explore_tab, saved_tab = st.tabs(["🗺️ Explore", "⭐ Saved"])

with explore_tab:
    if not st.session_state.selected_categories:
        st.info("Pick one or more categories in the sidebar to see places on the map.")
    else:
        with st.spinner("🔍 Looking for places..."):
            result = call_backend(
                "GET", "/api/places/search",
                params={"categories": ",".join(st.session_state.selected_categories)}
            )

        if "error" in result:
            st.error(f"❌ {result['error']}")
        else:
            places = visible_places(result["data"], name_filter)
            if not places:
                st.info("No places found for these categories.")
            else:
                st.map([{"lat": p["lat"], "lon": p["lon"]} for p in places], zoom=12)
                st.caption(f"Showing {len(places)} of {len(result['data'])} places")

                options = place_options(places)
                choice = st.selectbox(
                    "Select a place", list(options),
                    format_func=lambda osm_id: option_label(options[osm_id], category_labels)
                )
                place = options[choice]
                saved = saved_by_osm_id.get(str(place["id"]))

                st.markdown(
                    place_card(place["name"], place.get("tags", {}).get("addr:street", "")),
                    unsafe_allow_html=True
                )

                col_fav, col_visit, col_route = st.columns(3)
                is_favorited = bool(saved and saved["isFavorited"])
                is_visited = bool(saved and saved["visited"])

                if col_fav.button("💔 Unfavorite" if is_favorited else "⭐ Favorite"):
                    outcome = save_or_toggle(place, saved, "favorite")
                    if "error" in outcome:
                        show_error(outcome, "favorite places")
                    else:
                        st.rerun()

                if col_visit.button("↩️ Not visited" if is_visited else "✅ Mark visited"):
                    outcome = save_or_toggle(place, saved, "visited")
                    if "error" in outcome:
                        show_error(outcome, "mark places as visited")
                    else:
                        st.rerun()

                if col_route.button("🚗 Directions"):
                    route = call_backend("GET", "/api/directions", params={
                        "origin": f"{CITY_CENTER[0]},{CITY_CENTER[1]}",
                        "destination": f"{place['lat']},{place['lon']}",
                    })
                    if "error" in route:
                        st.session_state.route = None
                        st.error(f"❌ {route['error']}")
                    else:
                        st.session_state.route = {"placeId": place["id"], "route": route["data"]}

                route = route_for(st.session_state.route, place["id"])
                if route:
                    st.success(
                        f"🚗 {format_distance(route['distanceMeters'])} · "
                        f"{format_duration(route['durationSeconds'])} from the city centre"
                    )
                    st.map([{"lat": lat, "lon": lon} for lat, lon in route["path"]], zoom=12)

with saved_tab:
    if not st.session_state.token:
        st.warning("🔐 Sign in to see your saved places.")
    elif not saved_places:
        st.info("You haven't saved any places yet.")
    else:
        sections = [
            ("⭐ Favorites", [p for p in saved_places if p["isFavorited"]]),
            ("✅ Visited", [p for p in saved_places if p["visited"]]),
            ("📌 Saved", [p for p in saved_places if not p["isFavorited"] and not p["visited"]]),
        ]
        for title, rows in sections:
            st.subheader(f"{title} ({len(rows)})")
            for row in rows:
                st.markdown(
                    place_card(row["name"], category_labels.get(row["type"], row["type"]), inline=True),
                    unsafe_allow_html=True
                )
                col_fav, col_visit, col_delete = st.columns(3)
                if col_fav.button("Toggle favorite", key=f"{title}_fav_{row['id']}"):
                    toggled = call_backend("PATCH", f"/api/saved-places/{row['id']}/favorite")
                    if "error" in toggled:
                        show_error(toggled, "update places")
                    else:
                        st.rerun()
                if col_visit.button("Toggle visited", key=f"{title}_visit_{row['id']}"):
                    toggled = call_backend("PATCH", f"/api/saved-places/{row['id']}/visited")
                    if "error" in toggled:
                        show_error(toggled, "update places")
                    else:
                        st.rerun()
                if col_delete.button("🗑️ Remove", key=f"{title}_delete_{row['id']}"):
                    removed = call_backend("DELETE", f"/api/saved-places/{row['id']}")
                    if "error" in removed:
                        show_error(removed, "remove places")
                    else:
                        st.rerun()

# Footer
st.divider()
st.markdown("""
<div style='text-align: center; color: #999; padding: 1rem;'>
    <small>Powered by FastAPI, OpenStreetMap (Overpass) & OSRM | Made with ❤️ using Streamlit</small>
</div>
""", unsafe_allow_html=True)
