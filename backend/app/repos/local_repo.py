"""
Local file-based bookmark table.
Uses a single JSON file instead of MongoDB.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional

from app.core.config import settings
from app.core.errors import ValidationError
from app.core.logger import logs
from app.models.saved_place_model import SavedPlace, SavedPlaceCreate


class LocalSavedPlacesRepository:
    """Same interface as SavedPlacesRepository, stored in <base_dir>/saved_places.json."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir or settings.LOCAL_DATA_DIR)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.table_file = self.base_dir / "saved_places.json"

    # ===== File helpers =====

    def _load(self) -> dict:
        if not self.table_file.exists():
            return {"next_id": 1, "rows": []}
        with open(self.table_file, 'r', encoding="utf-8") as f:
            return json.load(f)

    def _save(self, table: dict):
        # Write-then-rename so a crash never leaves a half-written table
        tmp_file = self.table_file.with_suffix(".json.tmp")
        try:
            with open(tmp_file, 'w', encoding="utf-8") as f:
                json.dump(table, f, indent=2)
            tmp_file.replace(self.table_file)
        except OSError as e:
            logs.log(logging.ERROR, f"Failed to write saved places table: {str(e)}")
            raise

    @staticmethod
    def _owned(row: dict, user_id: str, place_id: int) -> bool:
        return row["id"] == place_id and row["user_id"] == user_id

    # ===== Table operations =====

    async def list_for_user(self, user_id: str) -> List[SavedPlace]:
        rows = self._load()["rows"]
        # Rows are appended, so file order is insertion order
        return [SavedPlace(**row) for row in rows if row["user_id"] == user_id]

    async def find_by_osm_id(self, user_id: str, osm_id: str) -> Optional[SavedPlace]:
        for row in self._load()["rows"]:
            if row["user_id"] == user_id and row["osm_id"] == osm_id:
                return SavedPlace(**row)
        return None

    async def insert(self, user_id: str, data: SavedPlaceCreate) -> SavedPlace:
        table = self._load()
        if any(r["user_id"] == user_id and r["osm_id"] == data.osm_id for r in table["rows"]):
            raise ValidationError("osmId", "Place already saved")

        place = SavedPlace(id=table["next_id"], user_id=user_id, **data.model_dump())
        table["rows"].append(place.model_dump())
        table["next_id"] += 1
        self._save(table)
        return place

    async def delete(self, user_id: str, place_id: int) -> bool:
        table = self._load()
        remaining = [r for r in table["rows"] if not self._owned(r, user_id, place_id)]
        if len(remaining) == len(table["rows"]):
            return False

        table["rows"] = remaining
        self._save(table)
        return True

    async def toggle(self, user_id: str, place_id: int, flag: str) -> Optional[SavedPlace]:
        table = self._load()
        for row in table["rows"]:
            if self._owned(row, user_id, place_id):
                row[flag] = not row.get(flag, False)
                self._save(table)
                return SavedPlace(**row)
        return None
