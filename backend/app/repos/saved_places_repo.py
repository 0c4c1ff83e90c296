from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from typing import List, Optional

from app.core.errors import ValidationError
from app.models.saved_place_model import SavedPlace, SavedPlaceCreate

class SavedPlacesRepository:
    """
    MongoDB-backed bookmark table. Every query filters on user_id.
    Documents use the snake_case field names of SavedPlace; ids are integers
    drawn from the `counters` collection.
    """
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["saved_places"]
        self.counters = db["counters"]

    async def _next_id(self) -> int:
        counter = await self.counters.find_one_and_update(
            {"_id": "saved_places"},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return counter["seq"]

    async def list_for_user(self, user_id: str) -> List[SavedPlace]:
        cursor = self.collection.find({"user_id": user_id}, {"_id": 0}).sort("id", 1)
        docs = await cursor.to_list(length=None)
        return [SavedPlace(**doc) for doc in docs]

    async def find_by_osm_id(self, user_id: str, osm_id: str) -> Optional[SavedPlace]:
        doc = await self.collection.find_one({"user_id": user_id, "osm_id": osm_id}, {"_id": 0})
        return SavedPlace(**doc) if doc else None

    async def insert(self, user_id: str, data: SavedPlaceCreate) -> SavedPlace:
        place = SavedPlace(id=await self._next_id(), user_id=user_id, **data.model_dump())
        try:
            await self.collection.insert_one(place.model_dump())
        except DuplicateKeyError:
            # Lost a race with a concurrent save of the same place
            raise ValidationError("osmId", "Place already saved")
        return place

    async def delete(self, user_id: str, place_id: int) -> bool:
        result = await self.collection.delete_one({"id": place_id, "user_id": user_id})
        return result.deleted_count == 1

    async def toggle(self, user_id: str, place_id: int, flag: str) -> Optional[SavedPlace]:
        """Flip a boolean column; None when the row is missing or not the user's."""
        # Aggregation pipeline update (MongoDB 4.2+)
        updated = await self.collection.find_one_and_update(
            {"id": place_id, "user_id": user_id},
            [{"$set": {flag: {"$not": [f"${flag}"]}}}],
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )
        return SavedPlace(**updated) if updated else None
