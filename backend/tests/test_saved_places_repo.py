import copy

import pytest
from pymongo import ReturnDocument

from app.core.errors import NotFound
from app.repos.saved_places_repo import SavedPlacesRepository
from app.services.Bookmarks_service import BookmarksService


def _matches(doc: dict, query: dict) -> bool:
    return all(doc.get(k) == v for k, v in query.items())


def _project(doc: dict, projection) -> dict:
    doc = copy.deepcopy(doc)
    if projection and projection.get("_id") == 0:
        doc.pop("_id", None)
    return doc


def _apply_pipeline(doc: dict, pipeline: list) -> None:
    """Only the {"$set": {field: {"$not": ["$field"]}}} stage the repository sends."""
    for stage in pipeline:
        for key, expr in stage["$set"].items():
            (operand,) = expr["$not"]
            doc[key] = not doc.get(operand.lstrip("$"))


class _FakeCursor:
    def __init__(self, docs: list) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int) -> "_FakeCursor":
        self._docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None) -> list:
        return self._docs if length is None else self._docs[:length]


class _DeleteResult:
    def __init__(self, deleted_count: int) -> None:
        self.deleted_count = deleted_count


class _FakeCollection:
    """Just the motor calls SavedPlacesRepository makes."""

    def __init__(self) -> None:
        self.docs: list[dict] = []
        self.updates: list = []

    def find(self, query: dict, projection=None) -> _FakeCursor:
        return _FakeCursor([_project(d, projection) for d in self.docs if _matches(d, query)])

    async def find_one(self, query: dict, projection=None):
        for doc in self.docs:
            if _matches(doc, query):
                return _project(doc, projection)
        return None

    async def insert_one(self, doc: dict) -> None:
        doc["_id"] = f"oid-{len(self.docs)}"
        self.docs.append(copy.deepcopy(doc))

    async def delete_one(self, query: dict) -> _DeleteResult:
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return _DeleteResult(1)
        return _DeleteResult(0)

    async def find_one_and_update(self, query, update, upsert=False, projection=None, return_document=ReturnDocument.BEFORE):
        assert return_document == ReturnDocument.AFTER
        self.updates.append(update)
        target = next((d for d in self.docs if _matches(d, query)), None)
        if target is None:
            if not upsert:
                return None
            target = dict(query)
            self.docs.append(target)
        if isinstance(update, list):
            _apply_pipeline(target, update)
            return _project(target, projection)
        for key, amount in update.get("$inc", {}).items():
            target[key] = target.get(key, 0) + amount
        target.update(update.get("$set", {}))
        return _project(target, projection)


class _FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, _FakeCollection] = {}

    def __getitem__(self, name: str) -> _FakeCollection:
        return self.collections.setdefault(name, _FakeCollection())


@pytest.fixture
def fake_db() -> _FakeDatabase:
    return _FakeDatabase()


@pytest.fixture
def service(fake_db) -> BookmarksService:
    return BookmarksService(SavedPlacesRepository(fake_db))


@pytest.mark.asyncio
async def test_ids_come_from_counter(service, fake_db, place_fields):
    first = await service.create("alice", place_fields)
    second = await service.create("alice", {**place_fields, "osmId": "2"})

    assert (first.id, second.id) == (1, 2)
    assert fake_db["counters"].docs == [{"_id": "saved_places", "seq": 2}]


@pytest.mark.asyncio
async def test_documents_use_snake_case_fields(service, fake_db, place_fields):
    await service.create("alice", {**place_fields, "isFavorited": True})

    doc = fake_db["saved_places"].docs[0]
    assert doc["user_id"] == "alice"
    assert doc["osm_id"] == "123456"
    assert doc["is_favorited"] is True
    assert doc["visited"] is False


@pytest.mark.asyncio
async def test_list_sorted_by_id_and_scoped_to_user(service, place_fields):
    a1 = await service.create("alice", place_fields)
    await service.create("bob", place_fields)
    a2 = await service.create("alice", {**place_fields, "osmId": "7"})

    assert await service.list("alice") == [a1, a2]
    assert [r.user_id for r in await service.list("bob")] == ["bob"]


@pytest.mark.asyncio
async def test_toggle_and_delete(service, place_fields):
    row = await service.create("alice", place_fields)

    assert (await service.toggle_visited("alice", row.id)).visited is True
    assert (await service.toggle_favorited("alice", row.id)).is_favorited is True
    assert (await service.toggle_visited("alice", row.id)).visited is False

    with pytest.raises(NotFound):
        await service.toggle_visited("bob", row.id)
    with pytest.raises(NotFound):
        await service.delete("bob", row.id)

    await service.delete("alice", row.id)
    with pytest.raises(NotFound):
        await service.delete("alice", row.id)
    assert await service.list("alice") == []


@pytest.mark.asyncio
async def test_toggle_is_one_pipeline_update(service, fake_db, place_fields):
    row = await service.create("alice", place_fields)
    collection = fake_db["saved_places"]
    collection.updates.clear()

    assert (await service.toggle_favorited("alice", row.id)).is_favorited is True

    assert collection.updates == [[{"$set": {"is_favorited": {"$not": ["$is_favorited"]}}}]]

    with pytest.raises(NotFound):
        await service.toggle_favorited("bob", row.id)
    assert collection.docs[0]["is_favorited"] is True
