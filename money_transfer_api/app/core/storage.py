"""
Entity store with interchangeable backends.

Five collections are exposed through ``Store``: users, transactions,
friends, leave requests and admins.  Each collection offers the same
small interface (``insert``, ``find_one``, ``find_many``, ``update``,
``delete``, ``count``) and accepts MongoDB-style filter documents
restricted to:

* field equality, ``{"email": "a@x.com"}``
* disjunction, ``{"$or": [{...}, {...}]}``
* regular expressions, ``{"name": {"$regex": "ann", "$options": "i"}}``

Two backends are provided.  ``FileStore`` keeps every collection in a
process-global list and rewrites that collection's JSON file on every
mutation.  ``MongoStore`` forwards the same calls to pymongo.  Either
way a mutating call returns only after its write is durable; a failed
write raises ``StorageError``.

Request handlers reach the collections through ``Store.awaitable``.
File-backed calls run inline on the event loop, which keeps a single
writer per process; pymongo calls block on the network and are moved
to the threadpool instead.

Collections with an integer key (users, leave requests) assign ids as
``max(existing ids) + 1``, starting at 1.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pymongo import MongoClient, ReturnDocument
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .errors import StorageError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Query = Dict[str, Any]

USERS = "users"
TRANSACTIONS = "transactions"
FRIENDS = "friends"
LEAVE_REQUESTS = "leaveRequests"
ADMINS = "admins"

# Snapshot file per collection for the file backend.
FILE_NAMES = {
    USERS: "users.json",
    TRANSACTIONS: "transactions.json",
    FRIENDS: "friends.json",
    LEAVE_REQUESTS: "leave-requests.json",
}


def matches(doc: Document, query: Optional[Query]) -> bool:
    """Evaluate the supported filter subset against a plain document."""
    if not query:
        return True
    for key, expected in query.items():
        if key == "$or":
            if not any(matches(doc, sub) for sub in expected):
                return False
        elif isinstance(expected, dict):
            if not _match_operators(doc.get(key), expected):
                return False
        elif doc.get(key) != expected:
            return False
    return True


def _match_operators(value: Any, operators: Dict[str, Any]) -> bool:
    for op, arg in operators.items():
        if op == "$regex":
            flags = re.IGNORECASE if "i" in operators.get("$options", "") else 0
            if not isinstance(value, str) or re.search(arg, value, flags) is None:
                return False
        elif op == "$options":
            continue
        else:
            raise ValueError(f"Unsupported query operator {op!r}")
    return True


class Collection(ABC):
    """Backend-agnostic access to one entity collection."""

    def __init__(self, name: str, id_field: Optional[str] = None) -> None:
        self.name = name
        self.id_field = id_field

    @abstractmethod
    def all(self) -> List[Document]:
        """Return every document in insertion order."""

    @abstractmethod
    def find_one(self, query: Query) -> Optional[Document]:
        """Return the first matching document or ``None``."""

    @abstractmethod
    def find_many(self, query: Query) -> List[Document]:
        """Return all matching documents in insertion order."""

    @abstractmethod
    def count(self, query: Optional[Query] = None) -> int:
        ...

    @abstractmethod
    def insert(self, doc: Document) -> Document:
        """Store ``doc`` (assigning an id if the collection uses one)."""

    @abstractmethod
    def update(self, query: Query, fields: Document) -> Optional[Document]:
        """Merge ``fields`` into the first match.  Returns ``None`` if nothing matched."""

    @abstractmethod
    def delete(self, query: Query) -> bool:
        """Remove every match.  Returns True if anything was removed."""


class MemoryCollection(Collection):
    """A list-backed collection.

    Documents handed out are deep copies, so callers cannot change
    stored state without going through ``update``.  Subclasses make
    mutations durable by overriding ``_flush``.
    """

    def __init__(self, name: str, id_field: Optional[str] = None, docs: Optional[Iterable[Document]] = None) -> None:
        super().__init__(name, id_field)
        self._docs: List[Document] = [dict(d) for d in docs or []]

    def all(self) -> List[Document]:
        return copy.deepcopy(self._docs)

    def find_one(self, query: Query) -> Optional[Document]:
        for doc in self._docs:
            if matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find_many(self, query: Query) -> List[Document]:
        return [copy.deepcopy(doc) for doc in self._docs if matches(doc, query)]

    def count(self, query: Optional[Query] = None) -> int:
        return sum(1 for doc in self._docs if matches(doc, query))

    def next_id(self) -> int:
        ids = [doc[self.id_field] for doc in self._docs if isinstance(doc.get(self.id_field), int)]
        return max(ids) + 1 if ids else 1

    def insert(self, doc: Document) -> Document:
        stored = copy.deepcopy(doc)
        if self.id_field:
            stored[self.id_field] = self.next_id()
        previous = self._docs
        self._docs = previous + [stored]
        self._commit(previous)
        return copy.deepcopy(stored)

    def update(self, query: Query, fields: Document) -> Optional[Document]:
        for index, doc in enumerate(self._docs):
            if matches(doc, query):
                merged = {**doc, **copy.deepcopy(fields)}
                previous = self._docs
                self._docs = previous[:index] + [merged] + previous[index + 1:]
                self._commit(previous)
                return copy.deepcopy(merged)
        return None

    def delete(self, query: Query) -> bool:
        kept = [doc for doc in self._docs if not matches(doc, query)]
        if len(kept) == len(self._docs):
            return False
        previous = self._docs
        self._docs = kept
        self._commit(previous)
        return True

    def _commit(self, previous: List[Document]) -> None:
        # Restore the pre-mutation list if the write did not land.
        try:
            self._flush()
        except StorageError:
            self._docs = previous
            raise

    def _flush(self) -> None:
        pass


class JsonFileCollection(MemoryCollection):
    """Memory collection snapshotted to a JSON array file on every mutation."""

    def __init__(self, name: str, path: Path, id_field: Optional[str] = None) -> None:
        super().__init__(name, id_field)
        self.path = Path(path)

    def load(self) -> None:
        if not self.path.exists():
            self._docs = []
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Error loading %s from %s: %s", self.name, self.path, exc)
            data = []
        if not isinstance(data, list):
            logger.error("Ignoring %s: expected a JSON array", self.path)
            data = []
        self._docs = data

    def _flush(self) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._docs, fh, indent=2, default=str)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving %s to %s: %s", self.name, self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Failed to save data") from exc


class MongoCollection(Collection):
    """pymongo-backed collection.  Mongo's ``_id`` never leaves this class."""

    _NO_ID = {"_id": False}

    def __init__(self, collection, id_field: Optional[str] = None) -> None:
        super().__init__(collection.name, id_field)
        self._collection = collection

    @property
    def _order(self):
        return [(self.id_field or "_id", 1)]

    def all(self) -> List[Document]:
        return self.find_many({})

    def find_one(self, query: Query) -> Optional[Document]:
        try:
            return self._collection.find_one(query, self._NO_ID, sort=self._order)
        except PyMongoError as exc:
            raise StorageError("Database unavailable") from exc

    def find_many(self, query: Query) -> List[Document]:
        try:
            return list(self._collection.find(query, self._NO_ID).sort(self._order))
        except PyMongoError as exc:
            raise StorageError("Database unavailable") from exc

    def count(self, query: Optional[Query] = None) -> int:
        try:
            return self._collection.count_documents(query or {})
        except PyMongoError as exc:
            raise StorageError("Database unavailable") from exc

    def insert(self, doc: Document) -> Document:
        stored = copy.deepcopy(doc)
        try:
            if self.id_field:
                last = self._collection.find_one({}, {self.id_field: True, "_id": False}, sort=[(self.id_field, -1)])
                stored[self.id_field] = (last or {}).get(self.id_field, 0) + 1
            # insert_one adds ``_id`` to the dict it is given.
            self._collection.insert_one(dict(stored))
        except PyMongoError as exc:
            raise StorageError("Failed to save data") from exc
        return stored

    def update(self, query: Query, fields: Document) -> Optional[Document]:
        if not fields:
            return self.find_one(query)
        try:
            return self._collection.find_one_and_update(
                query,
                {"$set": fields},
                projection=self._NO_ID,
                sort=self._order,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise StorageError("Failed to save data") from exc

    def delete(self, query: Query) -> bool:
        try:
            return self._collection.delete_many(query).deleted_count > 0
        except PyMongoError as exc:
            raise StorageError("Failed to save data") from exc


class AsyncCollection:
    """Awaitable view of a collection for the request handlers.

    With ``offload`` set, every call runs in the threadpool so a slow
    database round trip does not hold up the event loop.  Otherwise the
    call runs inline, which keeps the file backend to one mutation at a
    time.
    """

    def __init__(self, collection: Collection, offload: bool = False) -> None:
        self.collection = collection
        self.offload = offload

    async def _run(self, func, *args):
        if self.offload:
            return await run_in_threadpool(func, *args)
        return func(*args)

    async def all(self) -> List[Document]:
        return await self._run(self.collection.all)

    async def find_one(self, query: Query) -> Optional[Document]:
        return await self._run(self.collection.find_one, query)

    async def find_many(self, query: Query) -> List[Document]:
        return await self._run(self.collection.find_many, query)

    async def count(self, query: Optional[Query] = None) -> int:
        return await self._run(self.collection.count, query)

    async def insert(self, doc: Document) -> Document:
        return await self._run(self.collection.insert, doc)

    async def update(self, query: Query, fields: Document) -> Optional[Document]:
        return await self._run(self.collection.update, query, fields)

    async def delete(self, query: Query) -> bool:
        return await self._run(self.collection.delete, query)


class Store:
    """The five entity collections used by the services."""

    # Set by backends whose calls block on network I/O.
    blocking_io = False

    def __init__(
        self,
        users: Collection,
        transactions: Collection,
        friends: Collection,
        leave_requests: Collection,
        admins: Collection,
    ) -> None:
        self.users = users
        self.transactions = transactions
        self.friends = friends
        self.leave_requests = leave_requests
        self.admins = admins

    def summary(self) -> Dict[str, int]:
        return {
            "users": self.users.count(),
            "transactions": self.transactions.count(),
            "friends": self.friends.count(),
            "leaveRequests": self.leave_requests.count(),
            "admins": self.admins.count(),
        }

    def awaitable(self, collection: Collection) -> AsyncCollection:
        return AsyncCollection(collection, offload=self.blocking_io)

    def close(self) -> None:
        pass


class FileStore(Store):
    """Flat JSON files in one directory, loaded once at startup."""

    def __init__(self, data_dir: str, admins: Iterable[Document] = ()) -> None:
        base = Path(data_dir)
        collections = {
            USERS: JsonFileCollection(USERS, base / FILE_NAMES[USERS], id_field="id"),
            TRANSACTIONS: JsonFileCollection(TRANSACTIONS, base / FILE_NAMES[TRANSACTIONS]),
            FRIENDS: JsonFileCollection(FRIENDS, base / FILE_NAMES[FRIENDS]),
            LEAVE_REQUESTS: JsonFileCollection(LEAVE_REQUESTS, base / FILE_NAMES[LEAVE_REQUESTS], id_field="id"),
        }
        for collection in collections.values():
            collection.load()
        super().__init__(
            users=collections[USERS],
            transactions=collections[TRANSACTIONS],
            friends=collections[FRIENDS],
            leave_requests=collections[LEAVE_REQUESTS],
            admins=MemoryCollection(ADMINS, docs=admins),
        )
        logger.info("Data loaded: %s", self.summary())


class MongoStore(Store):
    """Collections of a MongoDB database.

    ``admins`` seeds the admin collection when it is empty, so the same
    static admin list works for both backends.
    """

    blocking_io = True

    def __init__(self, database, admins: Iterable[Document] = (), client: Optional[MongoClient] = None) -> None:
        self._client = client
        admin_collection = MongoCollection(database[ADMINS])
        super().__init__(
            users=MongoCollection(database[USERS], id_field="id"),
            transactions=MongoCollection(database[TRANSACTIONS]),
            friends=MongoCollection(database[FRIENDS]),
            leave_requests=MongoCollection(database[LEAVE_REQUESTS], id_field="id"),
            admins=admin_collection,
        )
        seed = [dict(a) for a in admins]
        if seed and admin_collection.count() == 0:
            for admin in seed:
                admin_collection.insert(admin)
            logger.info("Seeded %d admins into %s", len(seed), database.name)
        logger.info("Connected to MongoDB database %s: %s", database.name, self.summary())

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def load_admins(settings: Settings) -> List[Document]:
    """Read the static admin list from ``ADMINS_JSON`` or the admin file.

    A missing or unreadable source yields an empty list; the error is
    logged and the server still starts.
    """
    raw: Optional[str] = settings.admins_json
    source = "ADMINS_JSON"
    if raw is None:
        path = Path(settings.admin_file)
        if not path.is_absolute():
            path = Path(settings.data_dir) / path
        source = str(path.resolve())
        if not path.exists():
            logger.info("Admin file does not exist at %s", source)
            return []
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Error loading admins from %s: %s", source, exc)
            return []
    try:
        admins = json.loads(raw)
    except ValueError as exc:
        logger.error("Error loading admins from %s: %s", source, exc)
        return []
    if not isinstance(admins, list):
        logger.error("Error loading admins from %s: expected a JSON array", source)
        return []
    admins = [a for a in admins if isinstance(a, dict) and a.get("email")]
    logger.info("Admins loaded from %s: %d", source, len(admins))
    return admins


def build_store(settings: Settings) -> Store:
    """Create the store selected by ``settings.storage_backend``."""
    admins = load_admins(settings)
    backend = settings.storage_backend.lower()
    if backend == "file":
        return FileStore(settings.data_dir, admins=admins)
    if backend == "mongo":
        client = MongoClient(settings.mongo_url)
        return MongoStore(client[settings.mongo_db_name], admins=admins, client=client)
    raise ValueError(f"Unknown storage backend {settings.storage_backend!r}")
