import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from bson import ObjectId

# Ensure project root is on sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))

# Repositories are built at import time; point them at a lazy client that is
# never contacted because every test swaps in fake collections.
os.environ.setdefault(
    "MONGODB_URI", "mongodb://localhost:27017/?serverSelectionTimeoutMS=200"
)


def _matches_condition(value, condition):
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for op, expected in condition.items():
            if op == "$gte" and not (value is not None and value >= expected):
                return False
            if op == "$lte" and not (value is not None and value <= expected):
                return False
            if op == "$ne" and value == expected:
                return False
            if op == "$in" and value not in expected:
                return False
        return True
    if isinstance(value, list):
        return condition in value
    return value == condition


def matches(doc, query):
    return all(_matches_condition(doc.get(key), cond) for key, cond in (query or {}).items())


class FakeCursor:
    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key, direction=None):
        keys = key if isinstance(key, list) else [(key, direction or 1)]
        for field, order in reversed(keys):
            self.docs.sort(key=lambda d: d.get(field), reverse=order < 0)
        return self

    def skip(self, count):
        self.docs = self.docs[count:]
        return self

    def limit(self, count):
        if count:
            self.docs = self.docs[:count]
        return self

    def __iter__(self):
        return iter(self.docs)


class FakeCollection:
    """In-memory stand-in for a pymongo collection.

    Supports the query operators the repositories use. ``aggregate`` runs
    $match/$sort/$skip/$limit stages, ignores $lookup/$unwind, and returns
    ``canned[stage]`` rows for pipelines containing a stage it cannot run
    ($group, $project).
    """

    def __init__(self, docs=None):
        self.docs = [dict(d) for d in (docs or [])]
        self.pipelines = []
        self.count_queries = []
        self.canned = {}

    # -- writes --------------------------------------------------------------
    def insert_one(self, doc):
        doc = dict(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    def _apply(self, doc, update):
        for key, value in update.get("$set", {}).items():
            doc[key] = value
        for key, value in update.get("$push", {}).items():
            doc.setdefault(key, []).append(value)
        for key, value in update.get("$pull", {}).items():
            before = list(doc.get(key, []))
            doc[key] = [item for item in before if item != value]
            if doc[key] == before:
                return False
        return True

    def update_one(self, query, update, **_kwargs):
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        modified = self._apply(doc, update)
        return SimpleNamespace(matched_count=1, modified_count=int(modified))

    def find_one_and_update(self, query, update, **_kwargs):
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is None:
            return None
        self._apply(doc, update)
        return dict(doc)

    def find_one_and_delete(self, query):
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is not None:
            self.docs.remove(doc)
        return doc

    def delete_one(self, query):
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)

    def delete_many(self, query):
        keep = [d for d in self.docs if not matches(d, query)]
        deleted = len(self.docs) - len(keep)
        self.docs = keep
        return SimpleNamespace(deleted_count=deleted)

    # -- reads ---------------------------------------------------------------
    def find_one(self, query, projection=None):
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is None:
            return None
        hidden = {k for k, v in (projection or {}).items() if not v}
        return {k: v for k, v in doc.items() if k not in hidden}

    def find(self, query=None, projection=None):
        return FakeCursor(dict(d) for d in self.docs if matches(d, query))

    def count_documents(self, query):
        self.count_queries.append(query)
        return sum(1 for d in self.docs if matches(d, query))

    def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        for stage in pipeline:
            (op,) = stage.keys()
            if op in self.canned:
                return iter(self.canned[op])

        cursor = FakeCursor(dict(d) for d in self.docs)
        for stage in pipeline:
            (op, arg), = stage.items()
            if op == "$match":
                cursor.docs = [d for d in cursor.docs if matches(d, arg)]
            elif op == "$sort":
                cursor.sort(list(arg.items()))
            elif op == "$skip":
                cursor.skip(arg)
            elif op == "$limit":
                cursor.limit(arg)
            elif op in ("$lookup", "$unwind"):
                continue
            else:
                raise NotImplementedError(f"FakeCollection cannot run {op}")
        return iter(cursor)

    def create_index(self, *args, **kwargs):
        pass


@pytest.fixture
def make_collection():
    def _make(docs=None):
        return FakeCollection(docs)
    return _make


@pytest.fixture
def app():
    from app import create_app

    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_id():
    return str(ObjectId())


@pytest.fixture
def logged_in_client(client, user_id):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
    return client
