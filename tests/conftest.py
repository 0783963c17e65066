import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from firebase_admin import firestore
from google.api_core import exceptions as api_exceptions

from task_tracker.config import Settings
from task_tracker.errors import NotFound, StoreError
from task_tracker.main import create_app
from task_tracker.schema import Task, TaskIn


class InMemoryTaskStore:
    """Stand-in for FirestoreTaskStore keeping tasks in a dict."""

    def __init__(self, id_factory):
        self.id_factory = id_factory
        self.tasks = {}
        self.error = None

    def _check(self):
        if self.error:
            raise StoreError(self.error)

    def list_all(self):
        self._check()
        return list(self.tasks.values())

    def find_by_id(self, task_id):
        self._check()
        if task_id not in self.tasks:
            raise NotFound(task_id)
        return self.tasks[task_id]

    def insert(self, task: TaskIn):
        self._check()
        stored = Task(**task.model_dump(), id=self.id_factory())
        self.tasks[stored.id] = stored
        return stored

    def replace(self, task_id, task: TaskIn):
        self._check()
        if task_id not in self.tasks:
            raise NotFound(task_id)
        stored = Task(**task.model_dump(), id=task_id)
        self.tasks[task_id] = stored
        return stored

    def delete(self, task_id):
        self._check()
        if self.tasks.pop(task_id, None) is None:
            raise NotFound(task_id)

    def count(self):
        self._check()
        return len(self.tasks)


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def get(self, timeout=None):
        self.collection.check()
        self.collection.reads += 1
        return FakeSnapshot(self.id, self.collection.docs.get(self.id))

    def create(self, data, timeout=None):
        self.collection.check()
        if self.id in self.collection.docs:
            raise api_exceptions.Conflict("Document already exists")
        self.collection.docs[self.id] = dict(data)

    def update(self, field_updates, option=None, timeout=None):
        self.collection.check()
        if self.id not in self.collection.docs:
            raise api_exceptions.NotFound(f"No document to update: {self.id}")
        doc = self.collection.docs[self.id]
        for key, value in field_updates.items():
            if value is firestore.DELETE_FIELD:
                doc.pop(key, None)
            else:
                doc[key] = value

    def delete(self, option=None, timeout=None):
        self.collection.check()
        if option is not None and option.exists and self.id not in self.collection.docs:
            raise api_exceptions.NotFound(f"No document to update: {self.id}")
        self.collection.docs.pop(self.id, None)


class FakeCollection:
    """The slice of firestore.CollectionReference the task store uses."""

    def __init__(self):
        self.docs = {}
        self.error = None
        self.limit_used = None
        self.reads = 0

    def check(self):
        if self.error:
            raise self.error

    def document(self, doc_id):
        return FakeDocument(self, doc_id)

    def stream(self, timeout=None):
        self.check()
        return iter([FakeSnapshot(doc_id, data) for doc_id, data in self.docs.items()])

    def limit(self, count):
        self.limit_used = count
        collection = self

        class _Limited:
            def stream(self, timeout=None):
                return iter(list(collection.stream(timeout=timeout))[:count])

        return _Limited()

    def count(self, alias=None):
        collection = self

        class _Aggregation:
            def get(self, timeout=None):
                collection.check()
                return [[SimpleNamespace(alias=alias, value=len(collection.docs))]]

        return _Aggregation()


class FakeClient:
    def __init__(self):
        self.collections = {}
        self.closed = False

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())

    def write_option(self, exists=None):
        return SimpleNamespace(exists=exists)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def store(id_factory):
    return InMemoryTaskStore(id_factory)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(settings, store):
    with TestClient(create_app(settings=settings, store=store)) as c:
        yield c


@pytest.fixture
def report_payload():
    return {
        "description": "Write report",
        "deadline": "2024-12-31",
        "timeRequired": "3h",
        "priority": "High",
        "urgency": 5,
        "dependencies": [],
        "resources": ["Laptop"],
        "subtasks": ["Draft", "Review"],
    }
