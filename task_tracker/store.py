"""Persistence gateway over a Firestore collection of tasks."""
import logging
import uuid
from typing import Callable, Optional

from firebase_admin import firestore
from google.api_core import exceptions as api_exceptions

from task_tracker.errors import NotFound, StoreError
from task_tracker.schema import Task, TaskIn

logger = logging.getLogger(__name__)


def new_task_id() -> str:
    return str(uuid.uuid4())


class FirestoreTaskStore:
    """
    find/insert/replace/delete of tasks keyed by document id.

    The Firestore client is shared by every request; it is safe for
    concurrent use and pools its own channels. Any API failure is re-raised
    as StoreError with the client's message.
    """

    def __init__(
        self,
        client,
        collection_name: str,
        id_factory: Callable[[], str] = new_task_id,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.collection = client.collection(collection_name)
        self.id_factory = id_factory
        self.timeout = timeout

    def list_all(self) -> list[Task]:
        try:
            return [
                Task.from_document(doc.id, doc.to_dict())
                for doc in self.collection.stream(timeout=self.timeout)
            ]
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e

    def find_by_id(self, task_id: str) -> Task:
        try:
            doc = self.collection.document(task_id).get(timeout=self.timeout)
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e
        if not doc.exists:
            raise NotFound(task_id)
        return Task.from_document(doc.id, doc.to_dict())

    def insert(self, task: TaskIn) -> Task:
        stored = Task(**task.model_dump(), id=self.id_factory())
        try:
            self.collection.document(stored.id).create(
                stored.to_document(), timeout=self.timeout
            )
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e
        return stored

    def replace(self, task_id: str, task: TaskIn) -> Task:
        stored = Task(**task.model_dump(), id=task_id)
        fields = stored.to_document()
        fields.setdefault("group", firestore.DELETE_FIELD)
        try:
            # update() carries an exists precondition, so a missing or
            # concurrently deleted document fails instead of being recreated.
            self.collection.document(task_id).update(fields, timeout=self.timeout)
        except api_exceptions.NotFound as e:
            raise NotFound(task_id) from e
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e
        return stored

    def delete(self, task_id: str) -> None:
        try:
            self.collection.document(task_id).delete(
                option=self.client.write_option(exists=True), timeout=self.timeout
            )
        except api_exceptions.NotFound as e:
            raise NotFound(task_id) from e
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e

    def count(self) -> int:
        try:
            results = self.collection.count(alias="all").get(timeout=self.timeout)
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e
        return int(results[0][0].value)

    def ping(self) -> None:
        """Read at most one document to prove the store answers."""
        try:
            list(self.collection.limit(1).stream(timeout=self.timeout))
        except api_exceptions.GoogleAPIError as e:
            raise StoreError(str(e)) from e

    def close(self) -> None:
        self.client.close()
