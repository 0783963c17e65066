"""
Startup and shutdown of the document store.

connect() opens the Firestore client and pings it within the configured
timeout; seed_if_empty() inserts one sample task into an empty collection.
Both failures are fatal: the service never starts half connected.
"""
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore

from task_tracker.config import Settings
from task_tracker.errors import FatalStartupError, StoreError
from task_tracker.schema import Task, TaskIn
from task_tracker.store import FirestoreTaskStore

logger = logging.getLogger(__name__)

APP_NAME = "task-tracker"


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    cred = (
        credentials.Certificate(settings.credentials_path)
        if settings.credentials_path
        else credentials.ApplicationDefault()
    )
    options = {"projectId": settings.project_id} if settings.project_id else None
    return firebase_admin.initialize_app(cred, options=options, name=APP_NAME)


def connect(settings: Settings) -> FirestoreTaskStore:
    try:
        fb_app = initialize_firebase(settings)
        client = firestore.client(app=fb_app, database_id=settings.database_name)
        store = FirestoreTaskStore(
            client, settings.collection_name, timeout=settings.connect_timeout
        )
        store.ping()
    except Exception as e:
        # Credential, channel and ping failures all abort startup.
        raise FatalStartupError(f"Could not initialize database: {e}") from e

    logger.info("Successfully connected to Firestore!")
    logger.info(
        f"Database '{settings.database_name}' and collection "
        f"'{settings.collection_name}' initialized successfully!"
    )
    return store


def sample_task() -> TaskIn:
    return TaskIn(
        description="Sample Task",
        deadline="2024-12-31",
        timeRequired="2h",
        priority="Medium",
        urgency=3,
        dependencies=[],
        resources=["Computer"],
        subtasks=["Step 1", "Step 2"],
    )


def seed_if_empty(store) -> Optional[Task]:
    if store.count() > 0:
        return None
    task = store.insert(sample_task())
    logger.info("Sample task created successfully!")
    return task


def start(settings: Settings) -> FirestoreTaskStore:
    store = connect(settings)
    try:
        seed_if_empty(store)
    except StoreError as e:
        raise FatalStartupError(f"Could not initialize database: {e}") from e
    return store


def disconnect(store: FirestoreTaskStore) -> None:
    try:
        store.close()
        firebase_admin.delete_app(firebase_admin.get_app(APP_NAME))
    except Exception as e:
        raise FatalStartupError(f"Could not close database connection: {e}") from e
    logger.info("Disconnected from Firestore")
