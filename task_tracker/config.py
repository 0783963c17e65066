"""
Configuration for the task tracker.

Every setting comes from an environment variable. The defaults match a local
development setup: the project's `(default)` Firestore database, collection `tasks`, the
web frontend on http://localhost:8080 and the API on port 8000.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    credentials_path: Optional[str] = None
    project_id: Optional[str] = None
    database_name: str = "(default)"
    collection_name: str = "tasks"
    connect_timeout: float = 10.0
    allowed_origin: str = "http://localhost:8080"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            credentials_path=env.get("GOOGLE_APPLICATION_CREDENTIALS") or None,
            project_id=env.get("FIRESTORE_PROJECT_ID") or None,
            database_name=env.get("FIRESTORE_DATABASE", cls.database_name),
            collection_name=env.get("TASKS_COLLECTION", cls.collection_name),
            connect_timeout=_number(env, "STORE_CONNECT_TIMEOUT", float, cls.connect_timeout),
            allowed_origin=env.get("CORS_ALLOWED_ORIGIN", cls.allowed_origin),
            host=env.get("HOST", cls.host),
            port=_number(env, "PORT", int, cls.port),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )


def _number(env: Mapping[str, str], name: str, kind, default):
    raw = env.get(name)
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw!r}") from None


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
