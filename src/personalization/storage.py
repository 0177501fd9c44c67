"""Client-side persistence: an origin-scoped string store and the profile repository."""

import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from personalization.models import InterestProfile

logger = structlog.get_logger()

PROFILE_KEY = "supportcentre_tracking"
VISITOR_KEY = "supportcentre_visitor_id"


class LocalStore:
    """String key/value store backed by a JSON file.

    Mirrors browser local storage: reads never fail, and when the file cannot
    be read or written the store keeps serving from memory for the rest of the
    session.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._data: dict[str, str] = {}
        self.persistent = self.path is not None
        if self.path and self.path.exists():
            try:
                loaded = json.loads(self.path.read_text())
                self._data = {str(k): str(v) for k, v in loaded.items()}
            except (OSError, ValueError, AttributeError) as e:
                logger.debug("local_store.read_failed", path=str(self.path), error=str(e))
                self.persistent = False

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def _flush(self) -> None:
        if not self.persistent:
            return
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._data))
            os.replace(tmp, self.path)
        except OSError as e:
            logger.debug("local_store.write_failed", path=str(self.path), error=str(e))
            self.persistent = False


class ProfileStorage:
    """load / mutate / save access to the persisted interest profile."""

    def __init__(self, store: LocalStore, key: str = PROFILE_KEY):
        self.store = store
        self.key = key

    def load(self) -> InterestProfile:
        raw = self.store.get(self.key)
        if not raw:
            return InterestProfile()
        try:
            return InterestProfile.model_validate_json(raw)
        except PydanticValidationError:
            logger.debug("profile_storage.corrupt", key=self.key)
            return InterestProfile()

    def exists(self) -> bool:
        return bool(self.store.get(self.key))

    def save(self, profile: InterestProfile) -> None:
        self.store.set(self.key, profile.model_dump_json())

    @contextmanager
    def mutate(self) -> Iterator[InterestProfile]:
        """Read-modify-write; last writer wins (single local writer)."""
        profile = self.load()
        yield profile
        self.save(profile)

    def reset(self) -> None:
        self.store.remove(self.key)
