import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Hashable, List, Optional


@dataclass
class SessionRecord:
    """Per-user state: auth, rate window, mute, language and email."""
    authenticated: bool = False
    credential_id: Optional[str] = None
    display_name: Optional[str] = None
    timestamps: List[int] = field(default_factory=list)
    muted_until: Optional[int] = None
    language: Optional[str] = None
    email: Optional[str] = None

    def copy(self) -> "SessionRecord":
        return replace(self, timestamps=list(self.timestamps))


class SessionStore:
    """
    In-memory session store keyed by user id.

    Access to a single key is serialized with its own lock, so the polling
    thread and the HTTP service can share one store. Different users never
    wait on each other.
    """

    def __init__(self) -> None:
        self._records: Dict[Hashable, SessionRecord] = {}
        self._locks: Dict[Hashable, threading.RLock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, user_id: Hashable) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def lock(self, user_id: Hashable):
        lock = self._lock_for(user_id)
        with lock:
            yield

    def get(self, user_id: Hashable) -> SessionRecord:
        with self._guard:
            record = self._records.get(user_id)
        return record.copy() if record is not None else SessionRecord()

    def put(self, user_id: Hashable, record: SessionRecord) -> None:
        with self._guard:
            self._records[user_id] = record.copy()

    def update(self, user_id: Hashable,
               fn: Callable[[SessionRecord], None]) -> SessionRecord:
        with self.lock(user_id):
            record = self.get(user_id)
            fn(record)
            self.put(user_id, record)
            return record

    def ensure_language(self, user_id: Hashable, detected: str) -> str:
        """Set the language only if none is stored yet; return the stored one."""
        def _apply(record: SessionRecord) -> None:
            if not record.language:
                record.language = detected

        return self.update(user_id, _apply).language

    def set_language(self, user_id: Hashable, language: str) -> None:
        def _apply(record: SessionRecord) -> None:
            record.language = language

        self.update(user_id, _apply)

    def __len__(self) -> int:
        with self._guard:
            return len(self._records)
