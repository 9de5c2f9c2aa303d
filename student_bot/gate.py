import logging
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Optional

from .credentials import CredentialStore
from .session import SessionRecord, SessionStore

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MS = 30_000
DEFAULT_LIMIT = 5


class Outcome(str, Enum):
    MUTED = "muted"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    AUTH_SUCCEEDED = "auth_succeeded"
    PROCEED = "proceed"


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    until: Optional[int] = None
    display_name: Optional[str] = None
    credential_id: Optional[str] = None

    @classmethod
    def muted(cls, until: int) -> "Decision":
        return cls(Outcome.MUTED, until=until)

    @classmethod
    def rate_limited(cls, until: int) -> "Decision":
        return cls(Outcome.RATE_LIMITED, until=until)

    @classmethod
    def auth_failed(cls) -> "Decision":
        return cls(Outcome.AUTH_FAILED)

    @classmethod
    def auth_succeeded(cls, display_name: str,
                       credential_id: str) -> "Decision":
        return cls(Outcome.AUTH_SUCCEEDED, display_name=display_name,
                   credential_id=credential_id)

    @classmethod
    def proceed(cls) -> "Decision":
        return cls(Outcome.PROCEED)


class SessionGate:
    """
    Decides for each inbound message whether the user is muted,
    rate limited, still has to authenticate, or may proceed.

    The whole evaluation runs under the user's store lock and performs
    no I/O. Successive ``now`` values for one user must not decrease.
    """

    def __init__(self,
                 store: SessionStore,
                 credentials: CredentialStore,
                 window_ms: int = DEFAULT_WINDOW_MS,
                 limit: int = DEFAULT_LIMIT,
                 reset_window_on_unmute: bool = True):
        self.store = store
        self.credentials = credentials
        self.window_ms = int(window_ms)
        self.limit = int(limit)
        self.reset_window_on_unmute = reset_window_on_unmute

    def evaluate(self, user_id: Hashable, message_text: Optional[str],
                 now: int) -> Decision:
        with self.store.lock(user_id):
            record = self.store.get(user_id)
            decision = self._evaluate(user_id, record, message_text, now)
            self.store.put(user_id, record)
            return decision

    def _evaluate(self, user_id: Hashable, record: SessionRecord,
                  message_text: Optional[str], now: int) -> Decision:
        if record.muted_until is not None:
            if now < record.muted_until:
                return Decision.muted(record.muted_until)
            logger.info("User %s unmuted", user_id)
            record.muted_until = None
            if self.reset_window_on_unmute:
                record.timestamps = []

        cutoff = now - self.window_ms
        record.timestamps = [ts for ts in record.timestamps if ts >= cutoff]
        record.timestamps.append(now)
        if len(record.timestamps) > self.limit:
            record.muted_until = now + self.window_ms
            logger.warning(
                "User %s exceeded %d messages per %d ms, muted until %d",
                user_id, self.limit, self.window_ms, record.muted_until)
            return Decision.rate_limited(record.muted_until)

        if not record.authenticated:
            resolved = self.credentials.resolve(message_text)
            if resolved is None:
                logger.info("User %s failed authentication", user_id)
                return Decision.auth_failed()
            credential_id, display_name = resolved
            record.authenticated = True
            record.credential_id = credential_id
            record.display_name = display_name
            logger.info("User %s authenticated as %s", user_id, credential_id)
            return Decision.auth_succeeded(display_name, credential_id)

        return Decision.proceed()
