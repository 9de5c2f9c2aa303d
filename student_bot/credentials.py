import json
import logging
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"


def normalize(text: Optional[str]) -> str:
    return (text or "").strip().upper()


class CredentialStore:
    """Read-only set of valid credentials with optional display names."""

    def __init__(self, credentials: Mapping[str, Optional[str]]):
        self._credentials = {
            normalize(key): name for key, name in credentials.items()
        }

    @classmethod
    def from_student_file(cls, path: Union[str, Path]) -> "CredentialStore":
        """Student-ID mode: JSON object mapping student ID to name."""
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.warning("Student ID file not found: %s", path)
            data = {}
        logger.info("Loaded %d student IDs from %s", len(data), path)
        return cls(data)

    @classmethod
    def from_passcode(cls, passcode: str) -> "CredentialStore":
        """Passcode mode: one shared code, no per-user names."""
        if not passcode:
            logger.warning("Passcode mode enabled but PASSCODE is empty")
            return cls({})
        return cls({passcode: None})

    def resolve(self, text: Optional[str]) -> Optional[Tuple[str, str]]:
        credential_id = normalize(text)
        if not credential_id or credential_id not in self._credentials:
            return None
        return credential_id, self._credentials[credential_id] or UNKNOWN_NAME

    def __len__(self) -> int:
        return len(self._credentials)
