import re
import unicodedata
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

ZW_CLASS = "[\u200B\u200C\u200D\u2060\uFEFF]"

RESTRICTED_KEYWORDS = [
    "ritual",
    "dream",
    "spiritual",
    "kabbalah",
    "initiation",
    "symbol",
    "meditation",
    "vision",
    "energy",
]


def normalize_unicode(text: str) -> str:
    t = unicodedata.normalize("NFKC", text).casefold()
    t = re.sub(ZW_CLASS, "", t)
    t = re.sub(r"[ \t\r\f\v]+", " ", t)
    return t.strip()


@dataclass
class Detection:
    is_restricted: bool
    hits: List[str]


class RestrictedTopicFilter:
    """Substring keyword filter for topics the bot must not discuss."""

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        words = RESTRICTED_KEYWORDS if keywords is None else keywords
        self.keywords = [normalize_unicode(w) for w in words if w]
        self._patterns = [
            re.compile(re.escape(w), re.IGNORECASE | re.UNICODE)
            for w in self.keywords
        ]

    @staticmethod
    def preprocess(text: str) -> str:
        return normalize_unicode(text)

    def detect(self, text: Optional[str]) -> Detection:
        t = self.preprocess(text or "")
        hits = [p.pattern for p in self._patterns if p.search(t)]
        if hits:
            logger.warning("Restricted topic detected: hits=%s", hits)
        return Detection(is_restricted=bool(hits), hits=hits)
