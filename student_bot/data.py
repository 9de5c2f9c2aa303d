import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
STUDENT_IDS_FILE = DATA_DIR / "student_id.json"
CERTIFICATES_FILE = DATA_DIR / "certificates_students.json"
DATES_FILE = DATA_DIR / "academic_dates.json"


def load_json(path: Union[str, Path], default: Any = None) -> Any:
    """Load a JSON file, returning ``default`` if it is missing or broken."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        logger.warning("Data file not found: %s", path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
    return {} if default is None else default


@dataclass
class AcademicData:
    """Static lookup tables behind the FAQ answers."""
    certificates: Dict[str, str] = field(default_factory=dict)
    # category -> language -> list of "date - label" lines
    dates: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    @classmethod
    def load(cls,
             certificates_path: Union[str, Path] = CERTIFICATES_FILE,
             dates_path: Union[str, Path] = DATES_FILE) -> "AcademicData":
        certificates = load_json(certificates_path)
        dates = load_json(dates_path)
        logger.info(
            "Loaded %d certificate links and %d date categories",
            len(certificates), len(dates))
        return cls(
            certificates={k.strip().upper(): v for k, v in certificates.items()},
            dates=dates,
        )

    def certificate_for(self, credential_id: Optional[str]) -> Optional[str]:
        if not credential_id:
            return None
        return self.certificates.get(credential_id.strip().upper())

    def dates_for(self, category: str, lang: str) -> List[str]:
        by_lang = self.dates.get(category) or {}
        return by_lang.get(lang) or by_lang.get("en") or []
