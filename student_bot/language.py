from typing import Optional

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("fr", "ht", "en")

FRENCH_WORDS = ("bonjour", "merci", "examens", "classe", "paiement")
CREOLE_WORDS = ("bonjou", "mèsi", "egzamen", "klas", "peyman")

# Labels shown on the /language keyboard
LANGUAGE_CHOICES = {
    "Français": "fr",
    "Kreyòl": "ht",
    "English": "en",
}


def detect_language(text: Optional[str]) -> str:
    """Guess fr / ht / en from a few keywords, defaulting to English."""
    lower = (text or "").lower()
    # "bonjour" contains "bonjou", so French has to be checked first
    if any(word in lower for word in FRENCH_WORDS):
        return "fr"
    if any(word in lower for word in CREOLE_WORDS):
        return "ht"
    return DEFAULT_LANGUAGE
