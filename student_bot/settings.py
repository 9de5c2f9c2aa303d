from dotenv import load_dotenv
import os

from .data import CERTIFICATES_FILE, DATES_FILE, STUDENT_IDS_FILE

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    TELEGRAM_TOKEN: str = os.getenv('TELEGRAM_TOKEN') or os.getenv('BOT_TOKEN')
    ADMIN_TELEGRAM_ID: str = os.getenv('ADMIN_TELEGRAM_ID')

    CHATBASE_URL: str = os.getenv(
        'CHATBASE_URL', 'https://www.chatbase.co/api/v1/chat')
    CHATBASE_BOT_ID: str = os.getenv('CHATBASE_BOT_ID')
    CHATBASE_API_KEY: str = os.getenv('CHATBASE_API_KEY')

    SHEET_URL: str = os.getenv('SHEET_URL')
    LOG_SHEET_URL: str = os.getenv('LOG_SHEET_URL')

    # "student_ids" or "passcode"
    AUTH_MODE: str = os.getenv('AUTH_MODE', 'student_ids')
    PASSCODE: str = os.getenv('PASSCODE', '')
    STUDENT_IDS_PATH: str = os.getenv('STUDENT_IDS_PATH', str(STUDENT_IDS_FILE))
    CERTIFICATES_PATH: str = os.getenv(
        'CERTIFICATES_PATH', str(CERTIFICATES_FILE))
    DATES_PATH: str = os.getenv('DATES_PATH', str(DATES_FILE))

    TRANSCRIPT_URL: str = os.getenv(
        'TRANSCRIPT_URL',
        'https://drive.google.com/file/d/TRANSCRIPT_ID/view?usp=sharing')
    SCHEDULE_URL: str = os.getenv(
        'SCHEDULE_URL',
        'https://drive.google.com/file/d/SCHEDULE_ID/view?usp=sharing')

    RATE_LIMIT: int = int(os.getenv('RATE_LIMIT', '5'))
    RATE_WINDOW_MS: int = int(os.getenv('RATE_WINDOW_MS', '30000'))
    RESET_WINDOW_ON_UNMUTE: bool = _get_bool('RESET_WINDOW_ON_UNMUTE', True)
    HEAVY_CONCURRENCY: int = int(os.getenv('HEAVY_CONCURRENCY', '4'))

    RUN_TELEGRAM_BOT: bool = _get_bool('RUN_TELEGRAM_BOT', True)
    SERVICE_HOST: str = os.getenv('SERVICE_HOST', 'localhost')
    SERVICE_PORT: int = int(os.getenv('SERVICE_PORT', '9999'))


settings = Settings()
