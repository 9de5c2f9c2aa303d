from unittest.mock import MagicMock

import pytest

from student_bot.chatbase import ChatbaseClient
from student_bot.credentials import CredentialStore
from student_bot.data import AcademicData
from student_bot.gate import SessionGate
from student_bot.processor import MessageProcessor
from student_bot.restricted import RestrictedTopicFilter
from student_bot.routing import build_rules
from student_bot.session import SessionStore
from student_bot.sheets import SheetLogger

STUDENTS = {"ASU1001": "Marie-Claire Joseph", "ASU1002": None}
RESOURCES = {
    "transcript": "https://example.org/transcript",
    "schedule": "https://example.org/schedule",
}


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def credentials():
    return CredentialStore(STUDENTS)


@pytest.fixture
def gate(store, credentials):
    return SessionGate(store, credentials, window_ms=30_000, limit=5)


@pytest.fixture
def academic_data():
    return AcademicData(
        certificates={"ASU1001": "https://example.org/cert/ASU1001"},
        dates={
            "exam": {
                "en": ["2026-11-16 - Mid-term exams"],
                "fr": ["2026-11-16 - Examens de mi-session"],
            },
        },
    )


@pytest.fixture
def rules(academic_data):
    return build_rules(RestrictedTopicFilter(), academic_data, dict(RESOURCES))


@pytest.fixture
def chatbase():
    client = MagicMock(spec=ChatbaseClient)
    client.ask.return_value = "Chatbase says hi"
    return client


@pytest.fixture
def sheets():
    return MagicMock(spec=SheetLogger)


@pytest.fixture
def processor(gate, rules, chatbase, sheets):
    return MessageProcessor(gate, rules, chatbase, sheets)
