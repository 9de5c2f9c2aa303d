import json

from student_bot.credentials import CredentialStore, normalize
from student_bot.data import STUDENT_IDS_FILE


def test_normalize():
    assert normalize("  asu1001\n") == "ASU1001"
    assert normalize(None) == ""


def test_from_student_file(tmp_path):
    path = tmp_path / "students.json"
    path.write_text(json.dumps({"asu9": "Ana", "ASU10": ""}), encoding="utf-8")
    store = CredentialStore.from_student_file(path)
    assert len(store) == 2
    assert store.resolve("ASU9") == ("ASU9", "Ana")
    assert store.resolve("asu10") == ("ASU10", "Unknown")
    assert store.resolve("ASU11") is None


def test_missing_student_file_is_empty(tmp_path):
    store = CredentialStore.from_student_file(tmp_path / "nope.json")
    assert len(store) == 0
    assert store.resolve("anything") is None


def test_bundled_student_file_loads():
    store = CredentialStore.from_student_file(STUDENT_IDS_FILE)
    assert store.resolve("asu1001") == ("ASU1001", "Marie-Claire Joseph")


def test_empty_passcode_accepts_nothing():
    store = CredentialStore.from_passcode("")
    assert store.resolve("") is None
    assert len(store) == 0
