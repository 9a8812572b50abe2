import json

from timesheet.identity import IDENTITY_KEY, LocalIdentity


def test_identity_is_created_once_and_reused(tmp_path):
    path = tmp_path / "nested" / "identity.json"

    first = LocalIdentity(path).get_or_create()
    second = LocalIdentity(path).get_or_create()

    assert first == second
    assert json.loads(path.read_text()) == {IDENTITY_KEY: first}


def test_unreadable_identity_file_is_replaced(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text("garbage")

    identity = LocalIdentity(path).get_or_create()

    assert identity
    assert LocalIdentity(path).load() == identity


def test_separate_files_give_separate_identities(tmp_path):
    assert LocalIdentity(tmp_path / "a.json").get_or_create() != LocalIdentity(tmp_path / "b.json").get_or_create()
