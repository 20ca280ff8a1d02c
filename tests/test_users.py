import pytest
import yaml

from cms.auth.passwords import hash_password, verify_password
from cms.auth.users import load_users, verify
from cms.core.errors import CredentialsError


def test_verify_correct_password(users_file):
    assert verify("admin", "secret", path=users_file) == "admin"


def test_verify_wrong_password(users_file):
    assert verify("admin", "wrong", path=users_file) is None


def test_verify_unknown_user_and_case(users_file):
    assert verify("nobody", "secret", path=users_file) is None
    assert verify("Admin", "secret", path=users_file) is None


def test_nested_users_format(tmp_path):
    path = tmp_path / "users.yml"
    path.write_text(
        yaml.safe_dump({"users": {"editor": {"password_hash": hash_password("pw")}}}),
        encoding="utf-8",
    )
    assert verify("editor", "pw", path=path) == "editor"


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(CredentialsError):
        load_users(tmp_path / "absent.yml")


@pytest.mark.parametrize("text", ["admin: [unclosed", "- just\n- a list\n", "admin: 12\n", "admin:\n"])
def test_malformed_file_is_fatal(tmp_path, text):
    path = tmp_path / "users.yml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(CredentialsError):
        load_users(path)


def test_verify_password_rejects_garbage_hash():
    assert verify_password("not-a-hash", "secret") is False
    assert verify_password("", "secret") is False
