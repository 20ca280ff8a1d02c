import pytest

from cms.core.errors import StorageError
from cms.infra.document_repo import FileDocumentStore, MemoryDocumentStore, is_safe_basename


@pytest.fixture(params=["file", "memory"])
def store(request, tmp_path):
    if request.param == "file":
        s = FileDocumentStore(tmp_path / "docs")
        s.ensure()
        return s
    return MemoryDocumentStore()


@pytest.mark.parametrize("name", ["about.md", "changes.txt", "a.b.txt"])
def test_create_then_list_includes_name(store, name):
    store.create(name)
    assert name in store.list()
    assert store.read(name) == b""


def test_write_is_full_overwrite(store):
    store.create("notes.txt")
    store.write("notes.txt", b"hello")
    store.write("notes.txt", b"hello")
    assert store.read("notes.txt") == b"hello"

    store.write("notes.txt", b"hi")
    assert store.read("notes.txt") == b"hi"


def test_create_truncates_existing(store):
    store.write("notes.txt", b"old content")
    store.create("notes.txt")
    assert store.read("notes.txt") == b""


def test_exists_uses_given_listing(store):
    store.create("a.txt")
    snapshot = store.list()
    store.delete("a.txt")
    assert store.exists("a.txt", snapshot)
    assert not store.exists("a.txt")


def test_delete_missing_fails(store):
    with pytest.raises(StorageError):
        store.delete("missing.txt")


def test_read_missing_fails(store):
    with pytest.raises(StorageError):
        store.read("missing.txt")


def test_delete_removes_from_listing(store):
    store.create("gone.md")
    store.delete("gone.md")
    assert "gone.md" not in store.list()


def test_missing_directory_lists_empty(tmp_path):
    assert FileDocumentStore(tmp_path / "nope").list() == []


def test_file_store_rejects_traversal(tmp_path):
    s = FileDocumentStore(tmp_path / "docs")
    s.ensure()
    with pytest.raises(StorageError):
        s.write("../escape.txt", b"x")
    assert not (tmp_path / "escape.txt").exists()


def test_is_safe_basename():
    assert is_safe_basename("ok.txt")
    assert not is_safe_basename("")
    assert not is_safe_basename("..")
    assert not is_safe_basename("a/b.txt")
    assert not is_safe_basename("a\\b.txt")
    assert not is_safe_basename("a\x00.txt")
