import pytest

from pokemon_rpg.storage import FileStorage, InMemoryStorage


@pytest.fixture(params=["memory", "file"])
def any_storage(request, tmp_path):
    if request.param == "memory":
        return InMemoryStorage()
    return FileStorage(tmp_path / "store")


def test_missing_key_reads_none(any_storage):
    assert any_storage.get_item("absent") is None
    assert any_storage.keys() == []


def test_set_get_and_overwrite(any_storage):
    any_storage.set_item("slot", "first")
    any_storage.set_item("slot", "second")
    assert any_storage.get_item("slot") == "second"


def test_keys_are_sorted(any_storage):
    for key in ("b", "a", "c"):
        any_storage.set_item(key, key.upper())
    assert any_storage.keys() == ["a", "b", "c"]


def test_remove_is_idempotent(any_storage):
    any_storage.set_item("slot", "value")
    any_storage.remove_item("slot")
    any_storage.remove_item("slot")
    assert any_storage.get_item("slot") is None


def test_file_storage_leaves_no_temp_files(tmp_path):
    storage = FileStorage(tmp_path)
    storage.set_item("slot", "{}")
    assert sorted(path.name for path in tmp_path.iterdir()) == ["slot.json"]
