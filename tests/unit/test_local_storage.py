import pytest

from studio_eighty7.adapters.local_storage import InMemoryStorage, JsonFileStorage
from studio_eighty7.core.ports.storage import StorageError


@pytest.fixture
def file_storage(tmp_path):
    return JsonFileStorage(tmp_path / "client" / "storage.json")


def test_file_storage_round_trip(file_storage):
    assert file_storage.get_item("k") is None

    file_storage.set_item("k", "v")
    assert file_storage.get_item("k") == "v"

    file_storage.remove_item("k")
    assert file_storage.get_item("k") is None


def test_file_storage_shares_state_between_instances(tmp_path):
    path = tmp_path / "shared.json"
    JsonFileStorage(path).set_item("k", "v")
    assert JsonFileStorage(path).get_item("k") == "v"


def test_file_storage_remove_missing_key_is_noop(file_storage):
    file_storage.remove_item("missing")
    assert not file_storage.path.exists()


def test_file_storage_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get_item("k")


def test_file_storage_non_object_raises_storage_error(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get_item("k")


def test_in_memory_storage():
    storage = InMemoryStorage()
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"
    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None
