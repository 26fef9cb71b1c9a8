import json

import pytest

from smartattend import storage
from smartattend.errors import PersistenceFailure


def test_load_data_seeds_missing_file(tmp_path):
    path = tmp_path / "nested" / "roster.json"

    assert storage.load_data(str(path), []) == []
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_save_and_load_keep_unicode(tmp_path):
    path = str(tmp_path / "roster.json")
    data = [{"id": 1, "name": "Zoë Ångström"}]

    storage.save_data(path, data)

    assert storage.load_data(path, []) == data
    assert "Zoë" in (tmp_path / "roster.json").read_text(encoding="utf-8")


def test_load_data_raises_on_corrupt_json(tmp_path):
    path = tmp_path / "ledger.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(PersistenceFailure) as exc:
        storage.load_data(str(path), [])
    assert exc.value.filepath == str(path)


def test_save_data_raises_on_unserialisable(tmp_path):
    with pytest.raises(PersistenceFailure):
        storage.save_data(str(tmp_path / "settings.json"), {"when": object()})


def test_keyed_helpers_use_data_folder(tmp_path):
    folder = str(tmp_path)
    storage.save_roster(folder, [{"id": 1}])
    storage.save_ledger(folder, [{"date": "2024-01-10"}])
    storage.save_settings(folder, {"smsEnabled": False})

    assert storage.load_roster(folder) == [{"id": 1}]
    assert storage.load_ledger(folder) == [{"date": "2024-01-10"}]
    assert storage.load_settings(folder) == {"smsEnabled": False}
    assert sorted(p.name for p in tmp_path.iterdir()) == ["ledger.json", "roster.json", "settings.json"]
