import json
import logging
from pathlib import Path

from filelock import FileLock

from ristoword.models import InventoryItem, Order
from ristoword.services.collection import JsonCollection, load_records, next_id


def _item(name: str = "Farina", quantity: float = 10) -> dict:
    return {"name": name, "unit": "kg", "quantity": quantity}


def test_missing_file_is_created_empty(tmp_path: Path):
    path = tmp_path / "nested" / "inventory.json"

    collection = JsonCollection(path, InventoryItem)

    assert len(collection) == 0
    assert collection.next_id == 1
    assert path.read_text(encoding="utf-8") == "[]"


def test_corrupt_file_loads_empty_and_logs(tmp_path: Path, caplog):
    path = tmp_path / "orders.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        records = load_records(path, Order)

    assert records == []
    assert "Error reading" in caplog.text


def test_non_array_content_loads_empty(tmp_path: Path):
    path = tmp_path / "inventory.json"
    path.write_text('{"id": 1}', encoding="utf-8")

    assert load_records(path, InventoryItem) == []


def test_one_invalid_entry_discards_whole_file(tmp_path: Path):
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps([
        {"id": 1, "name": "Farina", "unit": "kg", "quantity": 3},
        {"name": "senza id", "unit": "kg", "quantity": 1},
    ]), encoding="utf-8")

    assert load_records(path, InventoryItem) == []


def test_next_id():
    assert next_id([]) == 1
    records = [InventoryItem(id=i, **_item()) for i in (3, 9, 4)]
    assert next_id(records) == 10


def test_append_assigns_increasing_ids_and_persists(tmp_path: Path):
    path = tmp_path / "inventory.json"
    collection = JsonCollection(path, InventoryItem)

    first = collection.append(_item("Farina"))
    second = collection.append(_item("Lievito"))

    assert (first.id, second.id) == (1, 2)
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert [entry["name"] for entry in stored] == ["Farina", "Lievito"]


def test_file_is_pretty_printed_with_two_spaces(tmp_path: Path):
    path = tmp_path / "inventory.json"
    collection = JsonCollection(path, InventoryItem)

    collection.append(_item("Caffè"))

    text = path.read_text(encoding="utf-8")
    assert text.startswith('[\n  {\n    "id": 1,')
    assert "Caffè" in text


def test_reload_round_trip(tmp_path: Path):
    path = tmp_path / "orders.json"
    collection = JsonCollection(path, Order)
    for table in (1, 2, 3):
        collection.append({"table": table, "covers": 2, "area": "sala", "waiter": "Luca"})
    collection.update(2, lambda order: setattr(order, "paid", True))

    reloaded = JsonCollection(path, Order)

    assert [o.to_json() for o in reloaded] == [o.to_json() for o in collection]
    assert reloaded.next_id == 4


def test_next_id_continues_from_highest_loaded(tmp_path: Path):
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps([
        {"id": 7, "name": "Farina", "unit": "kg", "quantity": 1},
        {"id": 2, "name": "Sale", "unit": "kg", "quantity": 1},
    ]), encoding="utf-8")

    collection = JsonCollection(path, InventoryItem)

    assert collection.append(_item()).id == 8
    assert collection.append(_item()).id == 9


def test_find(inventory):
    inventory.append(_item("Farina"))
    salt = inventory.append(_item("Sale"))

    assert inventory.find(salt.id) is salt
    assert inventory.find(42) is None


def test_update_unknown_id_writes_nothing(tmp_path: Path):
    path = tmp_path / "inventory.json"
    collection = JsonCollection(path, InventoryItem)
    collection.append(_item())
    before = path.read_text(encoding="utf-8")
    calls = []

    result = collection.update(99, calls.append)

    assert result is None
    assert calls == []
    assert path.read_text(encoding="utf-8") == before


def test_write_failure_keeps_memory_state(tmp_path: Path, caplog):
    path = tmp_path / "inventory.json"
    collection = JsonCollection(path, InventoryItem)
    path.unlink()
    path.mkdir()

    with caplog.at_level(logging.ERROR):
        item = collection.append(_item())

    assert item.id == 1
    assert collection.find(1) is item
    assert "Error saving" in caplog.text


def test_deeply_nested_file_loads_empty_and_logs(tmp_path: Path, caplog):
    path = tmp_path / "inventory.json"
    path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        collection = JsonCollection(path, InventoryItem)

    assert len(collection) == 0
    assert collection.next_id == 1
    assert "Error reading" in caplog.text


def test_lock_timeout_keeps_memory_state(tmp_path: Path, caplog):
    path = tmp_path / "inventory.json"
    collection = JsonCollection(path, InventoryItem, lock_timeout=0.1)

    with FileLock(str(collection.lock_path)), caplog.at_level(logging.ERROR):
        item = collection.append(_item())

    assert item.id == 1
    assert collection.find(1) is item
    assert collection.next_id == 2
    assert "Lock timeout" in caplog.text
    assert path.read_text(encoding="utf-8") == "[]"
