"""Unit tests for the JSON record store."""
import json
import threading

from echochamber.core.record_store import RecordStore
from conftest import make_record


class TestRead:
    def test_missing_file_reads_empty(self, tmp_path):
        assert RecordStore(tmp_path / "nope.json").read() == []

    def test_malformed_json_reads_empty(self, tmp_path):
        p = tmp_path / "db.json"
        p.write_text("{not json")
        assert RecordStore(p).read() == []

    def test_non_list_document_reads_empty(self, tmp_path):
        p = tmp_path / "db.json"
        p.write_text('{"id": "x"}')
        assert RecordStore(p).read() == []

    def test_malformed_entries_are_skipped(self, tmp_path):
        p = tmp_path / "db.json"
        p.write_text(json.dumps([
            {"id": "ok", "filename": "ok.mp3", "original_filename": "a.mp3",
             "mimetype": "audio/mpeg", "upload_time": 5, "plays": 2},
            {"filename": "no-id.mp3"},
            "garbage",
        ]))
        records = RecordStore(p).read()
        assert [r.id for r in records] == ["ok"]
        assert records[0].play_count == 2

    def test_invalid_utf8_reads_empty(self, tmp_path):
        p = tmp_path / "db.json"
        p.write_bytes(b'[{"id": "\xff\xfe"}]')
        assert RecordStore(p).read() == []

    def test_infinite_timestamp_entry_is_skipped(self, tmp_path):
        p = tmp_path / "db.json"
        p.write_text(
            '[{"id": "a", "filename": "a.mp3", "upload_time": Infinity},'
            ' {"id": "b", "filename": "b.mp3", "upload_time": 7}]'
        )
        assert [r.id for r in RecordStore(p).read()] == ["b"]

    def test_missing_counters_default_to_zero(self, tmp_path):
        p = tmp_path / "db.json"
        p.write_text(json.dumps([{"id": "a", "filename": "a.mp3", "mimetype": "audio/mpeg"}]))
        r = RecordStore(p).read()[0]
        assert r.play_count == 0
        assert r.upload_timestamp == 0


class TestWrite:
    def test_initialize_creates_empty_document(self, tmp_path):
        s = RecordStore(tmp_path / "data" / "database.json")
        s.initialize()
        assert json.loads(s.path.read_text()) == []

    def test_initialize_keeps_existing_document(self, store):
        store.write([make_record("a")])
        store.initialize()
        assert [r.id for r in store.read()] == ["a"]

    def test_persisted_keys(self, store):
        store.write([make_record("abc", upload_time=10, plays=3)])
        data = json.loads(store.path.read_text())
        assert data == [{
            "id": "abc",
            "filename": "abc.mp3",
            "original_filename": "original-abc.mp3",
            "mimetype": "audio/mpeg",
            "upload_time": 10,
            "plays": 3,
        }]

    def test_round_trip_preserves_values(self, store):
        records = [make_record("a", plays=1), make_record("b", mimetype="video/mp4", ext=".mp4")]
        assert store.write(records)
        assert store.write(store.read())
        assert store.read() == records

    def test_write_failure_returns_false(self, tmp_path):
        s = RecordStore(tmp_path / "missing-dir" / "db.json")
        assert s.write([make_record("a")]) is False

    def test_no_temp_files_left_behind(self, store):
        store.write([make_record("a")])
        assert [p.name for p in store.path.parent.iterdir()] == ["database.json"]


def test_lock_is_reentrant(store):
    with store.lock():
        with store.lock():
            store.write([make_record("a")])
    assert len(store.read()) == 1


def test_lock_serializes_read_modify_write(store):
    store.write([])

    def append(i):
        with store.lock():
            records = store.read()
            records.append(make_record(f"r{i}"))
            store.write(records)

    threads = [threading.Thread(target=append, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.read()) == 20
