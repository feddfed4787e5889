"""Tests for the cover letter cache."""

import json
import logging
import threading

import pytest

from cover_letter_pipeline import cache as cache_module
from cover_letter_pipeline.cache import CacheEntry, ResponseCache
from cover_letter_pipeline.errors import CacheCorruptError, CacheWriteError


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "cover_letters.json"


class TestLoad:
    """Loading the mapping."""

    def test_missing_file(self, cache_path):
        assert ResponseCache(cache_path).load() == {}

    @pytest.mark.parametrize("content", ["", "   \n"])
    def test_blank_file(self, cache_path, content):
        cache_path.write_text(content)
        assert ResponseCache(cache_path).load() == {}
        assert ResponseCache(cache_path, strict=True).load() == {}

    def test_existing_entries(self, cache_path):
        cache_path.write_text(json.dumps({"Job": [{"returnedQuery": "A"}, {"returnedQuery": "B"}]}))

        store = ResponseCache(cache_path).load()

        assert store == {"Job": [CacheEntry("A"), CacheEntry("B")]}

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            '{"Job": "letter"}',
            '{"Job": [{"letter": "A"}]}',
            '{"Job": [{"returnedQuery": 3}]}',
        ],
    )
    def test_corrupt_is_empty_when_lenient(self, cache_path, content, caplog):
        cache_path.write_text(content)

        with caplog.at_level(logging.WARNING, logger="cover_letter_pipeline.cache"):
            assert ResponseCache(cache_path).load() == {}

        assert "unreadable cover letter cache" in caplog.text

    @pytest.mark.parametrize("content", ["{not json", '{"Job": "letter"}'])
    def test_corrupt_raises_when_strict(self, cache_path, content):
        cache_path.write_text(content)

        with pytest.raises(CacheCorruptError):
            ResponseCache(cache_path, strict=True).load()

    def test_deeply_nested_json_is_empty_when_lenient(self, cache_path, caplog):
        cache_path.write_text("[" * 200000)

        with caplog.at_level(logging.WARNING, logger="cover_letter_pipeline.cache"):
            assert ResponseCache(cache_path).load() == {}

        assert "RecursionError" in caplog.text

    def test_deeply_nested_json_raises_when_strict(self, cache_path):
        cache_path.write_text("[" * 200000)

        with pytest.raises(CacheCorruptError, match="RecursionError"):
            ResponseCache(cache_path, strict=True).load()


class TestAppend:
    """Appending letters."""

    def test_creates_file(self, cache_path):
        ResponseCache(cache_path).append("Backend engineer at Acme Corp", "Dear Hiring Manager,")

        data = json.loads(cache_path.read_text(encoding="utf-8"))
        assert data == {"Backend engineer at Acme Corp": [{"returnedQuery": "Dear Hiring Manager,"}]}

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "data" / "cover_letters.json"
        ResponseCache(path).append("Job", "Letter")
        assert path.exists()

    def test_appends_in_order(self, cache_path):
        cache = ResponseCache(cache_path)
        for i in range(3):
            cache.append("Job", f"Letter {i}")

        assert [e.returned_query for e in cache.load()["Job"]] == ["Letter 0", "Letter 1", "Letter 2"]

    def test_keeps_other_keys(self, cache_path):
        cache_path.write_text(json.dumps({"Other": [{"returnedQuery": "Old"}]}))

        ResponseCache(cache_path).append("Job", "New")

        data = json.loads(cache_path.read_text())
        assert data == {"Other": [{"returnedQuery": "Old"}], "Job": [{"returnedQuery": "New"}]}

    def test_non_ascii_written_verbatim(self, cache_path):
        ResponseCache(cache_path).append("Ingénieur", "Très bien")
        assert "Très bien" in cache_path.read_text(encoding="utf-8")

    def test_lenient_append_over_corrupt_file(self, cache_path):
        cache_path.write_text("{not json")

        ResponseCache(cache_path).append("Job", "Letter")

        assert json.loads(cache_path.read_text()) == {"Job": [{"returnedQuery": "Letter"}]}

    def test_strict_append_leaves_corrupt_file(self, cache_path):
        cache_path.write_text("{not json")

        with pytest.raises(CacheCorruptError):
            ResponseCache(cache_path, strict=True).append("Job", "Letter")

        assert cache_path.read_text() == "{not json"

    def test_write_failure(self, cache_path, monkeypatch):
        cache_path.write_text(json.dumps({"Job": [{"returnedQuery": "Old"}]}))
        before = cache_path.read_bytes()

        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(cache_module.os, "replace", fail)

        with pytest.raises(CacheWriteError, match="disk full"):
            ResponseCache(cache_path).append("Job", "New")

        assert cache_path.read_bytes() == before
        assert list(cache_path.parent.glob("*.tmp")) == []

    def test_serialization_failure_cleans_up_temp_file(self, cache_path, monkeypatch):
        cache_path.write_text(json.dumps({"Job": [{"returnedQuery": "Old"}]}))
        before = cache_path.read_bytes()

        def fail(*args, **kwargs):
            raise OSError("no space left on device")

        monkeypatch.setattr(cache_module.json, "dump", fail)

        with pytest.raises(CacheWriteError, match="no space left"):
            ResponseCache(cache_path).save({"Job": [CacheEntry("New")]})

        assert cache_path.read_bytes() == before
        assert list(cache_path.parent.glob("*.tmp")) == []

    def test_lenient_append_over_deeply_nested_json(self, cache_path):
        cache_path.write_text("[" * 200000)

        ResponseCache(cache_path).append("Job", "Letter")

        assert json.loads(cache_path.read_text()) == {"Job": [{"returnedQuery": "Letter"}]}

    def test_concurrent_appends_are_not_lost(self, cache_path):
        workers = 8
        per_worker = 5

        def work(n):
            cache = ResponseCache(cache_path)
            for i in range(per_worker):
                cache.append("Job" if n % 2 else "Other", f"{n}-{i}")

        threads = [threading.Thread(target=work, args=(n,)) for n in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        store = ResponseCache(cache_path).load()
        assert sum(len(entries) for entries in store.values()) == workers * per_worker


class TestCacheEntry:
    def test_dict_shape(self):
        assert CacheEntry("Letter").to_dict() == {"returnedQuery": "Letter"}
        assert CacheEntry.from_dict({"returnedQuery": "Letter"}) == CacheEntry("Letter")
