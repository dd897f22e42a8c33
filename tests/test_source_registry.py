import asyncio
import json

import pytest

from mediaforward.core import SourceRegistry
from mediaforward.exceptions import (
    InvalidSourceError, SourceAlreadyExistsError, SourceNotFoundError
)
from tests.conftest import CountingStore


def read_file(store):
    return json.loads(store.path.read_text(encoding="utf-8"))


class TestLoad:
    def test_missing_file_uses_defaults_and_persists_once(self, store):
        registry = SourceRegistry(store, default_sources=["100", "200"])

        assert registry.load() == ["100", "200"]
        assert store.writes == [["100", "200"]]
        assert read_file(store) == ["100", "200"]

    def test_missing_file_is_not_read(self, tmp_path):
        class UnreadableStore(CountingStore):
            def read(self):
                raise AssertionError("read() called for a missing file")

        store = UnreadableStore(tmp_path / "sources.json")
        registry = SourceRegistry(store, default_sources=["100"])

        assert registry.load() == ["100"]
        assert store.exists()

    def test_corrupt_file_falls_back_to_defaults(self, store):
        store.path.write_text("{not json", encoding="utf-8")
        registry = SourceRegistry(store, default_sources=["7"])

        assert registry.load() == ["7"]
        assert len(store.writes) == 1
        assert read_file(store) == ["7"]

    def test_non_list_document_falls_back_to_defaults(self, store):
        store.path.write_text('{"sources": ["1"]}', encoding="utf-8")
        registry = SourceRegistry(store, default_sources=["9"])

        assert registry.load() == ["9"]

    def test_existing_file_is_loaded_without_rewrite(self, store):
        store.path.write_text('["300", 400, "300", " 500 "]', encoding="utf-8")
        registry = SourceRegistry(store, default_sources=["100"])

        assert registry.load() == ["300", "400", "500"]
        assert store.writes == []

    def test_unwritable_fallback_does_not_raise(self, tmp_path):
        store = CountingStore(tmp_path / "sources.json", fail_writes=True)
        registry = SourceRegistry(store, default_sources=["1", "1", "2"])

        assert registry.load() == ["1", "2"]
        assert len(store.writes) == 1


class TestMutations:
    async def test_add_appends_and_persists(self, registry, store):
        await registry.add("300")

        assert registry.list() == ["100", "200", "300"]
        assert read_file(store) == ["100", "200", "300"]

    async def test_add_duplicate_is_rejected(self, registry, store):
        writes_before = len(store.writes)

        with pytest.raises(SourceAlreadyExistsError):
            await registry.add("100")

        assert registry.list() == ["100", "200"]
        assert len(store.writes) == writes_before

    async def test_add_strips_whitespace_before_duplicate_check(self, registry):
        with pytest.raises(SourceAlreadyExistsError):
            await registry.add(" 200 ")

    async def test_blank_identifier_is_invalid(self, registry):
        with pytest.raises(InvalidSourceError):
            await registry.add("   ")
        with pytest.raises(InvalidSourceError):
            await registry.remove("")

    async def test_remove_keeps_order_of_remaining(self, registry):
        await registry.add("300")
        await registry.remove("200")

        assert registry.list() == ["100", "300"]

    async def test_remove_missing_is_rejected(self, registry):
        with pytest.raises(SourceNotFoundError):
            await registry.remove("999")
        assert registry.list() == ["100", "200"]

    async def test_add_then_remove_restores_previous_state(self, registry, store):
        before = registry.list()

        await registry.add("555")
        await registry.remove("555")

        assert registry.list() == before
        assert read_file(store) == before

    async def test_write_failure_keeps_in_memory_change(self, tmp_path):
        store = CountingStore(tmp_path / "sources.json")
        registry = SourceRegistry(store, default_sources=["100"])
        registry.load()
        store.fail_writes = True

        await registry.add("200")

        assert registry.list() == ["100", "200"]
        assert "200" in registry
        assert read_file(store) == ["100"]

    async def test_concurrent_adds_never_duplicate(self, registry):
        results = await asyncio.gather(
            registry.add("777"), registry.add("777"), registry.add("777"),
            return_exceptions=True
        )

        assert sum(1 for r in results if r is None) == 1
        assert all(isinstance(r, SourceAlreadyExistsError) for r in results if r is not None)
        assert registry.list().count("777") == 1


def test_list_returns_a_copy(registry):
    sources = registry.list()
    sources.append("hacked")

    assert registry.list() == ["100", "200"]


def test_membership_normalizes_identifiers(registry):
    assert 100 in registry
    assert "300" not in registry
    assert None not in registry
    assert len(registry) == 2
