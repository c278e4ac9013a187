"""Tests for DocumentLoader (reading, caching, 'include' and 'extends_default')."""

import threading

import pytest

from ldap_object_schema.exceptions import (
    CyclicReferenceError,
    DocumentMalformedError,
    ResourceUnreadableError,
)
from ldap_object_schema.file_io.schema_files import SchemaFileReader
from ldap_object_schema.models.parsing.document_cache import DocumentCache
from ldap_object_schema.models.parsing.document_loader import DocumentLoader


def _types(document):
    return [o["type"] for o in document["objects"]]


class TestDocumentLoading:

    def test_load_reads_objects(self, loader, schema_dir, write_schema):
        write_schema("main", """
            objects:
              - type: user
                class: user
                attributes: {name: cn}
        """)
        document = loader.load(schema_dir, "main")
        assert _types(document) == ["user"]

    def test_missing_file_is_unreadable(self, loader, schema_dir):
        with pytest.raises(ResourceUnreadableError, match="Cannot read schema file"):
            loader.load(schema_dir, "nope")

    def test_invalid_yaml_is_malformed(self, loader, schema_dir, write_schema):
        write_schema("broken", "objects: [ {type: user\n")
        with pytest.raises(DocumentMalformedError, match="broken.yml"):
            loader.load(schema_dir, "broken")

    def test_non_mapping_root_is_malformed(self, loader, schema_dir, write_schema):
        write_schema("listroot", """
            - type: user
        """)
        with pytest.raises(DocumentMalformedError, match="mapping"):
            loader.load(schema_dir, "listroot")

    def test_objects_must_be_a_list(self, loader, schema_dir, write_schema):
        write_schema("bad", """
            objects: user
        """)
        with pytest.raises(DocumentMalformedError, match="yaml_path=/objects"):
            loader.load(schema_dir, "bad")

    def test_include_must_be_names(self, loader, schema_dir, write_schema):
        write_schema("bad", """
            include: {other: yes}
            objects: []
        """)
        with pytest.raises(DocumentMalformedError):
            loader.load(schema_dir, "bad")

    def test_empty_file_is_empty_document(self, loader, schema_dir, write_schema):
        write_schema("empty", "")
        assert loader.load(schema_dir, "empty") == {}

    def test_extension_is_configurable(self, schema_dir, default_dir, write_schema):
        (schema_dir / "main.yaml").write_text("objects: [{type: user}]\n", encoding="utf-8")
        loader = DocumentLoader(default_dir, cache=DocumentCache(), reader=SchemaFileReader(".yaml"))
        assert _types(loader.load(schema_dir, "main")) == ["user"]


class TestDocumentCaching:

    def test_document_is_read_once(self, loader, reader, schema_dir, write_schema):
        write_schema("main", "objects: [{type: user}]\n")
        first = loader.load(schema_dir, "main")
        second = loader.load(schema_dir, "main")
        assert first is second
        assert reader.total_reads == 1

    def test_same_name_in_different_locations_does_not_alias(self, loader, tmp_path, write_schema):
        first_dir = tmp_path / "first"
        second_dir = tmp_path / "second"
        first_dir.mkdir()
        second_dir.mkdir()
        write_schema("main", "objects: [{type: first}]\n", folder=first_dir)
        write_schema("main", "objects: [{type: second}]\n", folder=second_dir)

        assert _types(loader.load(first_dir, "main")) == ["first"]
        assert _types(loader.load(second_dir, "main")) == ["second"]
        assert len(loader.cache) == 2

    def test_diamond_include_reads_shared_document_once(self, loader, reader, schema_dir, write_schema):
        write_schema("main", """
            include: [left, right]
            objects: []
        """)
        write_schema("left", """
            include: shared
            objects: [{type: left}]
        """)
        write_schema("right", """
            include: shared
            objects: [{type: right}]
        """)
        write_schema("shared", "objects: [{type: shared}]\n")

        document = loader.load(schema_dir, "main")
        assert _types(document) == ["left", "shared", "right", "shared"]
        assert reader.reads[(str(schema_dir.resolve()), "shared")] == 1

    def test_len_waits_for_the_lock(self):
        cache = DocumentCache()
        cache.put("schemas", "main", {"objects": []})
        sizes = []

        with cache.lock:
            worker = threading.Thread(target=lambda: sizes.append(len(cache)))
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            cache.clear()

        worker.join(timeout=5)
        assert sizes == [0]


class TestInclude:

    def test_include_appends_objects_in_declaration_order(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: [groups, computers]
            objects:
              - type: user
              - type: contact
        """)
        write_schema("groups", "objects: [{type: group}]\n")
        write_schema("computers", "objects: [{type: computer}, {type: printer}]\n")

        document = loader.load(schema_dir, "main")
        assert _types(document) == ["user", "contact", "group", "computer", "printer"]

    def test_include_accepts_a_single_name(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: groups
            objects: [{type: user}]
        """)
        write_schema("groups", "objects: [{type: group}]\n")
        assert _types(loader.load(schema_dir, "main")) == ["user", "group"]

    def test_include_does_not_deduplicate(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: other
            objects: [{type: user}]
        """)
        write_schema("other", "objects: [{type: user}]\n")
        assert _types(loader.load(schema_dir, "main")) == ["user", "user"]

    def test_includes_are_expanded_recursively(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: middle
            objects: [{type: a}]
        """)
        write_schema("middle", """
            include: leaf
            objects: [{type: b}]
        """)
        write_schema("leaf", "objects: [{type: c}]\n")
        assert _types(loader.load(schema_dir, "main")) == ["a", "b", "c"]

    def test_missing_include_is_unreadable(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: missing
            objects: []
        """)
        with pytest.raises(ResourceUnreadableError, match="missing.yml"):
            loader.load(schema_dir, "main")

    def test_self_include_is_cyclic(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: main
            objects: [{type: user}]
        """)
        with pytest.raises(CyclicReferenceError):
            loader.load(schema_dir, "main")

    def test_transitive_include_cycle_is_cyclic(self, loader, schema_dir, write_schema):
        write_schema("a", """
            include: b
            objects: []
        """)
        write_schema("b", """
            include: a
            objects: []
        """)
        with pytest.raises(CyclicReferenceError, match="a .* -> b .* -> a"):
            loader.load(schema_dir, "a")

    def test_failed_load_is_not_cached(self, loader, schema_dir, write_schema):
        write_schema("main", """
            include: missing
            objects: []
        """)
        with pytest.raises(ResourceUnreadableError):
            loader.load(schema_dir, "main")
        assert not loader.cache.contains(schema_dir, "main")


class TestDocumentExtendsDefault:

    def test_default_objects_come_first(self, loader, schema_dir, default_dir, write_schema):
        write_schema("ad", """
            objects:
              - type: user
              - type: group
        """, folder=default_dir)
        write_schema("custom", """
            extends_default: ad
            objects:
              - type: printer
        """)
        document = loader.load(schema_dir, "custom")
        assert _types(document) == ["user", "group", "printer"]

    def test_default_document_is_cached_under_default_location(
        self, loader, schema_dir, default_dir, write_schema
    ):
        write_schema("ad", "objects: [{type: user}]\n", folder=default_dir)
        write_schema("ad", """
            extends_default: ad
            objects: [{type: custom}]
        """)
        document = loader.load(schema_dir, "ad")

        assert _types(document) == ["user", "custom"]
        assert _types(loader.cache.get(default_dir, "ad")) == ["user"]
        assert loader.cache.get(schema_dir, "ad") is document

    def test_extends_default_then_include(self, loader, schema_dir, default_dir, write_schema):
        write_schema("ad", "objects: [{type: user}]\n", folder=default_dir)
        write_schema("custom", """
            extends_default: ad
            include: extra
            objects: [{type: own}]
        """)
        write_schema("extra", "objects: [{type: extra}]\n")
        assert _types(loader.load(schema_dir, "custom")) == ["user", "own", "extra"]

    def test_default_document_is_not_modified(self, loader, schema_dir, default_dir, write_schema):
        write_schema("ad", "objects: [{type: user}]\n", folder=default_dir)
        write_schema("custom", """
            extends_default: ad
            objects: [{type: own}]
        """)
        loader.load(schema_dir, "custom")
        assert _types(loader.load(default_dir, "ad")) == ["user"]

    def test_missing_default_document_is_unreadable(self, loader, schema_dir, write_schema):
        write_schema("custom", """
            extends_default: nope
            objects: []
        """)
        with pytest.raises(ResourceUnreadableError):
            loader.load(schema_dir, "custom")
