"""Shared test fixtures."""

import textwrap
from collections import Counter
from pathlib import Path

import pytest

from ldap_object_schema.config import SchemaParserConfig
from ldap_object_schema.file_io.schema_files import SchemaFileReader
from ldap_object_schema.models.parsing.document_cache import DocumentCache
from ldap_object_schema.models.parsing.document_loader import DocumentLoader
from ldap_object_schema.parser import SchemaYamlParser


class CountingReader(SchemaFileReader):
    """Schema file reader that records how often each file is read."""

    def __init__(self, extension: str = "yml"):
        super().__init__(extension)
        self.reads = Counter()

    def read_text(self, location, name):
        self.reads[(str(Path(location).resolve()), name)] += 1
        return super().read_text(location, name)

    @property
    def total_reads(self) -> int:
        return sum(self.reads.values())


@pytest.fixture
def schema_dir(tmp_path):
    path = tmp_path / "schemas"
    path.mkdir()
    return path


@pytest.fixture
def default_dir(tmp_path):
    path = tmp_path / "defaults"
    path.mkdir()
    return path


@pytest.fixture
def write_schema(schema_dir):
    """Write a YAML schema document into the schema folder (or another folder) and return its path."""
    def _write(name: str, content: str, folder: Path = None) -> Path:
        path = (folder or schema_dir) / f"{name}.yml"
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def reader():
    return CountingReader()


@pytest.fixture
def loader(default_dir, reader):
    return DocumentLoader(default_dir, cache=DocumentCache(), reader=reader)


@pytest.fixture
def schema_parser(schema_dir, default_dir, reader):
    return SchemaYamlParser(schema_dir, default_dir, cache=DocumentCache(), reader=reader)


@pytest.fixture
def bundled_parser(schema_dir):
    """Parser whose 'extends_default' directives resolve against the bundled schemas."""
    return SchemaYamlParser(schema_dir, cache=DocumentCache(), config=SchemaParserConfig())
