# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Loads schema documents and expands their document-level directives."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .document_cache import DocumentCache, CacheKey, document_cache
from .yaml_parser import YamlParser, yaml_parser
from ..document_schema import validate_against_schema, format_schema_issues
from ...exceptions import CyclicReferenceError, DocumentMalformedError
from ...file_io.schema_files import SchemaFileReader
from ...resolvers.inheritance_resolver import InheritanceResolver

logger = logging.getLogger(__name__)

# Document-level keys that are consumed while loading
DOCUMENT_DIRECTIVES = ('include', 'extends_default')


class DocumentLoader:
    """Reads schema documents and applies 'extends_default' and 'include'.

    Every storage location is passed explicitly. 'extends_default' always refers to
    a document in ``default_location``; 'include' refers to documents in the same
    location as the including document.
    """

    def __init__(
        self,
        default_location: Union[str, Path],
        cache: Optional[DocumentCache] = None,
        reader: Optional[SchemaFileReader] = None,
        parser: Optional[YamlParser] = None,
    ):
        self.default_location = default_location
        self.cache = cache if cache is not None else document_cache
        self.reader = reader or SchemaFileReader()
        self.parser = parser or yaml_parser
        self.merger = InheritanceResolver()

    def load(self, location: Union[str, Path], name: str) -> Dict[str, Any]:
        """Return the fully expanded document stored under (location, name).

        Raises:
            ResourceUnreadableError: If a document file cannot be read
            DocumentMalformedError: If a document cannot be parsed or has an invalid structure
            CyclicReferenceError: If a document includes or extends itself
        """
        with self.cache.lock:
            return self._load(location, name, ())

    def _load(self, location: Union[str, Path], name: str, chain: Tuple[CacheKey, ...]) -> Dict[str, Any]:
        cached = self.cache.get(location, name)
        if cached is not None:
            logger.debug(f"Loading schema '{name}' from cache: {location}")
            return cached

        key = self.cache.key(location, name)
        if key in chain:
            path = " -> ".join(f"{n} ({loc})" for loc, n in chain + (key,))
            raise CyclicReferenceError(f"Cyclic schema reference detected: {path}")
        chain = chain + (key,)

        source = str(self.reader.schema_path(location, name))
        content = self.reader.read_text(location, name)
        document, source_map = self.parser.load_from_string_with_source(content, source)

        issues = validate_against_schema(document)
        if issues:
            raise DocumentMalformedError(
                f"Schema validation failed for {source}:\n{format_schema_issues(issues, source_map)}"
            )

        document = self._merge_default_document(document, name, chain)
        document = self._merge_included_documents(document, location, name, chain)

        self.cache.put(location, name, document)
        logger.debug(f"Loaded schema '{name}' ({len(document.get('objects') or [])} objects): {source}")

        return document

    def _merge_default_document(
        self, document: Dict[str, Any], name: str, chain: Tuple[CacheKey, ...]
    ) -> Dict[str, Any]:
        """If the 'extends_default' directive is used, merge the document under the named default one."""
        default_name = document.get('extends_default')
        if default_name is None:
            return document

        logger.debug(f"Schema '{name}' extends default schema '{default_name}'")
        default_document = self._load(self.default_location, default_name, chain)
        parent = {k: v for k, v in default_document.items() if k not in DOCUMENT_DIRECTIVES}

        return self.merger.merge_mapping(parent, document)

    def _merge_included_documents(
        self, document: Dict[str, Any], location: Union[str, Path], name: str, chain: Tuple[CacheKey, ...]
    ) -> Dict[str, Any]:
        """If the 'include' directive is used, append the objects of the included documents."""
        includes = document.get('include')
        if includes is None:
            return document

        if not isinstance(includes, list):
            includes = [includes]

        objects = list(document.get('objects') or [])
        for included_name in includes:
            logger.debug(f"Schema '{name}' includes schema '{included_name}'")
            included = self._load(location, included_name, chain)
            objects.extend(included.get('objects') or [])

        document = dict(document)
        document['objects'] = objects
        return document
