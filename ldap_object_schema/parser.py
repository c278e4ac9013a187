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

"""Parses LDAP object schema definitions from YAML schema files."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from .builder.schema_builder import SchemaBuilder
from .config import SchemaParserConfig, parser_config
from .file_io.schema_files import SchemaFileReader
from .models.object_schema import LdapObjectSchema
from .models.parsing.document_cache import DocumentCache
from .models.parsing.document_loader import DocumentLoader
from .resolvers.inheritance_resolver import ObjectInheritanceResolver

logger = logging.getLogger(__name__)


class SchemaYamlParser:
    """Parses a schema definition from YAML files in a schema folder.

    Documents are cached per (folder, name) in a process-wide cache unless a
    dedicated ``cache`` is given. 'extends_default' directives are looked up in
    ``default_schema_folder``, which defaults to the schemas bundled with the package.
    """

    def __init__(
        self,
        schema_folder: Union[str, Path, None] = None,
        default_schema_folder: Union[str, Path, None] = None,
        *,
        cache: Optional[DocumentCache] = None,
        reader: Optional[SchemaFileReader] = None,
        config: Optional[SchemaParserConfig] = None,
    ):
        config = config or parser_config
        self.schema_folder = schema_folder if schema_folder is not None else config.schema_folder
        self.default_schema_folder = (
            default_schema_folder if default_schema_folder is not None else config.default_schema_folder
        )
        self.reader = reader or SchemaFileReader(config.file_extension)
        self.loader = DocumentLoader(self.default_schema_folder, cache=cache, reader=self.reader)
        self.builder = SchemaBuilder(ObjectInheritanceResolver(self.loader))

    def get_schema_modification_time(self, schema_name: str) -> datetime:
        """Given the schema name, return the last time the schema file was modified (UTC).

        Raises:
            ResourceUnreadableError: If the schema file cannot be read
        """
        return self.reader.modification_time(self.schema_folder, schema_name)

    def parse(self, schema_name: str, object_type: str) -> LdapObjectSchema:
        """Parse a single object type from a schema."""
        document = self.loader.load(self.schema_folder, schema_name)
        return self.builder.build(document, self.schema_folder, schema_name, object_type)

    def parse_all(self, schema_name: str) -> List[LdapObjectSchema]:
        """Parse every object type defined in a schema, in order of first definition."""
        document = self.loader.load(self.schema_folder, schema_name)

        types: List[str] = []
        for ldap_object in document.get('objects') or []:
            object_type = ldap_object.get('type') if isinstance(ldap_object, dict) else None
            if object_type is not None and object_type not in types:
                types.append(object_type)

        logger.debug(f"Parsing {len(types)} object types from schema '{schema_name}'")
        return [self.builder.build(document, self.schema_folder, schema_name, t) for t in types]
