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

import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..exceptions import (
    AttributesNotAssociativeError,
    MissingAttributesError,
    MissingClassOrCategoryError,
    NoObjectsSectionError,
    ObjectDefinitionError,
)
from ..models.object_schema import LdapObjectSchema
from ..resolvers.inheritance_resolver import ObjectInheritanceResolver

logger = logging.getLogger(__name__)

# Object definition option -> LdapObjectSchema field
OPTION_FIELDS = (
    ('class', 'object_class'),
    ('category', 'object_category'),
    ('attributes_to_select', 'attributes_to_select'),
    ('repository', 'repository'),
    ('default_values', 'default_values'),
    ('required_attributes', 'required_attributes'),
    ('default_container', 'default_container'),
    ('converter_options', 'converter_options'),
    ('multivalued_attributes', 'multivalued_attributes'),
    ('base_dn', 'base_dn'),
)


def _is_associative_key(key: Any) -> bool:
    if not isinstance(key, str):
        return False
    return not key.strip().lstrip('+-').isdigit()


class SchemaBuilder:
    """Builds LdapObjectSchema instances from schema documents."""

    def __init__(self, resolver: ObjectInheritanceResolver):
        self.resolver = resolver

    def build(
        self,
        document: Dict[str, Any],
        location: Union[str, Path],
        schema_name: str,
        object_type: str,
    ) -> LdapObjectSchema:
        """Attempt to find the object type definition in the document and create its object representation."""
        if 'objects' not in document:
            raise NoObjectsSectionError('Cannot find the "objects" section in the schema file.')

        object_schema = self.resolver.resolve_object(document, location, schema_name, object_type)
        self.validate_object_schema(object_schema, object_type)

        fields = {
            field_name: object_schema[option]
            for option, field_name in OPTION_FIELDS
            if option in object_schema
        }

        attributes = object_schema['attributes']
        if not isinstance(attributes, dict) or not all(_is_associative_key(k) for k in attributes):
            raise AttributesNotAssociativeError('The attributes for a schema should be an associative array.')

        logger.debug(f"Built object type '{object_type}' of schema '{schema_name}'")
        return LdapObjectSchema(
            schema_name=schema_name,
            object_type=object_type,
            attribute_map=attributes,
            converter_map=self.parse_converter_map(object_schema),
            **fields,
        )

    @staticmethod
    def validate_object_schema(object_schema: Dict[str, Any], object_type: str) -> None:
        """Validate that an object definition meets the minimum requirements."""
        if 'class' not in object_schema and 'category' not in object_schema:
            raise MissingClassOrCategoryError(f'Object type "{object_type}" has no class or category defined.')
        if not object_schema.get('attributes'):
            raise MissingAttributesError(f'Object type "{object_type}" has no attributes defined.')

    @staticmethod
    def parse_converter_map(object_schema: Dict[str, Any]) -> Dict[str, str]:
        """Parse the converters section of an object definition into an attribute -> converter map.

        Later converters overwrite earlier ones for the same attribute.
        """
        converter_map: Dict[str, str] = {}

        converters = object_schema.get('converters')
        if converters is None:
            return converter_map
        if not isinstance(converters, dict):
            raise ObjectDefinitionError(
                f'The converters for object type "{object_schema.get("type")}" should be a mapping.'
            )

        for converter, attributes in converters.items():
            if isinstance(attributes, list):
                for attribute in attributes:
                    if not isinstance(attribute, str):
                        raise ObjectDefinitionError(
                            f'Converter "{converter}" of object type "{object_schema.get("type")}" '
                            f'lists a non-string attribute: {attribute!r}'
                        )
                    converter_map[attribute] = converter
            elif isinstance(attributes, str):
                converter_map[attributes] = converter

        return converter_map
