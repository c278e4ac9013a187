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

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from ..exceptions import ObjectTypeNotFoundError, InvalidDirectiveError, CyclicReferenceError
from ..models.parsing.document_cache import normalize_location

logger = logging.getLogger(__name__)


class InheritanceResolver:
    """Base class for merging a parent definition under a child definition.

    Merge rules:
    - mappings present on both sides are merged recursively
    - lists are concatenated, parent entries first, without removing duplicates
    - a scalar on one side and a list on the other are concatenated as well
    - otherwise the child value wins
    """

    def _merge_list(self, base_list: List[Any], override_list: List[Any]) -> List[Any]:
        """Append override_list to a copy of base_list."""
        merged_list = copy.deepcopy(list(base_list or []))
        merged_list.extend(copy.deepcopy(list(override_list or [])))
        return merged_list

    def _merge_value(self, base: Any, override: Any) -> Any:
        if isinstance(base, dict) and isinstance(override, dict):
            return self.merge_mapping(base, override)

        if isinstance(base, dict) or isinstance(override, dict) or base is None or override is None:
            return copy.deepcopy(override)

        if isinstance(base, list) or isinstance(override, list):
            base_list = base if isinstance(base, list) else [base]
            override_list = override if isinstance(override, list) else [override]
            return self._merge_list(base_list, override_list)

        return copy.deepcopy(override)

    def merge_mapping(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge override (the more specific side) on top of base and return a new mapping.

        Neither input is modified.
        """
        merged = {key: copy.deepcopy(value) for key, value in base.items()}

        for key, value in override.items():
            if key in base:
                merged[key] = self._merge_value(base[key], value)
            else:
                merged[key] = copy.deepcopy(value)

        return merged


class ObjectInheritanceResolver(InheritanceResolver):
    """Resolver for object-level 'extends' and 'extends_default' directives.

    Only the direct parent is merged. If the parent declares its own 'extends' or
    'extends_default', that directive is carried into the result but not followed.
    """

    def __init__(self, loader):
        self.loader = loader

    @staticmethod
    def find_object(document: Dict[str, Any], object_type: str) -> Dict[str, Any]:
        """Check for a specific object type in a document. The last definition of a type wins."""
        object_schema = None
        for ldap_object in document.get('objects') or []:
            if isinstance(ldap_object, dict) and ldap_object.get('type') == object_type:
                object_schema = ldap_object

        if object_schema is None:
            raise ObjectTypeNotFoundError(f'Cannot find object type "{object_type}" in schema.')

        return object_schema

    def resolve_object(
        self,
        document: Dict[str, Any],
        location: Union[str, Path],
        schema_name: str,
        object_type: str,
    ) -> Dict[str, Any]:
        """Find an object definition and merge its parent definition under it, if it declares one.

        The returned mapping is a copy; the cached document is never modified.
        """
        object_schema = self.find_object(document, object_type)

        if object_schema.get('extends') is None and object_schema.get('extends_default') is None:
            return copy.deepcopy(object_schema)

        parent = self._get_parent_object(object_schema, document, location, schema_name, object_type)
        if parent is object_schema:
            # a definition reached through an included document resolves to itself
            raise CyclicReferenceError(
                f'Object type "{object_type}" in schema "{schema_name}" cannot extend itself.'
            )
        logger.debug(f"Merging parent definition into object type '{object_type}' of schema '{schema_name}'")

        return self.merge_mapping(parent, object_schema)

    def _get_parent_object(
        self,
        object_schema: Dict[str, Any],
        document: Dict[str, Any],
        location: Union[str, Path],
        schema_name: str,
        object_type: str,
    ) -> Dict[str, Any]:
        """Determine what parent object to get based on the directive used."""
        if object_schema.get('extends_default') is not None:
            default_name, parent_type = self._pair_directive(
                object_schema['extends_default'],
                'The "extends_default" directive should be an array with exactly 2 values.',
            )
            parent_location = self.loader.default_location
            self._check_self_reference(
                (location, schema_name, object_type), (parent_location, default_name, parent_type)
            )
            logger.debug(f"Object type '{object_type}' extends default '{default_name}:{parent_type}'")
            return self.find_object(self.loader.load(parent_location, default_name), parent_type)

        extends = object_schema['extends']
        if isinstance(extends, str):
            self._check_self_reference((location, schema_name, object_type), (location, schema_name, extends))
            return self.find_object(document, extends)

        parent_name, parent_type = self._pair_directive(
            extends, 'The directive "extends" must be a string or array with exactly 2 values.'
        )
        self._check_self_reference((location, schema_name, object_type), (location, parent_name, parent_type))
        logger.debug(f"Object type '{object_type}' extends '{parent_name}:{parent_type}'")
        return self.find_object(self.loader.load(location, parent_name), parent_type)

    @staticmethod
    def _pair_directive(value: Any, message: str) -> Tuple[str, str]:
        if not (isinstance(value, list) and len(value) == 2 and all(isinstance(v, str) for v in value)):
            raise InvalidDirectiveError(message)
        return value[0], value[1]

    @staticmethod
    def _check_self_reference(child: Tuple[Any, str, str], parent: Tuple[Any, str, str]) -> None:
        child_key = (normalize_location(child[0]), child[1], child[2])
        parent_key = (normalize_location(parent[0]), parent[1], parent[2])
        if child_key == parent_key:
            raise CyclicReferenceError(
                f'Object type "{child[2]}" in schema "{child[1]}" cannot extend itself.'
            )
