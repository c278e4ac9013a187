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

"""Resolution of declarative LDAP object schema definitions."""

__version__ = "0.1.0"

from .exceptions import (
    SchemaParserError,
    ResourceUnreadableError,
    DocumentMalformedError,
    NoObjectsSectionError,
    ObjectTypeNotFoundError,
    ObjectDefinitionError,
    MissingClassOrCategoryError,
    MissingAttributesError,
    AttributesNotAssociativeError,
    InvalidDirectiveError,
    CyclicReferenceError,
)
from .models.object_schema import LdapObjectSchema
from .models.parsing.document_cache import DocumentCache, document_cache
from .parser import SchemaYamlParser

__all__ = [
    "SchemaYamlParser",
    "LdapObjectSchema",
    "DocumentCache",
    "document_cache",
    "SchemaParserError",
    "ResourceUnreadableError",
    "DocumentMalformedError",
    "NoObjectsSectionError",
    "ObjectTypeNotFoundError",
    "ObjectDefinitionError",
    "MissingClassOrCategoryError",
    "MissingAttributesError",
    "AttributesNotAssociativeError",
    "InvalidDirectiveError",
    "CyclicReferenceError",
]
