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

"""Custom exceptions for the LDAP object schema parser."""


class SchemaParserError(Exception):
    """Base exception for schema parsing related errors."""
    pass


class ResourceUnreadableError(SchemaParserError):
    """Exception raised when a schema file cannot be read."""
    pass


class DocumentMalformedError(SchemaParserError):
    """Exception raised when a schema file cannot be deserialized or has an invalid structure."""
    pass


class NoObjectsSectionError(SchemaParserError):
    """Exception raised when a schema document has no 'objects' section."""
    pass


class ObjectTypeNotFoundError(SchemaParserError):
    """Exception raised when an object type is not defined in a schema document."""
    pass


class ObjectDefinitionError(SchemaParserError):
    """Exception raised for invalid object definitions."""
    pass


class MissingClassOrCategoryError(ObjectDefinitionError):
    """Exception raised when an object definition has neither a class nor a category."""
    pass


class MissingAttributesError(ObjectDefinitionError):
    """Exception raised when an object definition has no attributes."""
    pass


class AttributesNotAssociativeError(ObjectDefinitionError):
    """Exception raised when the attributes of an object definition are not a name mapping."""
    pass


class InvalidDirectiveError(SchemaParserError):
    """Exception raised for a malformed 'extends' or 'extends_default' directive."""
    pass


class CyclicReferenceError(SchemaParserError):
    """Exception raised when a schema document or object refers back to itself."""
    pass
