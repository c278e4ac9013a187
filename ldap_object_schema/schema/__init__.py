"""Schema document definitions and validation.

The bundled JSON Schemas in this directory describe the structure of schema
documents before inheritance is resolved.
"""

from ..models.document_schema import (
    SchemaIssue,
    format_schema_issues,
    validate_against_schema,
)
