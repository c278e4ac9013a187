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

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import jsonschema

from .json_schema_loader import load_schema


JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None


def validate_against_schema(data: Any, *, entity_type: str = "document") -> List[SchemaIssue]:
    """Validate data against a bundled JSON Schema.

    Every violation is reported, ordered by its location in the document.
    """
    if not isinstance(data, dict):
        return [SchemaIssue(message="Root must be a mapping/object", yaml_path="")]

    json_schema = load_schema(entity_type)
    validator_cls = jsonschema.validators.validator_for(json_schema)
    validator = validator_cls(json_schema)

    issues: List[SchemaIssue] = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        issues.append(SchemaIssue(message=error.message, yaml_path=path))

    return issues


def format_schema_issues(
    issues: List[SchemaIssue], source_map: Optional[Dict[str, Dict[str, int]]] = None
) -> str:
    lines = []
    for issue in issues:
        line = f"  - {issue.message}"
        if issue.yaml_path:
            line += f" (yaml_path={issue.yaml_path}"
            entry = (source_map or {}).get(issue.yaml_path)
            if entry:
                line += f", line={entry['line']}"
            line += ")"
        lines.append(line)
    return "\n".join(lines)
