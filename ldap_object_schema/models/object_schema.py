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

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LdapObjectSchema:
    """Resolved description of one LDAP object type within a named schema."""

    schema_name: str
    object_type: str

    object_class: Optional[Any] = None
    object_category: Optional[str] = None
    attributes_to_select: List[str] = field(default_factory=list)
    repository: Optional[str] = None
    default_values: Dict[str, Any] = field(default_factory=dict)
    required_attributes: List[str] = field(default_factory=list)
    default_container: Optional[str] = None
    converter_options: Dict[str, Any] = field(default_factory=dict)
    multivalued_attributes: List[str] = field(default_factory=list)
    base_dn: Optional[str] = None

    # schema attribute name -> LDAP attribute name
    attribute_map: Dict[str, str] = field(default_factory=dict)
    # schema attribute name -> converter name
    converter_map: Dict[str, str] = field(default_factory=dict)

    def get_attribute_to_ldap(self, attribute: str) -> str:
        """Map a schema attribute name to its LDAP name, falling back to the name itself."""
        return self.attribute_map.get(attribute, attribute)

    def has_converter(self, attribute: str) -> bool:
        return attribute in self.converter_map

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
