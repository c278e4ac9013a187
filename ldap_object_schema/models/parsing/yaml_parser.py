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

"""YAML deserializer for schema documents."""

import yaml
import logging
from typing import Dict, Any, Tuple

from ...exceptions import DocumentMalformedError

logger = logging.getLogger(__name__)


class YamlParser:
    """Turns raw schema document text into plain mappings."""

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str) -> Dict[str, Dict[str, int]]:
        """Build a mapping from YAML JSON-pointer-like paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: Dict[str, Dict[str, int]] = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by safe_load
            return source_map

        if root is None:
            return source_map

        def _walk(node, path: str) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is not None:
                # PyYAML uses 0-based line/column
                source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{cls._json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def load_from_string(self, content: str, source: str = "<string>") -> Dict[str, Any]:
        """Deserialize a schema document.

        Args:
            content: YAML string content
            source: Name of the resource the content came from, used in error messages

        Returns:
            Parsed YAML content. An empty document yields an empty mapping.

        Raises:
            DocumentMalformedError: If content cannot be parsed or its root is not a mapping
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentMalformedError(f"Error in configuration file {source}: {exc}") from exc

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise DocumentMalformedError(
                f"Error in configuration file {source}: the document root must be a mapping, "
                f"got {type(data).__name__}"
            )

        return data

    def load_from_string_with_source(
        self, content: str, source: str = "<string>"
    ) -> Tuple[Dict[str, Any], Dict[str, Dict[str, int]]]:
        """Deserialize a schema document and return (data, source_map).

        source_map keys are JSON-pointer-like YAML paths (e.g. "/objects/0/type").
        Values contain 1-based line/column.
        """
        data = self.load_from_string(content, source)
        return data, self._build_source_map_from_yaml(content)


# Global parser instance
yaml_parser = YamlParser()
