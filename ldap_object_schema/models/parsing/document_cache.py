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

"""Process-wide memo of loaded and merged schema documents."""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]


def normalize_location(location: Union[str, Path]) -> str:
    """Return the canonical form of a storage location used in cache keys."""
    return str(Path(location).expanduser().resolve())


class DocumentCache:
    """Expanded schema documents keyed by (storage location, document name).

    The same document name under two different locations is two distinct entries.
    ``lock`` is re-entrant so a loader can hold it across a recursive
    load-or-populate sequence.
    """

    def __init__(self):
        self._documents: Dict[CacheKey, Dict[str, Any]] = {}
        self.lock = threading.RLock()

    @staticmethod
    def key(location: Union[str, Path], name: str) -> CacheKey:
        return normalize_location(location), name

    def get(self, location: Union[str, Path], name: str) -> Optional[Dict[str, Any]]:
        with self.lock:
            return self._documents.get(self.key(location, name))

    def put(self, location: Union[str, Path], name: str, document: Dict[str, Any]) -> None:
        with self.lock:
            self._documents[self.key(location, name)] = document

    def contains(self, location: Union[str, Path], name: str) -> bool:
        with self.lock:
            return self.key(location, name) in self._documents

    def clear(self) -> None:
        """Clear the document cache."""
        with self.lock:
            self._documents.clear()
        logger.debug("Schema document cache cleared")

    def __len__(self) -> int:
        with self.lock:
            return len(self._documents)


# Global cache instance
document_cache = DocumentCache()
