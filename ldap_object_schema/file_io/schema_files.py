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

"""Filesystem access for schema documents."""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from ..exceptions import ResourceUnreadableError

logger = logging.getLogger(__name__)


class SchemaFileReader:
    """Locates and reads schema documents stored as ``<location>/<name>.<extension>``."""

    def __init__(self, extension: str = "yml"):
        self.extension = extension.lstrip(".")

    def schema_path(self, location: Union[str, Path], name: str) -> Path:
        return Path(location) / f"{name}.{self.extension}"

    def validate_file_can_be_read(self, path: Path) -> None:
        """Make sure a schema file exists and is readable.

        Raises:
            ResourceUnreadableError: If the file is missing, not a file or not readable
        """
        if not path.is_file() or not os.access(path, os.R_OK):
            raise ResourceUnreadableError(f"Cannot read schema file: {path}")

    def read_text(self, location: Union[str, Path], name: str) -> str:
        path = self.schema_path(location, name)
        self.validate_file_can_be_read(path)

        logger.debug(f"Reading schema file: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceUnreadableError(f"Cannot read schema file: {path} ({exc})") from exc

    def modification_time(self, location: Union[str, Path], name: str) -> datetime:
        """Return the last modification time of a schema file as an aware UTC datetime."""
        path = self.schema_path(location, name)
        self.validate_file_can_be_read(path)

        try:
            mtime = path.stat().st_mtime
        except OSError as exc:
            raise ResourceUnreadableError(f"Cannot read schema file: {path} ({exc})") from exc

        return datetime.fromtimestamp(mtime, tz=timezone.utc)
