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

"""Configuration management for the schema parser."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path

from .utils.logging_utils import configure_split_stream_logging

# Built-in schema documents shipped with the package
DEFAULT_SCHEMA_FOLDER = str(Path(__file__).resolve().parent / "resources" / "schema")


@dataclass
class SchemaParserConfig:
    """Configuration class for the schema parser."""
    log_level: str = "INFO"
    print_level: str = "ERROR"

    # paths
    schema_folder: str = ""
    default_schema_folder: str = DEFAULT_SCHEMA_FOLDER
    file_extension: str = "yml"

    @classmethod
    def from_env(cls) -> 'SchemaParserConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('LDAP_OBJECT_SCHEMA_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('LDAP_OBJECT_SCHEMA_PRINT_LEVEL', 'ERROR'),
            schema_folder=os.getenv('LDAP_OBJECT_SCHEMA_FOLDER', ''),
            default_schema_folder=os.getenv('LDAP_OBJECT_SCHEMA_DEFAULT_FOLDER', DEFAULT_SCHEMA_FOLDER),
            file_extension=os.getenv('LDAP_OBJECT_SCHEMA_FILE_EXTENSION', 'yml').lstrip('.'),
        )

    def set_logging(self, logger_name: str = None) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(
            level=level, stderr_level=stderr_level, formatter=formatter, logger_name=logger_name
        )

        return logging.getLogger('ldap_object_schema')


# Global configuration instance
parser_config = SchemaParserConfig.from_env()
