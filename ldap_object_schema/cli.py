#!/usr/bin/env python3
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

"""CLI entry point for resolving LDAP object schemas."""

import argparse
import json
import sys
from typing import List

from .config import parser_config
from .exceptions import SchemaParserError
from .models.object_schema import LdapObjectSchema
from .parser import SchemaYamlParser


def _print_human(schemas: List[LdapObjectSchema]) -> None:
    for schema in schemas:
        print(f"{schema.schema_name}:{schema.object_type}")
        print(f"  class: {schema.object_class}")
        print(f"  category: {schema.object_category}")
        if schema.default_container:
            print(f"  default container: {schema.default_container}")
        print("  attributes:")
        for name, ldap_name in schema.attribute_map.items():
            converter = schema.converter_map.get(name)
            suffix = f" [{converter}]" if converter else ""
            print(f"    {name} -> {ldap_name}{suffix}")


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the schema CLI."""
    parser = argparse.ArgumentParser(
        description='Resolve LDAP object schema definitions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('schema_folder', help='Folder containing the schema files')
    parser.add_argument('schema_name', help='Schema name (file name without extension)')
    parser.add_argument(
        'object_type',
        nargs='?',
        default=None,
        help='Object type to resolve (default: every type in the schema)',
    )
    parser.add_argument(
        '--default-schema-folder',
        default=None,
        help='Folder used for "extends_default" directives (default: bundled schemas)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )

    args = parser.parse_args(argv)
    parser_config.set_logging('ldap_object_schema')

    schema_parser = SchemaYamlParser(args.schema_folder, args.default_schema_folder)
    try:
        if args.object_type:
            schemas = [schema_parser.parse(args.schema_name, args.object_type)]
        else:
            schemas = schema_parser.parse_all(args.schema_name)
    except SchemaParserError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == 'json':
        print(json.dumps([s.to_dict() for s in schemas], indent=2, default=str))
    else:
        _print_human(schemas)
    sys.exit(0)


if __name__ == '__main__':
    main()
