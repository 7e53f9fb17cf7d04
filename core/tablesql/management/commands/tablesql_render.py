"""
elevata - Metadata-driven Data Platform Framework
Copyright © 2025-2026 Ilona Tag

This file is part of elevata.

elevata is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

elevata is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with elevata. If not, see <https://www.gnu.org/licenses/>.

Contact: <https://github.com/elevata-labs/elevata>.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from tablesql.rendering.ast_loader import load_table, load_table_option, load_tables
from tablesql.rendering.table_sql import (
  RenderDepthError,
  UnsupportedConstructError,
  get_table_renderer,
)


def _is_table_chain(payload: Any) -> bool:
  """A list, or an {expr, parentheses} wrapper whose expr is itself a chain."""
  if isinstance(payload, list):
    return True
  if not isinstance(payload, dict) or "expr" not in payload:
    return False
  if not set(payload) <= {"expr", "parentheses"}:
    return False
  inner = payload["expr"]
  return isinstance(inner, list) or (isinstance(inner, dict) and "type" not in inner)


class Command(BaseCommand):
  help = (
    "Render a JSON table tree (as produced by the SQL parser) into SQL.\n\n"
    "Accepted top-level shapes:\n"
    "  [ {table...}, {join...} ]            table chain\n"
    "  {\"expr\": [...], \"parentheses\": true}  nested chain\n"
    "  {table...}                            single table reference\n"
    "  {\"table_options\": [ {...}, ... ]}     table options\n\n"
    "Examples:\n"
    "  python manage.py tablesql_render from.json --dialect mssql\n"
    "  cat from.json | python manage.py tablesql_render - --lenient\n"
  )

  def add_arguments(self, parser) -> None:
    parser.add_argument(
      "path",
      type=str,
      help="Path to the JSON file, or '-' to read from stdin.",
    )
    parser.add_argument(
      "--dialect",
      dest="dialect_name",
      type=str,
      default=None,
      help="SQL dialect, e.g. 'duckdb', 'postgres', 'mssql'. Defaults to env/profile.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
      "--strict",
      dest="strict",
      action="store_true",
      default=None,
      help="Fail on unsupported constructs.",
    )
    mode.add_argument(
      "--lenient",
      dest="strict",
      action="store_false",
      help="Drop unsupported constructs with a warning.",
    )
    parser.add_argument(
      "--max-depth",
      dest="max_depth",
      type=int,
      default=None,
      help="Maximum nesting depth of table chains.",
    )

  def _read_payload(self, path: str) -> Any:
    try:
      if path == "-":
        return json.load(sys.stdin)
      with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
    except FileNotFoundError as exc:
      raise CommandError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
      raise CommandError(f"Invalid JSON in {path}: {exc}") from exc
    except RecursionError as exc:
      raise CommandError(f"JSON in {path} is nested too deeply") from exc

  def handle(self, *args: Any, **options: Any) -> None:
    payload = self._read_payload(options["path"])

    try:
      renderer = get_table_renderer(
        options.get("dialect_name"),
        strict=options.get("strict"),
        max_depth=options.get("max_depth"),
      )

      if isinstance(payload, dict) and "table_options" in payload:
        sql = renderer.table_options_to_sql(
          [load_table_option(o) for o in payload["table_options"]]
        )
      elif _is_table_chain(payload):
        sql = renderer.tables_to_sql(load_tables(payload, max_depth=renderer.max_depth))
      else:
        sql = renderer.table_to_sql(load_table(payload, max_depth=renderer.max_depth))

    except (UnsupportedConstructError, RenderDepthError, ValueError) as exc:
      raise CommandError(str(exc)) from exc
    except RecursionError as exc:
      # deep expression trees, which the depth guard does not count
      raise CommandError(f"Input is nested too deeply to render: {exc}") from exc

    self.stdout.write(sql)
