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

from datetime import date, datetime
from decimal import Decimal

from .duckdb import DuckDBDialect


class PostgresDialect(DuckDBDialect):
  """
  PostgreSQL dialect.

  Differences to DuckDB:
  - identifiers are always double-quoted (case is preserved)
  - timestamps render as TIMESTAMPTZ literals
  """

  DIALECT_NAME = "postgres"

  # ---------------------------------------------------------
  # Identifier quoting
  # ---------------------------------------------------------
  def quote_ident(self, ident: str) -> str:
    escaped = ident.replace('"', '""')
    return f"\"{escaped}\""

  def render_identifier(self, name: str) -> str:
    return self.quote_ident(name)

  # ---------------------------------------------------------
  # Literal rendering
  # ---------------------------------------------------------
  def render_literal(self, value):
    if value is None:
      return "NULL"

    if isinstance(value, bool):
      return "TRUE" if value else "FALSE"

    if isinstance(value, int):
      return str(value)

    if isinstance(value, float):
      return repr(value)

    if isinstance(value, Decimal):
      return str(value)

    if isinstance(value, date) and not isinstance(value, datetime):
      return f"DATE '{value.isoformat()}'"

    if isinstance(value, datetime):
      ts = value.isoformat(sep=" ", timespec="seconds")
      return f"TIMESTAMPTZ '{ts}'"

    # treat everything else as string
    s = str(value).replace("'", "''")
    return f"'{s}'"
