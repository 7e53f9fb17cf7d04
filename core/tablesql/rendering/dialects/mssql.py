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

import datetime
from decimal import Decimal

from .duckdb import DuckDBDialect


class MssqlDialect(DuckDBDialect):
  """
  Microsoft SQL Server dialect.

  We subclass DuckDBDialect to reuse the generic expression rendering and
  only override quoting and literals. Table hints (WITH (NOLOCK, INDEX ...))
  and FOR SYSTEM_TIME temporal clauses are native to this dialect.
  """

  DIALECT_NAME = "mssql"

  # ---------------------------------------------------------------------------
  # Identifier quoting
  # ---------------------------------------------------------------------------
  def quote_ident(self, name: str) -> str:
    """
    Quote identifiers with square brackets.
    A closing bracket inside the name is escaped by doubling it.
    """
    escaped = name.replace("]", "]]")
    return f"[{escaped}]"

  # ---------------------------------------------------------------------------
  # Literal rendering
  # ---------------------------------------------------------------------------
  def render_literal(self, value):
    if value is None:
      return "NULL"

    if isinstance(value, bool):
      # SQL Server has BIT, but no TRUE/FALSE literals
      return "1" if value else "0"

    if isinstance(value, (int, float, Decimal)):
      return str(value)

    if isinstance(value, str):
      escaped = value.replace("'", "''")
      return f"'{escaped}'"

    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
      iso = value.isoformat()
      return f"CAST('{iso}' AS DATE)"

    if isinstance(value, datetime.datetime):
      # Strip microseconds for a cleaner literal
      dt = value.replace(microsecond=0)
      iso = dt.isoformat(sep=" ")
      return f"CAST('{iso}' AS DATETIME2)"

    raise TypeError(f"Unsupported literal type for MssqlDialect: {type(value)}")
