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

from .duckdb import DuckDBDialect


class BigQueryDialect(DuckDBDialect):
  """
  BigQuery SQL dialect.

  Identifiers are always quoted with backticks. UNNEST ... WITH OFFSET and
  FOR SYSTEM_TIME AS OF are native to this dialect.
  """

  DIALECT_NAME = "bigquery"

  # ---------------------------------------------------------------------------
  # Identifiers
  # ---------------------------------------------------------------------------

  def quote_ident(self, name: str) -> str:
    escaped = name.replace("`", "\\`")
    return f"`{escaped}`"

  def render_identifier(self, name: str) -> str:
    return self.quote_ident(name)
