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

import pytest

from tablesql.rendering.dialects.duckdb import DuckDBDialect
from tablesql.rendering.table_sql import TableSqlRenderer


@pytest.fixture(autouse=True)
def clear_tablesql_env(monkeypatch):
  """Ensure rendering-related env vars are clean by default."""
  for key in (
    "TABLESQL_SQL_DIALECT",
    "TABLESQL_DIALECT",
    "TABLESQL_STRICT",
    "TABLESQL_MAX_DEPTH",
    "TABLESQL_PROFILE",
  ):
    monkeypatch.delenv(key, raising=False)
  yield


@pytest.fixture
def renderer():
  """Strict DuckDB renderer (quotes identifiers only when necessary)."""
  return TableSqlRenderer(DuckDBDialect(), strict=True)


@pytest.fixture
def lenient_renderer():
  """DuckDB renderer that drops unsupported constructs."""
  return TableSqlRenderer(DuckDBDialect(), strict=False)
