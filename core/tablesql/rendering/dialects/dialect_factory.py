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

import logging
from typing import Optional, Type

from utils.env import env_str

from tablesql.config import profiles as profiles_mod
from .base import SqlDialect
from .bigquery import BigQueryDialect
from .duckdb import DuckDBDialect
from .mssql import MssqlDialect
from .postgres import PostgresDialect
from .snowflake import SnowflakeDialect

logger = logging.getLogger(__name__)

# Registry of known dialects.
_DIALECT_REGISTRY: dict[str, Type[SqlDialect]] = {
  "duckdb": DuckDBDialect,
  "postgres": PostgresDialect,
  "mssql": MssqlDialect,
  "bigquery": BigQueryDialect,
  "snowflake": SnowflakeDialect,
}


def get_available_dialect_names() -> list[str]:
  return sorted(_DIALECT_REGISTRY)


def _resolve_dialect_name(explicit: Optional[str] = None) -> str:
  """
  Resolve a dialect name from (in order):

  1. explicit argument
  2. environment variables (TABLESQL_SQL_DIALECT, TABLESQL_DIALECT)
  3. active profile.default_dialect
  4. hard fallback 'duckdb'
  """
  # 1) Explicit argument (e.g. CLI flag)
  if explicit:
    return explicit.lower()

  # 2) Env overrides
  env_name = (
    env_str("TABLESQL_SQL_DIALECT")
    or env_str("TABLESQL_DIALECT")
  )
  if env_name:
    return env_name.lower()

  # 3) Profile.default_dialect
  try:
    profile = profiles_mod.load_profile()
    if profile.default_dialect:
      return profile.default_dialect.lower()
  except (FileNotFoundError, KeyError, ValueError) as exc:
    # If profiles are missing or misconfigured, fall back
    logger.debug("Dialect not resolvable from profile: %s", exc)

  # 4) Hard fallback
  return profiles_mod.DEFAULT_DIALECT


def get_active_dialect(name: Optional[str] = None) -> SqlDialect:
  """
  Return an instance of the active SqlDialect.

  Resolution order:
    - `name` argument (if provided)
    - TABLESQL_SQL_DIALECT / TABLESQL_DIALECT env vars
    - active profile's `default_dialect`
    - hard fallback 'duckdb'

  Raises:
      ValueError: if the resolved name is not registered.
  """
  dialect_name = _resolve_dialect_name(name)

  try:
    dialect_cls = _DIALECT_REGISTRY[dialect_name]
  except KeyError as exc:
    available = ", ".join(sorted(_DIALECT_REGISTRY))
    raise ValueError(
      f"Unknown SQL dialect: {dialect_name!r}. "
      f"Available dialects: {available}."
    ) from exc

  logger.debug("Using SQL dialect %s", dialect_name)
  return dialect_cls()
