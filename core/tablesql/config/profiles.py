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

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from django.conf import settings

"""
Profile loading for tablesql.

Profiles define environment-specific rendering defaults:
- the default SQL dialect
- strict vs. lenient handling of unsupported constructs
- the maximum nesting depth of table chains / derived tables
"""

DEFAULT_DIALECT = "duckdb"
DEFAULT_STRICT = True
DEFAULT_MAX_DEPTH = 64


@dataclass
class Profile:
  name: str

  # Dialect used for SQL generation (unless env override)
  default_dialect: str = DEFAULT_DIALECT

  # Raise on unsupported constructs instead of dropping them
  strict: bool = DEFAULT_STRICT

  # Guard against pathological nesting
  max_depth: int = DEFAULT_MAX_DEPTH


def _find_profiles_path(explicit_path: str | None = None) -> Path:
  """
  Locate tablesql_profiles.yaml in several common locations:

  1. explicit_path argument (if provided and exists)
  2. Django settings.TABLESQL_PROFILES_PATH (if settings are configured)
  3. common fallback locations relative to the package and CWD

  Raises:
      FileNotFoundError: if no suitable file can be found.
  """
  candidates: list[Path] = []

  # 1) explicit argument
  if explicit_path:
    candidates.append(Path(explicit_path))

  # 2) Django setting (typically based on TABLESQL_PROFILES_PATH env var)
  if settings.configured:
    cfg_path = getattr(settings, "TABLESQL_PROFILES_PATH", None)
    if cfg_path:
      candidates.append(Path(cfg_path))

  # 3) fallbacks
  here = Path(__file__).resolve()
  candidates += [
    here.parents[3] / "config" / "tablesql_profiles.yaml",
    Path.cwd() / "config" / "tablesql_profiles.yaml",
    Path("/etc/tablesql/tablesql_profiles.yaml"),
  ]

  for c in candidates:
    if c and c.exists():
      return c

  raise FileNotFoundError(
    "tablesql_profiles.yaml not found in expected locations. "
    "Provide an explicit path or configure TABLESQL_PROFILES_PATH."
  )


def load_profile(profiles_path: Optional[str] = None) -> Profile:
  """
  Load and return the current active profile.

  Resolution order:
    - TABLESQL_PROFILE env var
    - `active_profile` key in tablesql_profiles.yaml
    - default 'dev'
  """
  path = _find_profiles_path(profiles_path)

  with open(path, "r") as f:
    data = yaml.safe_load(f) or {}

  active = os.getenv("TABLESQL_PROFILE", data.get("active_profile", "dev"))
  profiles = data.get("profiles") or {}

  if active not in profiles:
    available = ", ".join(sorted(profiles)) if profiles else "(none)"
    raise KeyError(
      f"Active profile '{active}' not found in tablesql_profiles.yaml "
      f"at {path}. Available profiles: {available}."
    )

  p = profiles[active] or {}

  max_depth = p.get("max_depth", DEFAULT_MAX_DEPTH)
  if not isinstance(max_depth, int) or max_depth < 1:
    raise ValueError(
      f"Profile '{active}' in {path}: max_depth must be a positive integer, got {max_depth!r}."
    )

  return Profile(
    name=active,
    default_dialect=p.get("default_dialect", DEFAULT_DIALECT),
    strict=bool(p.get("strict", DEFAULT_STRICT)),
    max_depth=max_depth,
  )
