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
from dataclasses import dataclass
from typing import Optional

from utils.env import env_bool, env_int

from . import profiles as profiles_mod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
  strict: bool
  max_depth: int


def _active_profile() -> Optional[profiles_mod.Profile]:
  """Return the active profile, or None if no usable profile file exists."""
  try:
    return profiles_mod.load_profile()
  except (FileNotFoundError, KeyError, ValueError) as exc:
    logger.debug("No usable tablesql profile, using defaults: %s", exc)
    return None


def resolve_render_options(
  strict: Optional[bool] = None,
  max_depth: Optional[int] = None,
) -> RenderOptions:
  """
  Resolve strict mode and max depth from (in order):

  1. explicit arguments
  2. environment variables (TABLESQL_STRICT, TABLESQL_MAX_DEPTH)
  3. active profile
  4. hard defaults (strict, depth 64)

  The profile is only loaded if a value is still missing after 1) and 2).
  """
  if strict is None:
    strict = env_bool("TABLESQL_STRICT", None)
  if max_depth is None:
    max_depth = env_int("TABLESQL_MAX_DEPTH", None)

  if strict is None or max_depth is None:
    profile = _active_profile()
    if strict is None:
      strict = profile.strict if profile else profiles_mod.DEFAULT_STRICT
    if max_depth is None:
      max_depth = profile.max_depth if profile else profiles_mod.DEFAULT_MAX_DEPTH

  if max_depth < 1:
    raise ValueError(f"max_depth must be a positive integer, got {max_depth!r}.")

  logger.debug("Resolved render options: strict=%s max_depth=%s", strict, max_depth)
  return RenderOptions(strict=strict, max_depth=max_depth)
