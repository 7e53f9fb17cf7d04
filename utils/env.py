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

import os
from typing import Optional

def env_str(key: str, default: Optional[str] = None) -> Optional[str]:
  """Get env var as string with default."""
  val = os.getenv(key)
  return val if val not in (None, "") else default

def env_bool(key: str, default: Optional[bool] = False) -> Optional[bool]:
  """Get env var as boolean."""
  val = os.getenv(key)
  if val is None or val.strip() == "":
    return default
  return val.strip().lower() in ("1","true","yes","on")

def env_int(key: str, default: Optional[int] = 0) -> Optional[int]:
  """Get env var as int."""
  val = os.getenv(key)
  try:
    return int(val) if val is not None else default
  except ValueError:
    return default
