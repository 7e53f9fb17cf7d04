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

"""
Minimal Django settings hosting the tablesql app (management commands).
"""

from pathlib import Path

from utils.env import env_str, env_bool

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = env_str("TABLESQL_SECRET_KEY", "tablesql-local-only")
DEBUG = env_bool("TABLESQL_DEBUG", False)
ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
  "tablesql",
]

# Rendering needs no database
DATABASES: dict = {}

USE_TZ = True

# Optional explicit location of tablesql_profiles.yaml
TABLESQL_PROFILES_PATH = env_str("TABLESQL_PROFILES_PATH")

LOGGING = {
  "version": 1,
  "disable_existing_loggers": False,
  "formatters": {
    "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
  },
  "handlers": {
    "console": {"class": "logging.StreamHandler", "formatter": "simple"},
  },
  "loggers": {
    "tablesql": {
      "handlers": ["console"],
      "level": env_str("TABLESQL_LOG_LEVEL", "WARNING"),
    },
  },
}
