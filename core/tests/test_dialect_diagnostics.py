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
Dialect diagnostics smoke tests.

These tests validate that the diagnostics module can build a consistent
snapshot for all registered dialects.
"""

from tablesql.rendering.dialects.dialect_factory import (
  get_available_dialect_names,
  get_active_dialect,
)
from tablesql.rendering.dialects.diagnostics import (
  collect_dialect_diagnostics,
  snapshot_all_dialects,
)


def test_collect_dialect_diagnostics_for_each_registered_dialect():
  for name in get_available_dialect_names():
    dialect = get_active_dialect(name)
    diag = collect_dialect_diagnostics(dialect)

    assert diag.name == name
    assert diag.class_name.endswith("Dialect")

    # Literal examples should be non-empty strings
    assert isinstance(diag.literal_true, str) and diag.literal_true
    assert isinstance(diag.literal_null, str) and diag.literal_null
    assert isinstance(diag.literal_sample_date, str) and diag.literal_sample_date

    # "order date" needs quoting everywhere
    assert diag.sample_identifier != "order date"

    assert "orders" in diag.sample_table
    assert diag.sample_unnest.startswith("UNNEST(")
    assert diag.sample_pivot.startswith("PIVOT(")
    assert "WITH (" in diag.sample_hint
    assert diag.sample_temporal.startswith("FOR SYSTEM_TIME AS OF ")


def test_snapshot_all_dialects_is_json_friendly():
  snapshot = snapshot_all_dialects()

  assert sorted(snapshot) == get_available_dialect_names()

  duck = snapshot["duckdb"].to_dict()
  assert duck["sample_table"] == "sales.orders AS o"
  assert duck["sample_unnest"] == "UNNEST(tags) AS t WITH OFFSET AS pos"
  assert duck["sample_hint"] == "orders WITH (nolock, INDEX (ix_orders_date))"
