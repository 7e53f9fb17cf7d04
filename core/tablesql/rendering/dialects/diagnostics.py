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

from dataclasses import dataclass, asdict
from typing import Any, Dict

from ..expr import COL, FUNC, IN_LIST, L
from ..table_refs import (
  AsOf,
  IndexHint,
  PivotOperator,
  RawHint,
  TableHint,
  TableRef,
  TemporalTable,
  Unnest,
  WithOffset,
)
from ..table_sql import TableSqlRenderer
from .base import SqlDialect
from .dialect_factory import get_available_dialect_names, get_active_dialect


@dataclass
class DialectDiagnostics:
  """Simple snapshot of how a dialect renders table references."""

  name: str
  class_name: str

  # Identifier / literal rendering examples
  sample_identifier: str
  literal_true: str
  literal_null: str
  literal_sample_date: str

  # Table reference samples
  sample_table: str
  sample_unnest: str
  sample_pivot: str
  sample_hint: str
  sample_temporal: str

  def to_dict(self) -> Dict[str, Any]:
    """Return a JSON-serializable representation."""
    return asdict(self)


def collect_dialect_diagnostics(dialect: SqlDialect) -> DialectDiagnostics:
  """Collect a minimal set of rendering samples for a single dialect instance."""
  renderer = TableSqlRenderer(dialect, strict=True)

  # Simple fixed sample date to avoid timezone issues
  import datetime as _dt
  sample_date = _dt.date(2025, 1, 2)

  sample_table = renderer.table_to_sql(
    TableRef(table="orders", schema="sales", alias="o")
  )
  sample_unnest = renderer.unnest_to_sql(
    Unnest(expr=COL("tags"), alias="t", with_offset=WithOffset(alias="pos"))
  )
  sample_pivot = renderer.operator_to_sql(
    PivotOperator(
      kind="pivot",
      expr=FUNC("sum", COL("amount")),
      column=COL("quarter"),
      in_expr=IN_LIST(L("Q1"), L("Q2")),
      alias="p",
    )
  )
  sample_hint = renderer.table_to_sql(
    TableRef(
      table="orders",
      hint=TableHint(
        keyword="with",
        items=[RawHint(expr=COL("nolock")), IndexHint(names=["ix_orders_date"])],
      ),
    )
  )
  sample_temporal = renderer.temporal_table_to_sql(
    TemporalTable(keyword="for system_time", clause=AsOf(of=L(sample_date)))
  )

  return DialectDiagnostics(
    name=getattr(dialect, "DIALECT_NAME", dialect.__class__.__name__.lower()),
    class_name=dialect.__class__.__name__,
    sample_identifier=dialect.render_identifier("order date"),
    literal_true=dialect.render_literal(True),
    literal_null=dialect.render_literal(None),
    literal_sample_date=dialect.render_literal(sample_date),
    sample_table=sample_table,
    sample_unnest=sample_unnest,
    sample_pivot=sample_pivot,
    sample_hint=sample_hint,
    sample_temporal=sample_temporal,
  )


def snapshot_all_dialects() -> Dict[str, DialectDiagnostics]:
  """
  Build diagnostics for all registered dialects.

  The keys of the result dict are dialect names as returned by
  get_available_dialect_names().
  """
  result: Dict[str, DialectDiagnostics] = {}

  for name in get_available_dialect_names():
    dialect = get_active_dialect(name)
    diag = collect_dialect_diagnostics(dialect)
    result[name] = diag

  return result
