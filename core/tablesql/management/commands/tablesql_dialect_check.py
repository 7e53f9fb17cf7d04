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

from datetime import date
from typing import Any, Callable, Iterable

from django.core.management.base import BaseCommand

from tablesql.rendering.dialects import get_active_dialect
from tablesql.rendering.dialects.dialect_factory import get_available_dialect_names
from tablesql.rendering.expr import COL, EQ, FUNC, IN_LIST, Interval, L
from tablesql.rendering.table_refs import (
  AsOf,
  Dual,
  Generator,
  Join,
  PivotOperator,
  RawHint,
  TableHint,
  TableOption,
  TableRef,
  TableSample,
  TemporalTable,
  TumbleWindow,
  Unnest,
  VirtualTable,
  WithOffset,
)
from tablesql.rendering.table_sql import TableSqlRenderer


CheckFunc = Callable[[Any], None]


class Command(BaseCommand):
  help = (
    "Run a small self-diagnostic of the table renderers against all registered SQL dialects.\n\n"
    "Examples:\n"
    "  python manage.py tablesql_dialect_check\n"
    "  python manage.py tablesql_dialect_check --dialect mssql\n"
  )

  def add_arguments(self, parser) -> None:
    parser.add_argument(
      "--dialect",
      dest="dialect_name",
      type=str,
      default=None,
      help="Optional dialect name to restrict diagnostics, e.g. 'duckdb', 'postgres', 'mssql'.",
    )

  # ---------------------------------------------------------------------------
  # Helpers
  # ---------------------------------------------------------------------------

  def _run_check(self, name: str, fn: CheckFunc) -> tuple[str, str]:
    """
    Run a single check and return (status, details).

    status:
      - OK   -> check succeeded
      - N/I  -> NotImplementedError
      - FAIL -> any other exception
    """
    try:
      fn(None)
      return "OK", ""
    except NotImplementedError as exc:
      return "N/I", str(exc)
    except Exception as exc:  # pragma: no cover - reported, not raised
      return "FAIL", repr(exc)

  def _print_header(self, title: str) -> None:
    self.stdout.write("")
    self.stdout.write(self.style.MIGRATE_HEADING(title))
    self.stdout.write(self.style.HTTP_INFO("-" * len(title)))

  def _print_table(self, rows: Iterable[tuple[str, str, str]]) -> None:
    """
    Simple 3-column table: check, status, details.
    """
    for check, status, details in rows:
      line = f"  {check:<30} {status:<4}"
      if details:
        line += f"  # {details}"
      self.stdout.write(line)

  # ---------------------------------------------------------------------------
  # Main
  # ---------------------------------------------------------------------------

  def handle(self, *args: Any, **options: Any) -> None:
    dialect_name: str | None = options.get("dialect_name")

    # 1) Determine which dialects to check
    if dialect_name:
      dialect_names = [dialect_name]
    else:
      dialect_names = sorted(get_available_dialect_names())

    if not dialect_names:
      self.stdout.write(self.style.WARNING("No SQL dialects are registered."))
      return

    self._print_header("Table renderer diagnostics")

    for name in dialect_names:
      dialect = get_active_dialect(name)
      renderer = TableSqlRenderer(dialect, strict=True)

      self.stdout.write("")
      self.stdout.write(self.style.HTTP_INFO(f"Dialect: {name} ({dialect.__class__.__name__})"))

      checks: list[tuple[str, str, str]] = [
        ("identifier", *self._run_check(
          "identifier",
          lambda _: dialect.render_identifier('order"date'),
        )),
        ("table reference", *self._run_check(
          "table reference",
          lambda _: renderer.table_to_sql(TableRef(
            table="orders",
            schema="sales",
            alias="o",
            tablesample=TableSample(size=L(10), repeatable=L(5)),
          )),
        )),
        ("join chain", *self._run_check(
          "join chain",
          lambda _: renderer.tables_to_sql([
            TableRef(table="orders"),
            Join(
              table=TableRef(table="customers"),
              join="inner join",
              on=EQ(COL("id", "orders"), COL("id", "customers")),
            ),
          ]),
        )),
        ("dual", *self._run_check(
          "dual",
          lambda _: renderer.tables_to_sql([Dual()]),
        )),
        ("unnest", *self._run_check(
          "unnest",
          lambda _: renderer.unnest_to_sql(
            Unnest(expr=COL("tags"), alias="t", with_offset=WithOffset(alias="pos"))
          ),
        )),
        ("pivot", *self._run_check(
          "pivot",
          lambda _: renderer.operator_to_sql(PivotOperator(
            kind="pivot",
            expr=FUNC("sum", COL("amount")),
            column=COL("quarter"),
            in_expr=IN_LIST(L("Q1"), L("Q2")),
          )),
        )),
        ("table hint", *self._run_check(
          "table hint",
          lambda _: renderer.table_to_sql(TableRef(
            table="orders",
            hint=TableHint(keyword="with", items=[RawHint(expr=COL("nolock"))]),
          )),
        )),
        ("temporal", *self._run_check(
          "temporal",
          lambda _: renderer.temporal_table_to_sql(
            TemporalTable(keyword="for system_time", clause=AsOf(of=L(date(2025, 1, 2))))
          ),
        )),
        ("tumble", *self._run_check(
          "tumble",
          lambda _: renderer.table_tumble_to_sql(TumbleWindow(
            table="bids",
            time_column=COL("bidtime"),
            size=Interval(value=L("10"), unit="minutes"),
          )),
        )),
        ("virtual table", *self._run_check(
          "virtual table",
          lambda _: renderer.generate_virtual_table(VirtualTable(
            generators=[Generator(key="rowcount", symbol="=>", value=L(10))],
          )),
        )),
        ("table option", *self._run_check(
          "table option",
          lambda _: renderer.table_option_to_sql(
            TableOption(keyword="cluster by", value=[COL("customer_id")])
          ),
        )),
      ]

      self._print_table(checks)
