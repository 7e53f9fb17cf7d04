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

import datetime

import pytest

from tablesql.rendering.expr import COL, FUNC, IN_LIST, L
from tablesql.rendering.table_refs import (
  AsOf,
  BetweenAnd,
  ContainedIn,
  FromTo,
  PivotOperator,
  TableRef,
  TemporalTable,
)
from tablesql.rendering.table_sql import TableSqlRenderer

from tests._dialect_test_mixin import DialectTestMixin


TS = datetime.datetime(2024, 1, 2, 3, 4, 5)
TS_SQL = "TIMESTAMP '2024-01-02 03:04:05'"


# -------------------------------------------------------------------
# Temporal clauses
# -------------------------------------------------------------------

def test_for_system_time_as_of(renderer):
  sql = renderer.table_to_sql(
    TableRef(table="t", temporal=TemporalTable(keyword="for_system_time", clause=AsOf(of=L(TS))))
  )
  assert sql == f"t FOR_SYSTEM_TIME AS OF {TS_SQL}"


@pytest.mark.parametrize(
  "clause, expected",
  [
    (AsOf(of=COL("ts")), "AS OF ts"),
    (FromTo(start=L(1), end=L(2)), "FROM 1 TO 2"),
    (BetweenAnd(start=L(1), end=L(2)), "BETWEEN 1 AND 2"),
    (ContainedIn(period=FUNC("period", L(1), L(2))), "CONTAINED IN PERIOD(1, 2)"),
  ],
)
def test_temporal_clause_variants(renderer, clause, expected):
  assert renderer.temporal_table_option_to_sql(clause) == expected


def test_temporal_table_prefixes_keyword(renderer):
  sql = renderer.temporal_table_to_sql(
    TemporalTable(keyword="for system_time", clause=BetweenAnd(start=COL("a"), end=COL("b")))
  )
  assert sql == "FOR SYSTEM_TIME BETWEEN a AND b"


def test_absent_temporal_table_renders_empty(renderer):
  assert renderer.temporal_table_to_sql(None) == ""


# -------------------------------------------------------------------
# PIVOT / UNPIVOT
# -------------------------------------------------------------------

def _pivot(kind="pivot", alias=None):
  return PivotOperator(
    kind=kind,
    expr=FUNC("sum", COL("amount")),
    column=COL("quarter"),
    in_expr=IN_LIST(L("Q1"), L("Q2")),
    alias=alias,
  )


def test_pivot_operator(renderer):
  sql = renderer.operator_to_sql(_pivot(alias="p"))
  assert sql == "PIVOT(SUM(amount) FOR quarter IN ('Q1', 'Q2')) AS p"


def test_unpivot_operator_without_alias(renderer):
  sql = renderer.operator_to_sql(_pivot(kind="unpivot"))
  assert sql == "UNPIVOT(SUM(amount) FOR quarter IN ('Q1', 'Q2'))"


def test_pivot_follows_alias_on_table(renderer):
  sql = renderer.table_to_sql(TableRef(table="sales", alias="s", operator=_pivot(alias="p")))
  assert sql == "sales AS s PIVOT(SUM(amount) FOR quarter IN ('Q1', 'Q2')) AS p"


def test_pivot_in_list_goes_through_binary_renderer():
  dialect = DialectTestMixin()
  renderer = TableSqlRenderer(dialect)

  renderer.operator_to_sql(_pivot())

  assert dialect.called("render_binary")
  assert dialect.called("render_column_ref")


def test_absent_operator_renders_empty(renderer):
  assert renderer.operator_to_sql(None) == ""
