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

from tablesql.rendering.expr import COL, FUNC, L, Subquery
from tablesql.rendering.table_refs import (
  AsOf,
  Dual,
  TableRef,
  TableSample,
  TemporalTable,
)


def test_table_with_alias(renderer):
  sql = renderer.table_to_sql(TableRef(table="orders", alias="o"))
  assert sql == "orders AS o"


def test_bare_table_renders_only_its_name(renderer):
  sql = renderer.table_to_sql(TableRef(table="orders"))
  assert sql == "orders"
  assert "  " not in sql


def test_qualified_name_joins_present_parts_with_dots(renderer):
  sql = renderer.table_to_sql(
    TableRef(server="srv1", db="sales", schema="dbo", table="orders")
  )
  assert sql == "srv1.sales.dbo.orders"


def test_qualified_name_skips_absent_parts(renderer):
  sql = renderer.table_to_sql(TableRef(db="sales", table="orders"))
  assert sql == "sales.orders"

  sql = renderer.table_to_sql(TableRef(schema="dbo", table="orders"))
  assert sql == "dbo.orders"


def test_identifiers_are_quoted_when_needed(renderer):
  sql = renderer.table_to_sql(TableRef(schema="raw data", table="order", alias="1st"))
  assert sql == '"raw data".order AS "1st"'


def test_tablesample_with_repeatable_seed(renderer):
  sql = renderer.table_to_sql(
    TableRef(table="orders", tablesample=TableSample(size=L(10), repeatable=L(5)))
  )
  assert sql == "orders TABLESAMPLE (10) REPEATABLE (5)"


def test_tablesample_with_method_and_unit(renderer):
  sql = renderer.table_to_sql(
    TableRef(
      table="orders",
      alias="o",
      tablesample=TableSample(size=L(10), method="bernoulli", unit="percent"),
    )
  )
  assert sql == "orders TABLESAMPLE BERNOULLI (10 PERCENT) AS o"


def test_prefix_and_suffix_wrap_the_name(renderer):
  sql = renderer.table_to_sql(
    TableRef(schema="dbo", table="orders", prefix="only", suffix="*", alias="o")
  )
  assert sql == "dbo.ONLY orders * AS o"


def test_parentheses_wrap_entire_reference(renderer):
  sql = renderer.table_to_sql(TableRef(table="orders", alias="o", parentheses=True))
  assert sql == "(orders AS o)"


def test_subquery_as_derived_table(renderer):
  sql = renderer.table_to_sql(
    TableRef(expr=Subquery(sql="SELECT id FROM orders"), alias="sub")
  )
  assert sql == "(SELECT id FROM orders) AS sub"


def test_function_call_as_table(renderer):
  sql = renderer.table_to_sql(
    TableRef(expr=FUNC("generate_series", L(1), L(3)), alias="g")
  )
  assert sql == "GENERATE_SERIES(1, 3) AS g"


def test_segment_order_is_fixed(renderer):
  sql = renderer.table_to_sql(
    TableRef(
      table="t",
      alias="x",
      tablesample=TableSample(size=L(1)),
      temporal=TemporalTable(keyword="for system_time", clause=AsOf(of=COL("ts"))),
    )
  )
  assert sql == "t TABLESAMPLE (1) FOR SYSTEM_TIME AS OF ts AS x"


def test_dual_reference(renderer):
  assert renderer.table_to_sql(Dual()) == "DUAL"


def test_rendering_is_deterministic(renderer):
  table = TableRef(
    schema="sales",
    table="orders",
    alias="o",
    tablesample=TableSample(size=L(10), repeatable=L(5)),
  )
  assert renderer.table_to_sql(table) == renderer.table_to_sql(table)
