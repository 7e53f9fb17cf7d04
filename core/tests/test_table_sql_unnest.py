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

from tablesql.rendering.expr import COL, FUNC, L
from tablesql.rendering.table_refs import Unnest, WithOffset
from tablesql.rendering.dialects.bigquery import BigQueryDialect
from tablesql.rendering.table_sql import TableSqlRenderer


def test_unnest_with_alias_and_offset(renderer):
  sql = renderer.table_to_sql(
    Unnest(expr=COL("tags"), alias="t", with_offset=WithOffset(alias="pos"))
  )
  assert sql == "UNNEST(tags) AS t WITH OFFSET AS pos"


def test_unnest_without_expr_renders_empty_parentheses(renderer):
  assert renderer.unnest_to_sql(Unnest()) == "UNNEST()"


def test_unnest_alias_may_be_an_expression(renderer):
  sql = renderer.unnest_to_sql(
    Unnest(expr=COL("tags"), alias=FUNC("t", COL("tag")))
  )
  assert sql == "UNNEST(tags) AS T(tag)"


def test_unnest_with_offset_without_alias(renderer):
  sql = renderer.unnest_to_sql(Unnest(expr=COL("tags"), with_offset=WithOffset()))
  assert sql == "UNNEST(tags) WITH OFFSET"


def test_unnest_of_array_function(renderer):
  sql = renderer.unnest_to_sql(
    Unnest(expr=FUNC("generate_array", L(1), L(5)), alias="n")
  )
  assert sql == "UNNEST(GENERATE_ARRAY(1, 5)) AS n"


def test_unnest_in_bigquery_quotes_identifiers():
  renderer = TableSqlRenderer(BigQueryDialect())
  sql = renderer.unnest_to_sql(
    Unnest(expr=COL("tags", "o"), alias="t", with_offset=WithOffset(alias="pos"))
  )
  assert sql == "UNNEST(`o`.`tags`) AS `t` WITH OFFSET AS `pos`"


def test_unnest_with_ordinality_keyword(renderer):
  sql = renderer.unnest_to_sql(
    Unnest(
      expr=COL("tags"),
      alias="t",
      with_offset=WithOffset(alias="pos", keyword="with ordinality"),
    )
  )
  assert sql == "UNNEST(tags) AS t WITH ORDINALITY AS pos"
