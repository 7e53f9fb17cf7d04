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
from tablesql.rendering.table_refs import TableOption
from tablesql.rendering.dialects.bigquery import BigQueryDialect
from tablesql.rendering.table_sql import TableSqlRenderer


def test_partition_by_renders_expression(renderer):
  sql = renderer.table_option_to_sql(
    TableOption(keyword="partition by", value=FUNC("date", COL("created_at")))
  )
  assert sql == "PARTITION BY DATE(created_at)"


def test_default_collate_with_symbol(renderer):
  sql = renderer.table_option_to_sql(
    TableOption(keyword="default collate", symbol="=", value=L("und:ci"))
  )
  assert sql == "DEFAULT COLLATE = 'und:ci'"


def test_cluster_by_renders_expression_list(renderer):
  sql = renderer.table_option_to_sql(
    TableOption(keyword="cluster by", value=[COL("customer_id"), COL("order_date")])
  )
  assert sql == "CLUSTER BY customer_id, order_date"


def test_options_render_parenthesized_triples(renderer):
  sql = renderer.table_option_to_sql(
    TableOption(
      keyword="options",
      value=[
        TableOption(keyword="description", symbol="=", value=L("orders")),
        TableOption(keyword="expiration_timestamp", symbol="=", value=FUNC("current_timestamp")),
      ],
    )
  )
  assert sql == "OPTIONS (description = 'orders', expiration_timestamp = CURRENT_TIMESTAMP())"


def test_other_keywords_render_value_as_literal(renderer):
  assert renderer.table_option_to_sql(
    TableOption(keyword="engine", symbol="=", value="InnoDB")
  ) == "ENGINE = InnoDB"
  assert renderer.table_option_to_sql(
    TableOption(keyword="auto_increment", symbol="=", value=100)
  ) == "AUTO_INCREMENT = 100"
  assert renderer.table_option_to_sql(
    TableOption(keyword="comment", symbol="=", value=L("order table"))
  ) == "COMMENT = 'order table'"
  assert renderer.table_option_to_sql(
    TableOption(keyword="compression", symbol="=", value=True)
  ) == "COMPRESSION = TRUE"
  assert renderer.table_option_to_sql(
    TableOption(keyword="ratio", symbol="=", value=0.5)
  ) == "RATIO = 0.5"


def test_valueless_option_renders_bare_keyword(renderer):
  assert renderer.table_option_to_sql(
    TableOption(keyword="compression", symbol="=", value=None)
  ) == "COMPRESSION"


def test_bare_option_literals_follow_dialect():
  from tablesql.rendering.dialects.mssql import MssqlDialect

  renderer = TableSqlRenderer(MssqlDialect())
  assert renderer.table_option_to_sql(
    TableOption(keyword="data_compression", symbol="=", value=False)
  ) == "DATA_COMPRESSION = 0"


def test_table_options_join_with_spaces(renderer):
  sql = renderer.table_options_to_sql([
    TableOption(keyword="engine", symbol="=", value="InnoDB"),
    TableOption(keyword="default charset", symbol="=", value="utf8mb4"),
  ])
  assert sql == "ENGINE = InnoDB DEFAULT CHARSET = utf8mb4"


def test_bigquery_partition_and_cluster():
  renderer = TableSqlRenderer(BigQueryDialect())
  sql = renderer.table_options_to_sql([
    TableOption(keyword="partition by", value=COL("order_date")),
    TableOption(keyword="cluster by", value=[COL("customer_id")]),
  ])
  assert sql == "PARTITION BY `order_date` CLUSTER BY `customer_id`"
