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
Strict vs. lenient handling of unknown discriminants.

Strict renderers raise UnsupportedConstructError naming the construct;
lenient renderers drop the segment and log a warning.
"""

import logging

import pytest

from tablesql.rendering.expr import COL, FUNC, IN_LIST, L
from tablesql.rendering.table_refs import (
  PivotOperator,
  TableHint,
  TableRef,
  TemporalTable,
  Unrecognized,
)
from tablesql.rendering.table_sql import UnsupportedConstructError


def _bad_operator():
  return PivotOperator(
    kind="transpose",
    expr=FUNC("sum", COL("amount")),
    column=COL("quarter"),
    in_expr=IN_LIST(L("Q1")),
  )


def test_strict_unknown_operator_raises(renderer):
  with pytest.raises(UnsupportedConstructError) as excinfo:
    renderer.table_to_sql(TableRef(table="sales", operator=_bad_operator()))

  assert excinfo.value.family == "table operator"
  assert excinfo.value.tag == "transpose"
  assert "transpose" in str(excinfo.value)


def test_lenient_unknown_operator_is_dropped(lenient_renderer, caplog):
  with caplog.at_level(logging.WARNING, logger="tablesql"):
    sql = lenient_renderer.table_to_sql(
      TableRef(table="sales", alias="s", operator=_bad_operator())
    )

  assert sql == "sales AS s"
  assert "transpose" in caplog.text


def test_strict_unknown_temporal_clause_raises(renderer):
  temporal = TemporalTable(
    keyword="for system_time",
    clause=Unrecognized(family="temporal clause", tag="all"),
  )
  with pytest.raises(UnsupportedConstructError) as excinfo:
    renderer.table_to_sql(TableRef(table="t", temporal=temporal))

  assert excinfo.value.tag == "all"


def test_lenient_unknown_temporal_clause_keeps_keyword_only(lenient_renderer):
  temporal = TemporalTable(
    keyword="for system_time",
    clause=Unrecognized(family="temporal clause", tag="all"),
  )
  sql = lenient_renderer.table_to_sql(TableRef(table="t", temporal=temporal))
  assert sql == "t FOR SYSTEM_TIME"


def test_unknown_hint_item(renderer, lenient_renderer):
  table = TableRef(
    table="t",
    hint=TableHint(keyword="with", items=[Unrecognized(family="table hint", tag="?")]),
  )
  with pytest.raises(UnsupportedConstructError):
    renderer.table_to_sql(table)

  assert lenient_renderer.table_to_sql(table) == "t"


def test_unknown_table_reference_in_chain(renderer, lenient_renderer):
  chain = [
    TableRef(table="a"),
    Unrecognized(family="table reference", tag="lateral_view"),
  ]
  with pytest.raises(UnsupportedConstructError) as excinfo:
    renderer.tables_to_sql(chain)
  assert excinfo.value.family == "table reference"

  assert lenient_renderer.tables_to_sql(chain) == "a,"


def test_unknown_derived_body(renderer, lenient_renderer):
  table = TableRef(expr=object(), alias="x")
  with pytest.raises(UnsupportedConstructError):
    renderer.table_to_sql(table)

  assert lenient_renderer.table_to_sql(table) == "AS x"


def test_absent_optional_fields_never_raise(renderer):
  sql = renderer.table_to_sql(
    TableRef(table="t", temporal=None, operator=None, hint=None, tablesample=None)
  )
  assert sql == "t"
