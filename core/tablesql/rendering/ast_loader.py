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

from typing import Any, Dict, List

from tablesql.config.profiles import DEFAULT_MAX_DEPTH

from .expr import (
  BinaryOp,
  ColumnRef,
  Expr,
  ExprList,
  FuncCall,
  Interval,
  Literal,
  RawSql,
  Star,
  Subquery,
)
from .table_refs import (
  AsOf,
  BetweenAnd,
  ContainedIn,
  Dual,
  ForceSeekHint,
  FromTo,
  Generator,
  IndexHint,
  Join,
  NestedTables,
  PivotOperator,
  RawHint,
  SpatialWindowMaxCellsHint,
  TableHint,
  TableOption,
  TableRef,
  TableSample,
  TemporalTable,
  TumbleWindow,
  Unnest,
  Unrecognized,
  ValuesTable,
  VirtualTable,
  WithOffset,
)
from .table_sql import RenderDepthError

"""
Conversion of a parser's plain-dict table tree into table_refs / expr nodes.

The input uses string discriminants (`type`, `keyword`) as produced by the
upstream SQL parser. Unknown discriminants of optional constructs become
Unrecognized nodes so the renderer can apply its strict / lenient policy;
structurally malformed input raises ValueError.
"""

_LITERAL_TYPES = {
  "number",
  "string",
  "single_quote_string",
  "double_quote_string",
  "natural_string",
  "bool",
  "boolean",
  "null",
}


def _require(node: Dict[str, Any], key: str, what: str) -> Any:
  if node.get(key) is None:
    raise ValueError(f"{what} requires '{key}': {node!r}")
  return node[key]


def _as_dict(node: Any, what: str) -> Dict[str, Any]:
  if not isinstance(node, dict):
    raise ValueError(f"{what} must be a mapping, got {type(node).__name__}")
  return node


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

def _expr_items(node: Any) -> List[Expr]:
  """Function args / list values may be a plain list or an expr_list node."""
  if node is None:
    return []
  if isinstance(node, dict) and node.get("type") == "expr_list":
    node = node.get("value") or []
  if not isinstance(node, list):
    return [load_expr(node)]
  return [load_expr(n) for n in node]


def load_expr(node: Any) -> Expr:
  """
  Convert an expression node.

  Bare strings are treated as column names, other bare scalars as literals.
  """
  if isinstance(node, Expr):
    return node
  if isinstance(node, str):
    return ColumnRef(table_alias=None, column_name=node)
  if node is None or isinstance(node, (bool, int, float)):
    return Literal(node)

  node = _as_dict(node, "Expression")
  node_type = node.get("type")

  if node_type == "column_ref":
    column = _require(node, "column", "column_ref")
    if column == "*":
      return Star(table_alias=node.get("table"))
    return ColumnRef(table_alias=node.get("table"), column_name=column)

  if node_type == "star":
    return Star(table_alias=node.get("table"))

  if node_type in _LITERAL_TYPES:
    return Literal(node.get("value"))

  if node_type == "binary_expr":
    left = node.get("left")
    return BinaryOp(
      op=_require(node, "operator", "binary_expr"),
      left=load_expr(left) if left is not None else None,
      right=load_expr(_require(node, "right", "binary_expr")),
    )

  if node_type == "expr_list":
    return ExprList(
      items=_expr_items(node.get("value")),
      parentheses=node.get("parentheses", True),
    )

  if node_type in ("function", "aggr_func"):
    return FuncCall(
      name=_require(node, "name", node_type),
      args=_expr_items(node.get("args")),
    )

  if node_type == "interval":
    return Interval(
      value=load_expr(_require(node, "expr", "interval")),
      unit=_require(node, "unit", "interval"),
    )

  if node_type == "subquery":
    return Subquery(sql=_require(node, "sql", "subquery"))

  if node_type == "raw":
    return RawSql(sql=_require(node, "value", "raw"))

  raise ValueError(f"Unsupported expression node type: {node_type!r}")


def _column_ref(node: Any) -> ColumnRef:
  expr = load_expr(node)
  if not isinstance(expr, ColumnRef):
    raise ValueError(f"Expected a column reference, got {node!r}")
  return expr


# ---------------------------------------------------------------------------
# Table decorations
# ---------------------------------------------------------------------------

def _tablesample(node: Dict[str, Any]) -> TableSample:
  repeatable = node.get("repeatable")
  return TableSample(
    size=load_expr(_require(node, "expr", "tablesample")),
    method=node.get("method"),
    unit=node.get("unit"),
    repeatable=load_expr(repeatable) if repeatable is not None else None,
  )


def _temporal_clause(node: Dict[str, Any]):
  keyword = node.get("keyword")

  if keyword == "as":
    return AsOf(of=load_expr(_require(node, "of", "AS OF")))
  if keyword == "from_to":
    return FromTo(
      start=load_expr(_require(node, "from", "FROM ... TO")),
      end=load_expr(_require(node, "to", "FROM ... TO")),
    )
  if keyword == "between_and":
    return BetweenAnd(
      start=load_expr(_require(node, "between", "BETWEEN ... AND")),
      end=load_expr(_require(node, "and", "BETWEEN ... AND")),
    )
  if keyword == "contained":
    return ContainedIn(period=load_expr(_require(node, "in", "CONTAINED IN")))

  return Unrecognized(family="temporal clause", tag=keyword, payload=node)


def _temporal_table(node: Dict[str, Any]) -> TemporalTable:
  return TemporalTable(
    keyword=_require(node, "keyword", "temporal_table"),
    clause=_temporal_clause(_as_dict(_require(node, "expr", "temporal_table"), "temporal clause")),
  )


def _operator(node: Dict[str, Any]):
  kind = node.get("type")
  if isinstance(kind, str):
    kind = kind.lower()
  if kind not in ("pivot", "unpivot"):
    return Unrecognized(family="table operator", tag=kind, payload=node)
  return PivotOperator(
    kind=kind,
    expr=load_expr(_require(node, "expr", kind)),
    column=_column_ref(_require(node, "column", kind)),
    in_expr=load_expr(_require(node, "in_expr", kind)),
    alias=node.get("as"),
  )


def _hint_item(node: Dict[str, Any]):
  keyword = str(_require(node, "keyword", "table hint")).lower()

  if keyword == "forceseek":
    return ForceSeekHint(
      index=_require(node, "index", "FORCESEEK"),
      index_columns=_expr_items(node.get("index_columns")),
    )
  if keyword == "spatial_window_max_cells":
    return SpatialWindowMaxCellsHint(value=load_expr(_require(node, "expr", keyword)))
  if keyword == "index":
    names = _require(node, "expr", "INDEX hint")
    return IndexHint(
      names=list(names) if isinstance(names, list) else [names],
      parentheses=bool(node.get("parentheses")),
      prefix=node.get("prefix"),
    )
  # other keywords pass through their expression
  return RawHint(expr=load_expr(_require(node, "expr", "table hint")))


def _table_hint(node: Dict[str, Any]) -> TableHint:
  return TableHint(
    keyword=_require(node, "keyword", "table_hint"),
    items=[_hint_item(_as_dict(i, "table hint")) for i in node.get("expr") or []],
  )


# ---------------------------------------------------------------------------
# Derived table bodies
# ---------------------------------------------------------------------------

def _values_table(node: Dict[str, Any]) -> ValuesTable:
  rows = []
  for row in node.get("values") or []:
    rows.append(_expr_items(row))
  return ValuesTable(
    rows=rows,
    row_prefix=node.get("prefix"),
    parentheses=bool(node.get("parentheses")),
  )


def _tumble(node: Dict[str, Any]) -> TumbleWindow:
  data = _as_dict(_require(node, "data", "tumble"), "tumble data")
  size = _require(node, "size", "tumble")
  if isinstance(size, dict) and size.get("type") != "interval":
    size = {"type": "interval", **size}
  interval = load_expr(size)
  if not isinstance(interval, Interval):
    raise ValueError(f"tumble size must be an interval, got {size!r}")
  return TumbleWindow(
    table=_require(data, "table", "tumble data"),
    db=data.get("db"),
    time_column=_column_ref(_require(node, "timecol", "tumble")),
    size=interval,
  )


def _virtual_table(node: Dict[str, Any]) -> VirtualTable:
  generators = [
    Generator(
      key=_require(g, "type", "generator"),
      symbol=g.get("symbol"),
      value=load_expr(g.get("value")),
    )
    for g in (_as_dict(g, "generator") for g in node.get("generators") or [])
  ]
  return VirtualTable(
    generators=generators,
    keyword=node.get("keyword") or "table",
    kind=node.get("type") or "generator",
  )


def _derived_body(node: Any, depth: int, max_depth: int):
  if isinstance(node, list):
    return _load_tables(node, depth + 1, max_depth)
  node = _as_dict(node, "Derived table")
  body_type = node.get("type")

  if body_type == "values":
    return _values_table(node)
  if body_type == "tumble":
    return _tumble(node)
  if body_type == "generator":
    return _virtual_table(node)
  if body_type is None and "expr" in node:
    return _load_tables(node, depth, max_depth)
  return load_expr(node)


# ---------------------------------------------------------------------------
# Table references / chains
# ---------------------------------------------------------------------------

def _with_offset(node: Any) -> WithOffset:
  node = _as_dict(node, "with_offset")
  keyword = node.get("keyword") or "with offset"
  # bare "offset" is the short form some parsers emit
  if keyword.lower() == "offset":
    keyword = "with offset"
  return WithOffset(alias=node.get("as"), keyword=keyword)


def _unnest(node: Dict[str, Any]) -> Unnest:
  alias = node.get("as")
  expr = node.get("expr")
  with_offset = node.get("with_offset")
  return Unnest(
    expr=load_expr(expr) if expr is not None else None,
    alias=alias if alias is None or isinstance(alias, str) else load_expr(alias),
    with_offset=_with_offset(with_offset) if with_offset else None,
  )


def _load_table(node: Any, depth: int, max_depth: int):
  node = _as_dict(node, "Table reference")
  table_type = node.get("type")

  if table_type is not None and str(table_type).lower() == "unnest":
    return _unnest(node)
  if table_type == "dual":
    return Dual()
  if table_type not in (None, "table", "expr"):
    return Unrecognized(family="table reference", tag=table_type, payload=node)

  expr = node.get("expr")
  tablesample = node.get("tablesample")
  temporal = node.get("temporal_table")
  operator = node.get("operator")
  hint = node.get("table_hint")

  return TableRef(
    table=node.get("table"),
    db=node.get("db"),
    schema=node.get("schema"),
    server=node.get("server"),
    expr=_derived_body(expr, depth, max_depth) if expr is not None else None,
    alias=node.get("as"),
    prefix=node.get("prefix"),
    suffix=node.get("suffix"),
    parentheses=bool(node.get("parentheses")),
    tablesample=_tablesample(tablesample) if tablesample else None,
    temporal=_temporal_table(temporal) if temporal else None,
    operator=_operator(operator) if operator else None,
    hint=_table_hint(hint) if hint else None,
  )


def load_table(node: Any, max_depth: int = DEFAULT_MAX_DEPTH):
  """Convert one table reference dict (join fields are ignored here)."""
  return _load_table(node, 0, max_depth)


def _chain_entry(node: Any, depth: int, max_depth: int):
  node = _as_dict(node, "Table chain entry")
  table = _load_table(node, depth, max_depth)
  if not any(node.get(k) for k in ("join", "on", "using")):
    return table
  on = node.get("on")
  return Join(
    table=table,
    join=node.get("join"),
    on=load_expr(on) if on is not None else None,
    using=list(node.get("using") or []),
  )


def _load_tables(node: Any, depth: int, max_depth: int):
  if depth > max_depth:
    raise RenderDepthError(
      f"Table nesting depth {depth} exceeds max_depth={max_depth}"
    )
  if isinstance(node, list):
    return [_chain_entry(n, depth, max_depth) for n in node]
  node = _as_dict(node, "Table chain")
  return NestedTables(
    expr=_load_tables(_require(node, "expr", "Nested table chain"), depth + 1, max_depth),
    parentheses=bool(node.get("parentheses")),
  )


def load_tables(node: Any, max_depth: int = DEFAULT_MAX_DEPTH):
  """
  Convert a table chain: a list of table dicts, or an {expr, parentheses}
  wrapper around a nested chain.

  Nesting is counted the same way TableSqlRenderer counts it, so input the
  renderer would reject raises RenderDepthError here already.
  """
  return _load_tables(node, 0, max_depth)


# ---------------------------------------------------------------------------
# Table options
# ---------------------------------------------------------------------------

def load_table_option(node: Any) -> TableOption:
  node = _as_dict(node, "Table option")
  keyword = _require(node, "keyword", "Table option")
  value = node.get("value")
  kw = keyword.lower()

  if kw in ("partition by", "default collate"):
    value = load_expr(value)
  elif kw == "options":
    value = [
      TableOption(
        keyword=_require(item, "keyword", "options item"),
        symbol=item.get("symbol"),
        value=load_expr(item.get("value")),
      )
      for item in (_as_dict(i, "options item") for i in value or [])
    ]
  elif kw == "cluster by":
    value = _expr_items(value)
  elif isinstance(value, dict):
    value = load_expr(value)

  return TableOption(keyword=keyword, symbol=node.get("symbol"), value=value)
