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

import logging
from typing import Any, Callable, List, Optional, Sequence

from tablesql.config.profiles import DEFAULT_MAX_DEPTH
from tablesql.config.render_options import resolve_render_options

from .dialects import SqlDialect, get_active_dialect
from .expr import BinaryOp, Expr
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
)

"""
Rendering of table references (FROM / JOIN sources) into single-line SQL.

All renderers build a list of segments and drop the empty ones before
joining, so absent optional parts never leave stray separators behind.
"""

logger = logging.getLogger(__name__)


class UnsupportedConstructError(ValueError):
  """Raised in strict mode when a node carries an unknown discriminant."""

  def __init__(self, family: str, tag: Any):
    self.family = family
    self.tag = tag
    super().__init__(f"Unsupported {family}: {tag!r}")


class RenderDepthError(RecursionError):
  """Raised when nested table chains exceed the configured max_depth."""


# ---------------------------------------------------------------------------
# Segment helpers
# ---------------------------------------------------------------------------

def _kw(keyword: Optional[str]) -> str:
  """Uppercase a keyword; None renders empty."""
  return keyword.upper() if keyword else ""


def _join(parts: Sequence[Optional[str]], sep: str = " ") -> str:
  """Join the non-empty segments."""
  return sep.join(p for p in parts if p)


def _connect(keyword: Optional[str], render: Callable[[Any], str], value: Any) -> str:
  """
  "<KEYWORD> <render(value)>", or "" if value is absent.

    _connect("AS", ident, "o")  -> AS o
    _connect("AS", ident, None) -> ""
  """
  if value is None or value == "":
    return ""
  if not keyword:
    return render(value)
  return f"{keyword} {render(value)}"


def _tag_of(node: Any) -> Any:
  if isinstance(node, Unrecognized):
    return node.tag
  return type(node).__name__


def common_type_value(generator: Generator, dialect: SqlDialect) -> List[str]:
  """
  Render a key/symbol/value triple into its ordered segments:

    Generator("rowcount", L(10), "=>") -> ["ROWCOUNT", "=>", "10"]
  """
  result = [_kw(generator.key)]
  if generator.symbol:
    result.append(generator.symbol)
  result.append(dialect.render_expr(generator.value))
  return result


class TableSqlRenderer:
  """
  Renders table references, table chains and table options for one dialect.

  strict:
    True  -> unknown discriminants raise UnsupportedConstructError
    False -> the affected segment is dropped and a warning is logged
  max_depth:
    maximum nesting of parenthesized chains / nested derived tables
  """

  def __init__(
    self,
    dialect: SqlDialect,
    strict: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
  ):
    self.dialect = dialect
    self.strict = strict
    self.max_depth = max_depth

  # ---------------------------------------------------------------------------
  # Internals
  # ---------------------------------------------------------------------------
  def _unsupported(self, family: str, tag: Any) -> str:
    if self.strict:
      raise UnsupportedConstructError(family, tag)
    logger.warning("Dropping unsupported %s %r from rendered SQL", family, tag)
    return ""

  def _check_depth(self, depth: int) -> None:
    if depth > self.max_depth:
      raise RenderDepthError(
        f"Table nesting depth {depth} exceeds max_depth={self.max_depth}"
      )

  def _ident(self, name: Optional[str]) -> str:
    if not name:
      return ""
    return self.dialect.render_identifier(name)

  # ---------------------------------------------------------------------------
  # UNNEST
  # ---------------------------------------------------------------------------
  def unnest_to_sql(self, unnest: Unnest) -> str:
    """UNNEST(<expr>) [AS <alias>] [<OFFSET KEYWORD> [AS <alias>]]"""
    d = self.dialect
    expr_sql = d.render_expr(unnest.expr) if unnest.expr is not None else ""
    alias_render = self._ident if isinstance(unnest.alias, str) else d.render_expr

    result = [
      f"UNNEST({expr_sql})",
      _connect("AS", alias_render, unnest.alias),
    ]
    if unnest.with_offset is not None:
      result.append(_join([
        _kw(unnest.with_offset.keyword),
        _connect("AS", self._ident, unnest.with_offset.alias),
      ]))
    return _join(result)

  # ---------------------------------------------------------------------------
  # PIVOT / UNPIVOT
  # ---------------------------------------------------------------------------
  def _pivot_operator_to_sql(self, operator: PivotOperator) -> str:
    d = self.dialect
    if isinstance(operator.in_expr, BinaryOp):
      in_sql = d.render_binary(operator.in_expr)
    else:
      in_sql = d.render_expr(operator.in_expr)

    body = " ".join([
      d.render_expr(operator.expr),
      "FOR",
      d.render_column_ref(operator.column),
      in_sql,
    ])
    sql = [f"{operator.kind.upper()}({body})"]
    if operator.alias:
      sql.append(f"AS {self._ident(operator.alias)}")
    return " ".join(sql)

  def operator_to_sql(self, operator) -> str:
    if operator is None:
      return ""
    if isinstance(operator, PivotOperator):
      if operator.kind.lower() in ("pivot", "unpivot"):
        return self._pivot_operator_to_sql(operator)
      return self._unsupported("table operator", operator.kind)
    return self._unsupported("table operator", _tag_of(operator))

  # ---------------------------------------------------------------------------
  # Table hints
  # ---------------------------------------------------------------------------
  def table_hint_to_sql(self, item) -> str:
    d = self.dialect

    if isinstance(item, ForceSeekHint):
      columns = ", ".join(c for c in (d.render_expr(c) for c in item.index_columns) if c)
      return _join([
        "FORCESEEK",
        f"({self._ident(item.index)}",
        f"({columns}))",
      ])

    if isinstance(item, SpatialWindowMaxCellsHint):
      return _join(["SPATIAL_WINDOW_MAX_CELLS", "=", d.render_expr(item.value)])

    if isinstance(item, IndexHint):
      if item.parentheses:
        target = "(" + ", ".join(self._ident(n) for n in item.names) + ")"
      elif len(item.names) == 1:
        target = f"= {self._ident(item.names[0])}"
      else:
        return self._unsupported("index hint", f"{len(item.names)} names without parentheses")
      return _join([_kw(item.prefix), "INDEX", target])

    if isinstance(item, RawHint):
      return d.render_expr(item.expr)

    return self._unsupported("table hint", _tag_of(item))

  def _table_hint_clause(self, hint: TableHint) -> str:
    items = [s for s in (self.table_hint_to_sql(i) for i in hint.items) if s]
    if not items:
      return ""
    return _join([_kw(hint.keyword), "(" + ", ".join(items) + ")"])

  # ---------------------------------------------------------------------------
  # Temporal tables
  # ---------------------------------------------------------------------------
  def temporal_table_option_to_sql(self, clause) -> str:
    render = self.dialect.render_expr

    if isinstance(clause, AsOf):
      result = ["AS", "OF", render(clause.of)]
    elif isinstance(clause, FromTo):
      result = ["FROM", render(clause.start), "TO", render(clause.end)]
    elif isinstance(clause, BetweenAnd):
      result = ["BETWEEN", render(clause.start), "AND", render(clause.end)]
    elif isinstance(clause, ContainedIn):
      result = ["CONTAINED", "IN", render(clause.period)]
    else:
      return self._unsupported("temporal clause", _tag_of(clause))

    return _join(result)

  def temporal_table_to_sql(self, temporal: Optional[TemporalTable]) -> str:
    if temporal is None:
      return ""
    return _join([_kw(temporal.keyword), self.temporal_table_option_to_sql(temporal.clause)])

  # ---------------------------------------------------------------------------
  # TUMBLE / virtual tables / VALUES
  # ---------------------------------------------------------------------------
  def table_tumble_to_sql(self, tumble: Optional[TumbleWindow]) -> str:
    if tumble is None:
      return ""
    d = self.dialect
    full_table_name = _join([self._ident(tumble.db), self._ident(tumble.table)], ".")
    result = [
      "TABLE(TUMBLE(TABLE",
      full_table_name,
      f"DESCRIPTOR({d.render_column_ref(tumble.time_column)})",
      f"{d.render_interval(tumble.size)}))",
    ]
    return _join(result)

  def generate_virtual_table(self, virtual: VirtualTable) -> str:
    generator_sql = ", ".join(
      " ".join(common_type_value(g, self.dialect)) for g in virtual.generators
    )
    return f"{_kw(virtual.keyword)}({_kw(virtual.kind)}({generator_sql}))"

  def _values_to_sql(self, values: ValuesTable) -> str:
    sql = f"VALUES {self.dialect.render_values(values.rows, values.row_prefix)}"
    if values.parentheses:
      return f"({sql})"
    return sql

  def _derived_table_to_sql(self, expr, depth: int) -> str:
    if isinstance(expr, ValuesTable):
      return self._values_to_sql(expr)
    if isinstance(expr, TumbleWindow):
      return self.table_tumble_to_sql(expr)
    if isinstance(expr, VirtualTable):
      return self.generate_virtual_table(expr)
    if isinstance(expr, NestedTables):
      return self._tables_to_sql(expr, depth)
    if isinstance(expr, list):
      return f"({self._tables_to_sql(expr, depth + 1)})"
    if isinstance(expr, Expr):
      return self.dialect.render_expr(expr)
    return self._unsupported("derived table", _tag_of(expr))

  # ---------------------------------------------------------------------------
  # Table reference
  # ---------------------------------------------------------------------------
  def _tablesample_to_sql(self, sample: TableSample) -> str:
    render = self.dialect.render_expr
    size_sql = _join([render(sample.size), _kw(sample.unit)])
    return _join([
      "TABLESAMPLE",
      _kw(sample.method),
      f"({size_sql})",
      _connect("REPEATABLE", lambda seed: f"({render(seed)})", sample.repeatable),
    ])

  def _table_to_sql(self, table, depth: int) -> str:
    self._check_depth(depth)

    if isinstance(table, Unnest):
      return self.unnest_to_sql(table)
    if isinstance(table, Dual):
      return "DUAL"
    if not isinstance(table, TableRef):
      return self._unsupported("table reference", _tag_of(table))

    table_name = self._ident(table.table)
    if table.expr is not None:
      table_name = self._derived_table_to_sql(table.expr, depth)

    table_name = _join([_kw(table.prefix), table_name, _kw(table.suffix)])
    qualified = _join([
      self._ident(table.server),
      self._ident(table.db),
      self._ident(table.schema),
      table_name,
    ], ".")

    result = [qualified]
    if table.tablesample is not None:
      result.append(self._tablesample_to_sql(table.tablesample))
    result += [
      self.temporal_table_to_sql(table.temporal),
      _connect("AS", self._ident, table.alias),
      self.operator_to_sql(table.operator),
    ]
    if table.hint is not None:
      result.append(self._table_hint_clause(table.hint))

    table_sql = _join(result)
    if table.parentheses:
      return f"({table_sql})"
    return table_sql

  def table_to_sql(self, table) -> str:
    """Render a single table reference (TableRef, Unnest or Dual)."""
    return self._table_to_sql(table, 0)

  # ---------------------------------------------------------------------------
  # Table chain
  # ---------------------------------------------------------------------------
  def _tables_to_sql(self, tables, depth: int) -> str:
    self._check_depth(depth)

    if tables is None:
      return ""

    if isinstance(tables, NestedTables):
      sql = self._tables_to_sql(tables.expr, depth + 1)
      if tables.parentheses:
        return f"({sql})"
      return sql

    if not tables:
      return ""

    base = tables[0]
    base_table = base.table if isinstance(base, Join) else base
    if isinstance(base_table, Dual):
      return "DUAL"

    clauses = [self._table_to_sql(base_table, depth)]
    for entry in tables[1:]:
      join = entry if isinstance(entry, Join) else Join(table=entry)
      parts = [
        f" {_kw(join.join)}" if join.join else ",",
        self._table_to_sql(join.table, depth),
        _connect("ON", self.dialect.render_expr, join.on),
      ]
      if join.using:
        parts.append(f"USING ({', '.join(self._ident(c) for c in join.using)})")
      clauses.append(_join(parts))

    return "".join(c for c in clauses if c)

  def tables_to_sql(self, tables) -> str:
    """
    Render a table chain: a list of table references and joins, or a
    NestedTables wrapper.

      [TableRef("orders"), Join(TableRef("customers"), "inner join", on=...)]
      -> orders INNER JOIN customers ON ...
    """
    return self._tables_to_sql(tables, 0)

  # ---------------------------------------------------------------------------
  # Table options (DDL)
  # ---------------------------------------------------------------------------
  def _option_literal(self, value) -> str:
    if value is None:
      return ""
    if isinstance(value, Expr):
      return self.dialect.render_expr(value)
    if isinstance(value, str):
      return value
    return self.dialect.render_literal(value)

  def table_option_to_sql(self, option: TableOption) -> str:
    render = self.dialect.render_expr
    keyword = option.keyword.lower()
    if keyword in ("partition by", "default collate"):
      value = render(option.value)
    elif keyword == "options":
      value = "(" + ", ".join(
        _join([item.keyword, item.symbol, render(item.value)]) for item in option.value
      ) + ")"
    elif keyword == "cluster by":
      value = ", ".join(render(v) for v in option.value)
    else:
      value = self._option_literal(option.value)

    # a valueless option renders as the bare keyword
    if not value:
      return option.keyword.upper()
    return _join([option.keyword.upper(), option.symbol, value])

  def table_options_to_sql(self, options: Sequence[TableOption]) -> str:
    return " ".join(self.table_option_to_sql(o) for o in options)


# ---------------------------------------------------------------------------
# Convenience entry points
# ---------------------------------------------------------------------------

def get_table_renderer(
  dialect: SqlDialect | str | None = None,
  strict: Optional[bool] = None,
  max_depth: Optional[int] = None,
) -> TableSqlRenderer:
  """
  Build a TableSqlRenderer, resolving anything not given from env/profile.
  """
  if not isinstance(dialect, SqlDialect):
    dialect = get_active_dialect(dialect)
  options = resolve_render_options(strict=strict, max_depth=max_depth)
  return TableSqlRenderer(dialect, strict=options.strict, max_depth=options.max_depth)


def render_table(table, dialect: SqlDialect | str | None = None, **kwargs) -> str:
  return get_table_renderer(dialect, **kwargs).table_to_sql(table)


def render_tables(tables, dialect: SqlDialect | str | None = None, **kwargs) -> str:
  return get_table_renderer(dialect, **kwargs).tables_to_sql(tables)


def render_table_option(option: TableOption, dialect: SqlDialect | str | None = None) -> str:
  return get_table_renderer(dialect).table_option_to_sql(option)
