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

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..expr import (
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


class SqlDialect(ABC):
  """
  Base interface for SQL dialects.

  A dialect is the renderer context handed to the table renderers: it
  quotes identifiers, formats literals and renders the expression nodes
  embedded in table references.
  """

  DIALECT_NAME = "base"

  @abstractmethod
  def quote_ident(self, name: str) -> str:
    """
    Quote an identifier (schema, table, column) according to the dialect.
    """
    raise NotImplementedError


  def should_quote(self, name: str) -> bool:
    """
    Decide whether identifier must be quoted.
    Rules:
      - empty or None → quote
      - contains whitespace or not alnum/_ → quote
      - starts with digit → quote
    """
    if not name:
      return True
    if name[0].isdigit():
      return True
    if not name.replace("_", "").isalnum():
      return True
    # future: check dialect keyword lists
    return False

  # ---------------------------------------------------------------------------
  # Literal Rendering
  # ---------------------------------------------------------------------------
  @abstractmethod
  def render_literal(self, value) -> str:
    """
    Render a Python value as a SQL literal.
    Must handle None, bool, int, float, str, date, datetime, Decimal.
    """

  # -------------------------------------------------------------------------
  # Generic helpers built on top of quote_ident
  # -------------------------------------------------------------------------

  def render_identifier(self, name: str) -> str:
    """
    Apply quoting only when necessary.
    """
    if self.should_quote(name):
      return self.quote_ident(name)
    return name


  def render_column_ref(self, col: ColumnRef) -> str:
    """
    Render a column reference, optionally qualified by a table alias.

      render_column_ref(COL("id", "o")) -> o.id
    """
    if col.table_alias:
      return f"{self.render_identifier(col.table_alias)}.{self.render_identifier(col.column_name)}"
    return self.render_identifier(col.column_name)

  # ---------------------------------------------------------------------------
  # Expression rendering
  # ---------------------------------------------------------------------------
  def render_expr(self, expr: Expr) -> str:
    if isinstance(expr, ColumnRef):
      return self.render_column_ref(expr)

    if isinstance(expr, Star):
      if expr.table_alias:
        return f"{self.render_identifier(expr.table_alias)}.*"
      return "*"

    if isinstance(expr, Literal):
      return self.render_literal(expr.value)

    if isinstance(expr, FuncCall):
      args_sql = ", ".join(self.render_expr(a) for a in expr.args)
      return f"{expr.name.upper()}({args_sql})"

    if isinstance(expr, BinaryOp):
      return self.render_binary(expr)

    if isinstance(expr, ExprList):
      items_sql = ", ".join(self.render_expr(i) for i in expr.items)
      if expr.parentheses:
        return f"({items_sql})"
      return items_sql

    if isinstance(expr, Interval):
      return self.render_interval(expr)

    if isinstance(expr, Subquery):
      return f"({expr.sql})"

    if isinstance(expr, RawSql):
      return expr.sql

    raise TypeError(
      f"Unsupported expression type for {self.__class__.__name__}: {type(expr)!r}"
    )

  def render_binary(self, expr: BinaryOp) -> str:
    """
    Render `<left> <OP> <right>`; a missing left side yields `<OP> <right>`.
    """
    parts = []
    if expr.left is not None:
      parts.append(self.render_expr(expr.left))
    parts.append(expr.op.upper())
    parts.append(self.render_expr(expr.right))
    return " ".join(parts)

  def render_interval(self, interval: Interval) -> str:
    return f"INTERVAL {self.render_expr(interval.value)} {interval.unit.upper()}"

  # ---------------------------------------------------------------------------
  # VALUES rows
  # ---------------------------------------------------------------------------
  def render_values_row(self, row: Sequence[Expr], prefix: Optional[str] = None) -> str:
    """
    Render a single VALUES row:

      render_values_row([L(1), L(2)])         -> (1, 2)
      render_values_row([L(1), L(2)], "row")  -> ROW(1, 2)
    """
    row_sql = ", ".join(self.render_expr(v) for v in row)
    return f"{(prefix or '').upper()}({row_sql})"

  def render_values(self, rows: Sequence[Sequence[Expr]], prefix: Optional[str] = None) -> str:
    """Render the row list of a VALUES clause (without the VALUES keyword)."""
    return ", ".join(self.render_values_row(r, prefix) for r in rows)
