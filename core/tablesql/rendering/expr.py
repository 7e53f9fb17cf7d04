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

from dataclasses import dataclass, field
from typing import List, Optional


class Expr:
  """Marker base class for all logical SQL expression nodes."""
  pass


@dataclass(frozen=True)
class ColumnRef(Expr):
  """Reference to a column, optionally qualified by a table alias."""
  table_alias: Optional[str]
  column_name: str


@dataclass(frozen=True)
class Star(Expr):
  """`*` or `alias.*`."""
  table_alias: Optional[str] = None


@dataclass(frozen=True)
class Literal(Expr):
  """Simple literal value: string, number, bool, date/datetime, Decimal or None."""
  value: object


@dataclass(frozen=True)
class FuncCall(Expr):
  """Generic function call expression, e.g. UPPER(col), SUM(amount), GENERATE_SERIES(1, 10)."""
  name: str
  args: List[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class BinaryOp(Expr):
  """
  Infix expression `<left> <OP> <right>`.

  `left` may be omitted for operator fragments such as the
  `IN ('Q1', 'Q2')` part of a PIVOT clause.
  """
  op: str
  left: Optional[Expr]
  right: Expr


@dataclass(frozen=True)
class ExprList(Expr):
  """Comma separated expressions, parenthesized by default: `(a, b, c)`."""
  items: List[Expr] = field(default_factory=list)
  parentheses: bool = True


@dataclass(frozen=True)
class Interval(Expr):
  """INTERVAL literal, e.g. Interval(Literal('10'), 'minute') -> INTERVAL '10' MINUTE."""
  value: Expr
  unit: str


@dataclass(frozen=True)
class Subquery(Expr):
  """
  Already rendered SELECT statement used as a derived table body.
  Rendered wrapped in parentheses.
  """
  sql: str


@dataclass(frozen=True)
class RawSql(Expr):
  """
  Raw SQL fragment rendered verbatim.
  Use sparingly, raw SQL bypasses dialect rendering.
  """
  sql: str


# ---------------------------------------------------------------------------
# Convenience constructors
# ---------------------------------------------------------------------------

def L(value: object) -> Literal:
  """Helper for creating a Literal."""
  return Literal(value=value)


def COL(column_name: str, table_alias: Optional[str] = None) -> ColumnRef:
  """Helper for creating a ColumnRef."""
  return ColumnRef(table_alias=table_alias, column_name=column_name)


def FUNC(name: str, *args: Expr) -> FuncCall:
  """Helper for generic function calls."""
  return FuncCall(name=name, args=list(args))


def EQ(left: Expr, right: Expr) -> BinaryOp:
  """Helper for `left = right`."""
  return BinaryOp(op="=", left=left, right=right)


def IN_LIST(*items: Expr, left: Optional[Expr] = None) -> BinaryOp:
  """
  Helper for `[left] IN (item1, item2, ...)`.

  Without `left` this yields the bare `IN (...)` fragment used by PIVOT.
  """
  return BinaryOp(op="IN", left=left, right=ExprList(items=list(items)))
