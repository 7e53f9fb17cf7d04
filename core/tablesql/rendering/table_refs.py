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
from typing import Any, Dict, List, Optional, Union

from .expr import ColumnRef, Expr, Interval


"""
Logical representation of table references as they appear in FROM / JOIN
clauses. Every construct family is a small tagged union of dataclasses;
renderers dispatch on the concrete class.
"""


@dataclass(frozen=True)
class Unrecognized:
  """
  Placeholder for a node whose discriminant tag is not known.

  `family` names the construct family ("operator", "temporal clause", ...),
  `tag` is the tag value as found in the source tree.
  """
  family: str
  tag: Any
  payload: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# TABLESAMPLE
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableSample:
  """
  TABLESAMPLE [method] (<size> [unit]) [REPEATABLE (<seed>)]
  """
  size: Expr
  method: Optional[str] = None
  unit: Optional[str] = None
  repeatable: Optional[Expr] = None


# ---------------------------------------------------------------------------
# Temporal ("time travel") clauses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AsOf:
  of: Expr


@dataclass(frozen=True)
class FromTo:
  start: Expr
  end: Expr


@dataclass(frozen=True)
class BetweenAnd:
  start: Expr
  end: Expr


@dataclass(frozen=True)
class ContainedIn:
  period: Expr


TemporalClause = Union[AsOf, FromTo, BetweenAnd, ContainedIn, Unrecognized]


@dataclass(frozen=True)
class TemporalTable:
  """`<keyword> <clause>`, e.g. FOR SYSTEM_TIME AS OF '2024-01-01'."""
  keyword: str
  clause: TemporalClause


# ---------------------------------------------------------------------------
# PIVOT / UNPIVOT
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PivotOperator:
  """
  PIVOT(<expr> FOR <column> <in_expr>) [AS alias]

  kind is "pivot" or "unpivot".
  """
  kind: str
  expr: Expr
  column: ColumnRef
  in_expr: Expr
  alias: Optional[str] = None


# ---------------------------------------------------------------------------
# Table hints
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ForceSeekHint:
  index: str
  index_columns: List[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class SpatialWindowMaxCellsHint:
  value: Expr


@dataclass(frozen=True)
class IndexHint:
  """
  INDEX (a, b) when parentheses is set, INDEX = a otherwise.
  """
  names: List[str]
  parentheses: bool = True
  prefix: Optional[str] = None


@dataclass(frozen=True)
class RawHint:
  """Any other hint, rendered as its expression (e.g. NOLOCK)."""
  expr: Expr


TableHintItem = Union[ForceSeekHint, SpatialWindowMaxCellsHint, IndexHint, RawHint, Unrecognized]


@dataclass(frozen=True)
class TableHint:
  """`<keyword> (<item>, <item>, ...)`, typically WITH (...)."""
  keyword: str
  items: List[TableHintItem] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Derived table bodies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValuesTable:
  """
  VALUES (...), (...) used as a table.

  row_prefix is prepended to every row, e.g. ROW(1, 2), ROW(3, 4).
  """
  rows: List[List[Expr]]
  row_prefix: Optional[str] = None
  parentheses: bool = False


@dataclass(frozen=True)
class TumbleWindow:
  """
  Streaming fixed-size window table function:
    TABLE(TUMBLE(TABLE db.table DESCRIPTOR(time_column) INTERVAL ...))
  """
  table: str
  time_column: ColumnRef
  size: Interval
  db: Optional[str] = None


@dataclass(frozen=True)
class Generator:
  """Key/symbol/value triple, e.g. ROWCOUNT => 10."""
  key: str
  value: Expr
  symbol: Optional[str] = None


@dataclass(frozen=True)
class VirtualTable:
  """`<keyword>(<kind>(<gen>, ...))`, e.g. TABLE(GENERATOR(ROWCOUNT => 10))."""
  generators: List[Generator]
  keyword: str = "table"
  kind: str = "generator"


# ---------------------------------------------------------------------------
# Table references
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableRef:
  """
  A base table (`table`) or a derived table (`expr`), with optional
  qualification and decorations.
  """
  table: Optional[str] = None
  db: Optional[str] = None
  schema: Optional[str] = None
  server: Optional[str] = None
  expr: Optional[Any] = None
  alias: Optional[str] = None
  prefix: Optional[str] = None
  suffix: Optional[str] = None
  parentheses: bool = False
  tablesample: Optional[TableSample] = None
  temporal: Optional[TemporalTable] = None
  operator: Optional[Union[PivotOperator, Unrecognized]] = None
  hint: Optional[TableHint] = None


@dataclass(frozen=True)
class WithOffset:
  """`<keyword> [AS alias]`, e.g. WITH OFFSET AS pos or WITH ORDINALITY."""
  alias: Optional[str] = None
  keyword: str = "with offset"


@dataclass(frozen=True)
class Unnest:
  """UNNEST(<expr>) [AS alias] [WITH OFFSET [AS alias]], or another offset keyword."""
  expr: Optional[Expr] = None
  alias: Optional[Union[str, Expr]] = None
  with_offset: Optional[WithOffset] = None


@dataclass(frozen=True)
class Dual:
  """The DUAL placeholder table."""
  pass


TableReference = Union[TableRef, Unnest, Dual, Unrecognized]


@dataclass(frozen=True)
class Join:
  """
  A table reference joined to the chain.

  join is None for a comma join. on and using are both rendered when set.
  """
  table: TableReference
  join: Optional[str] = None
  on: Optional[Expr] = None
  using: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class NestedTables:
  """Wrapper around a sub-chain, e.g. FROM (a JOIN b ON ...)."""
  expr: Any
  parentheses: bool = True


TableChain = Union[List[Union[TableReference, Join]], NestedTables]


# ---------------------------------------------------------------------------
# Table options (DDL)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableOption:
  """
  Table-level storage option, e.g. ENGINE = InnoDB, PARTITION BY d,
  OPTIONS (description = 'x').

  value is an Expr, a bare Python value, a list of Expr (cluster by)
  or a list of TableOption (options).
  """
  keyword: str
  value: Any
  symbol: Optional[str] = None
