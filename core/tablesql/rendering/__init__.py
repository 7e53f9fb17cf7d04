"""
Rendering package for table references.

This package turns parsed table references (base tables, derived tables,
joins, UNNEST, PIVOT, hints, temporal clauses, ...) into dialect-specific
single-line SQL strings.
"""
