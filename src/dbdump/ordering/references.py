"""Extraction of dependency edges from catalog metadata and view SQL."""

import re
from typing import Iterable, List, Optional, Tuple

from sqlglot import exp, parse_one
from sqlglot.errors import ParseError, TokenError

from dbdump.global_models import ReferenceStrategy
from dbdump.ordering.models import DependencyEdge
from dbdump.utils.diagnostics import Diagnostics, quiet_diagnostics

# `schema`.`object` right after FROM or JOIN, optionally behind a parenthesis
FROM_PATTERN = re.compile(r"from\s+(?:\()?`([^`]+)`\.`([^`]+)`", re.IGNORECASE)
JOIN_PATTERN = re.compile(r"join\s+(?:\()?`([^`]+)`\.`([^`]+)`", re.IGNORECASE)

_VIEW_BODY_PATTERN = re.compile(
    r"\sAS\s+(\(?\s*(?:select|with)\b.*)$", re.IGNORECASE | re.DOTALL
)


def foreign_key_edges(pairs: Iterable[Tuple[str, str]]) -> List[DependencyEdge]:
    """Convert (dependent_table, referenced_table) pairs into edges."""
    return [
        DependencyEdge(dependent=dependent, referenced=referenced)
        for dependent, referenced in pairs
    ]


def pattern_references(ddl: str, schema: Optional[str] = None) -> List[str]:
    """
    Find object names referenced after FROM or JOIN in view SQL.

    Only schema-qualified, backtick-quoted references are seen, which is how
    MySQL prints view definitions. All FROM references are returned before
    all JOIN references, each group in text order. Duplicates are kept.

    Args:
        ddl: View definition text
        schema: If given, only references qualified with this schema count

    Returns:
        Referenced object names
    """
    names = []
    for pattern in (FROM_PATTERN, JOIN_PATTERN):
        for match in pattern.finditer(ddl):
            ref_schema, ref_name = match.group(1), match.group(2)
            if schema is not None and ref_schema.casefold() != schema.casefold():
                continue
            names.append(ref_name)
    return names


def parsed_references(ddl: str, schema: Optional[str] = None) -> List[str]:
    """
    Find schema-qualified tables referenced anywhere in a view's query.

    The query part of the CREATE VIEW statement is parsed with sqlglot's MySQL
    dialect, which also sees references in subqueries, CTEs and set
    operations.

    Args:
        ddl: View definition text
        schema: If given, only references qualified with this schema count

    Returns:
        Referenced object names in first-seen order, without duplicates

    Raises:
        ValueError: If the definition has no recognizable query
        ParseError: If the query cannot be parsed
    """
    match = _VIEW_BODY_PATTERN.search(ddl)
    if match is None:
        raise ValueError("No SELECT found in view definition")

    tree = parse_one(match.group(1), dialect="mysql")
    if tree is None or isinstance(tree, exp.Command):
        raise ValueError("View query could not be parsed into an expression tree")

    names: List[str] = []
    seen = set()
    for table in tree.find_all(exp.Table):
        if not table.db or not table.name:
            continue
        if schema is not None and table.db.casefold() != schema.casefold():
            continue
        key = table.name.casefold()
        if key not in seen:
            seen.add(key)
            names.append(table.name)
    return names


def view_reference_edges(
    view_name: str,
    ddl: str,
    schema: Optional[str] = None,
    strategy: ReferenceStrategy = ReferenceStrategy.PATTERN,
    diagnostics: Optional[Diagnostics] = None,
) -> List[DependencyEdge]:
    """
    Build the dependency edges of one view from its definition text.

    Args:
        view_name: Name of the view the definition belongs to
        ddl: View definition text
        schema: Schema the references must be qualified with
        strategy: Pattern matching or sqlglot parsing
        diagnostics: Channel for parse fallback messages

    Returns:
        Edges from the view to every object it references
    """
    diagnostics = diagnostics or quiet_diagnostics()

    if ReferenceStrategy(strategy) == ReferenceStrategy.PARSE:
        try:
            names = parsed_references(ddl, schema)
        except (ParseError, TokenError, ValueError) as e:
            diagnostics.warning(
                f"Could not parse view {view_name}, using pattern matching: {e}"
            )
            names = pattern_references(ddl, schema)
    else:
        names = pattern_references(ddl, schema)

    return [
        DependencyEdge(dependent=view_name, referenced=name)
        for name in names
        if name.casefold() != view_name.casefold()
    ]
