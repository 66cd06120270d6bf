"""Tests for dependency edge extraction."""

import pytest
from rich.console import Console

from dbdump.global_models import LogLevel, ReferenceStrategy
from dbdump.ordering.references import (
    foreign_key_edges,
    parsed_references,
    pattern_references,
    view_reference_edges,
)
from dbdump.utils.diagnostics import Diagnostics

JOIN_VIEW = (
    "CREATE ALGORITHM=UNDEFINED DEFINER=`root`@`%` SQL SECURITY DEFINER "
    "VIEW `big_orders` AS select `o`.`id` AS `id` from `shop`.`orders` `o` "
    "join `shop`.`customers` `c` on `o`.`customer_id` = `c`.`id`"
)


class TestForeignKeyEdges:
    """Tests for foreign_key_edges function."""

    def test_pairs_become_edges(self):
        result = foreign_key_edges([("orders", "customers"), ("lines", "orders")])
        assert [(e.dependent, e.referenced) for e in result] == [
            ("orders", "customers"),
            ("lines", "orders"),
        ]

    def test_empty(self):
        assert foreign_key_edges([]) == []


class TestPatternReferences:
    """Tests for pattern_references function."""

    def test_from_and_join(self):
        assert pattern_references(JOIN_VIEW) == ["orders", "customers"]

    def test_from_matches_before_join_matches(self):
        ddl = (
            "select * from `s`.`a` join `s`.`b` on 1 "
            "union select * from `s`.`c` join `s`.`d` on 1"
        )
        assert pattern_references(ddl) == ["a", "c", "b", "d"]

    def test_parenthesized_reference(self):
        assert pattern_references("select * from (`s`.`a` join `s`.`b`)") == [
            "a",
            "b",
        ]

    def test_case_insensitive_keywords(self):
        assert pattern_references("SELECT 1 FROM `s`.`a` JOIN `s`.`b`") == ["a", "b"]

    def test_unqualified_references_are_not_seen(self):
        assert pattern_references("select * from orders join `customers`") == []

    def test_schema_filter(self):
        ddl = "select * from `shop`.`a` join `other`.`b` on 1"
        assert pattern_references(ddl, schema="shop") == ["a"]
        assert pattern_references(ddl, schema="SHOP") == ["a"]

    def test_duplicates_kept(self):
        ddl = "select * from `s`.`a` join `s`.`a` on 1"
        assert pattern_references(ddl) == ["a", "a"]


class TestParsedReferences:
    """Tests for parsed_references function."""

    def test_join_view(self):
        assert sorted(parsed_references(JOIN_VIEW, schema="shop")) == [
            "customers",
            "orders",
        ]

    def test_subquery_reference(self):
        ddl = (
            "CREATE VIEW `v` AS select `x`.`id` from "
            "(select `id` from `shop`.`orders`) `x`"
        )
        assert parsed_references(ddl, schema="shop") == ["orders"]

    def test_duplicates_removed(self):
        ddl = (
            "CREATE VIEW `v` AS select 1 from `shop`.`a` "
            "join `shop`.`a` `a2` on 1 = 1"
        )
        assert parsed_references(ddl) == ["a"]

    def test_missing_query_raises(self):
        with pytest.raises(ValueError):
            parsed_references("CREATE TABLE `t` (`id` int)")


class TestViewReferenceEdges:
    """Tests for view_reference_edges function."""

    def test_pattern_strategy(self):
        result = view_reference_edges("big_orders", JOIN_VIEW, schema="shop")
        assert [(e.dependent, e.referenced) for e in result] == [
            ("big_orders", "orders"),
            ("big_orders", "customers"),
        ]

    def test_self_reference_excluded(self):
        ddl = "CREATE VIEW `v` AS select 1 from `shop`.`v`"
        assert view_reference_edges("v", ddl, schema="shop") == []

    def test_parse_strategy(self):
        result = view_reference_edges(
            "big_orders", JOIN_VIEW, schema="shop", strategy=ReferenceStrategy.PARSE
        )
        assert sorted(e.referenced for e in result) == ["customers", "orders"]

    def test_parse_failure_falls_back_to_pattern(self):
        console = Console(record=True, width=200)
        diagnostics = Diagnostics(LogLevel.WARNING, console)
        ddl = "CREATE VIEW `v` AS (((select * from `shop`.`a`"

        result = view_reference_edges(
            "v",
            ddl,
            schema="shop",
            strategy=ReferenceStrategy.PARSE,
            diagnostics=diagnostics,
        )

        assert [e.referenced for e in result] == ["a"]
        assert "using pattern matching" in console.export_text()
