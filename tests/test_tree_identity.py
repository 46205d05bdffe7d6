"""Tests for hierarchical node identifiers."""

import pytest

from prioritywheel.core.analysis.tree_identity import NodeIdentity, escape_segment


class TestGenerateIds:
    def test_generated_ids(self):
        assert NodeIdentity.generate_category_id("work") == "category:work"
        assert NodeIdentity.generate_group_id("work", "reports") == "group:work/reports"
        assert NodeIdentity.generate_item_id("work", "reports", "q3") == "item:work/reports/q3"
        assert NodeIdentity.generate_placeholder_id("group:work/meetings") == (
            "placeholder:group:work/meetings"
        )

    @pytest.mark.parametrize(
        "node_id,expected",
        [("a/b", "a%2Fb"), ("50%", "50%25"), ("50%2F", "50%252F"), ("plain", "plain")],
    )
    def test_escape_segment(self, node_id, expected):
        assert escape_segment(node_id) == expected

    def test_separator_in_ids_does_not_collide(self):
        """Category 'a/b' + group 'c' and category 'a' + group 'b/c' get distinct keys."""
        first = NodeIdentity.generate_group_id("a/b", "c")
        second = NodeIdentity.generate_group_id("a", "b/c")

        assert first == "group:a%2Fb/c"
        assert second == "group:a/b%2Fc"
        assert first != second

    def test_escaped_separator_does_not_collide_with_literal_text(self):
        assert NodeIdentity.generate_category_id("a/b") != NodeIdentity.generate_category_id(
            "a%2Fb"
        )
