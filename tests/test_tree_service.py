"""Tests for snapshot parsing and the tree loading service."""

import json
from datetime import date

import pytest

from prioritywheel.core.application.tree_service import TreeLoadError, TreeService
from prioritywheel.core.domain.models import MalformedTreeError
from prioritywheel.core.parsing.json_parser import (
    get_parsing_statistics,
    parse_due_date,
    parse_tree_from_dict,
    validate_tree_data,
)


class TestJsonParser:
    """Tests for the snapshot parser."""

    def test_parses_export_shape(self, sample_snapshot):
        tree = parse_tree_from_dict(sample_snapshot)

        work = tree.categories[0]
        assert work.title == "Work"
        assert work.color == "hsl(10, 50%, 40%)"
        assert work.high_priority
        assert [g.id for g in work.groups] == ["reports", "meetings"]
        assert work.groups[0].items[0].due_date == date(2024, 10, 1)
        assert work.groups[0].items[1].high_priority
        assert tree.categories[1].is_empty

    def test_accepts_alias_keys(self):
        tree = parse_tree_from_dict(
            {
                "categories": [
                    {
                        "id": "c",
                        "title": "C",
                        "groups": [
                            {"id": "g", "title": "G", "items": [{"id": 7, "title": "I", "due_date": "2025-01-02"}]}
                        ],
                    }
                ]
            }
        )

        item = tree.categories[0].groups[0].items[0]
        assert item.id == "7"
        assert item.due_date == date(2025, 1, 2)

    def test_missing_id_raises(self):
        with pytest.raises(MalformedTreeError):
            parse_tree_from_dict({"sections": [{"title": "No id"}]})

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-03-05", date(2024, 3, 5)),
            ("2024-03-05T23:59:00.000Z", date(2024, 3, 5)),
            (None, None),
            ("", None),
            ("next tuesday", None),
        ],
    )
    def test_parse_due_date(self, value, expected):
        assert parse_due_date(value) == expected

    def test_validate_tree_data(self):
        assert validate_tree_data([]) == ["Root element must be an object"]
        assert validate_tree_data({}) == ["Missing 'sections' list"]
        assert validate_tree_data({"sections": {}}) == ["'sections' must be a list"]

        issues = validate_tree_data(
            {"sections": [{"id": "a", "subsections": [{"title": "x", "tasks": [1]}]}]}
        )
        assert "Group sections[0].subsections[0] has no id" in issues
        assert "Item sections[0].subsections[0].tasks[0] must be an object" in issues

    def test_parsing_statistics(self, sample_snapshot):
        assert get_parsing_statistics(sample_snapshot) == {
            "categories": 2,
            "groups": 2,
            "items": 2,
        }


class TestTreeService:
    """Tests for loading tree files."""

    def test_load_tree_from_file(self, tree_file):
        service = TreeService()

        tree = service.load_tree_from_file(str(tree_file))

        assert tree.category_count == 2
        assert service.get_current_tree() is tree
        assert service.get_current_file_path() == str(tree_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(TreeLoadError, match="File not found"):
            TreeService().load_tree_from_file(str(tmp_path / "missing.json"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("", encoding="utf-8")

        with pytest.raises(TreeLoadError, match="File is empty"):
            TreeService().load_tree_from_file(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(TreeLoadError, match="JSON parsing error"):
            TreeService().load_tree_from_file(str(path))

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"sections": [{"id": "a", "title": "\xff\xfe"}]}')

        with pytest.raises(TreeLoadError, match="JSON parsing error"):
            TreeService().load_tree_from_file(str(path))

    def test_invalid_structure(self):
        with pytest.raises(TreeLoadError, match="Invalid tree data"):
            TreeService().load_tree_from_dict({"sections": [{"title": "No id"}]})

    def test_blank_identifier_is_wrapped(self):
        with pytest.raises(TreeLoadError, match="Tree parsing error"):
            TreeService().load_tree_from_dict({"sections": [{"id": "   "}]})

    def test_validate_file_before_load(self, tree_file, tmp_path):
        service = TreeService()

        result = service.validate_file_before_load(str(tree_file))
        assert result["is_valid"]
        assert result["parsing_stats"]["items"] == 2

        broken = tmp_path / "broken.json"
        broken.write_text(json.dumps({"sections": "nope"}), encoding="utf-8")
        result = service.validate_file_before_load(str(broken))
        assert result["is_json"]
        assert not result["is_valid"]

        assert service.validate_file_before_load(str(tmp_path / "none.json"))["issues"] == [
            "File does not exist"
        ]

    def test_tree_statistics(self, sample_tree):
        stats = TreeService().get_tree_statistics(sample_tree)

        assert stats == {
            "categories": 2,
            "groups": 4,
            "items": 4,
            "empty_categories": 0,
            "empty_groups": 1,
            "items_with_due_date": 1,
        }

    def test_statistics_without_tree(self):
        assert TreeService().get_tree_statistics() == {}
