"""Tests for the roadmap validate command."""

import json

import pytest

from roadmap.cli import main
from roadmap.commands.validate import detect_kind
from roadmap.lib.constants import EXIT_ERROR, EXIT_INVALID, EXIT_OK


def _write(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload))
    return path


def _run(tmp_path, *args):
    return main(["validate", *args, "--config", str(tmp_path)])


class TestDetectKind:
    """Test detect_kind function."""

    def test_item(self, minimal_item_dict):
        assert detect_kind(minimal_item_dict) == "item"

    def test_hierarchy(self, full_hierarchy_dict):
        assert detect_kind(full_hierarchy_dict) == "hierarchy"

    def test_sort(self):
        assert detect_kind({"column": "name", "direction": "asc"}) == "sort"

    def test_flat_response(self, minimal_item_dict):
        assert detect_kind({"data": [minimal_item_dict], "total": 1}) == "response"

    def test_hierarchical_response(self, full_hierarchy_dict):
        assert detect_kind({"data": [full_hierarchy_dict], "total": 1}) == "okr-response"

    def test_non_dict(self):
        assert detect_kind([1, 2]) == "item"


class TestValidateCommand:
    """Test `roadmap validate`."""

    def test_valid_item(self, tmp_path, capsys, minimal_item_dict):
        path = _write(tmp_path, "item.json", minimal_item_dict)
        assert _run(tmp_path, str(path)) == EXIT_OK
        assert "OK:" in capsys.readouterr().out

    def test_valid_hierarchy_summary(self, tmp_path, capsys, full_hierarchy_dict):
        path = _write(tmp_path, "tree.json", full_hierarchy_dict)
        assert _run(tmp_path, str(path)) == EXIT_OK
        assert "5 nodes, 5 levels" in capsys.readouterr().out

    def test_last_page_response(self, tmp_path, capsys, minimal_item_dict):
        payload = {
            "data": [minimal_item_dict],
            "total": 47,
            "page": 5,
            "limit": 10,
            "totalPages": 5,
            "hasMore": False,
        }
        path = _write(tmp_path, "page.json", payload)
        assert _run(tmp_path, str(path)) == EXIT_OK
        assert "showing 1 of 47 items" in capsys.readouterr().out

    def test_empty_response(self, tmp_path):
        path = _write(tmp_path, "empty.json", {"data": [], "total": 0})
        assert _run(tmp_path, str(path)) == EXIT_OK

    def test_sort_config(self, tmp_path, capsys):
        path = _write(tmp_path, "sort.json", {"column": "createdAt", "direction": "desc"})
        assert _run(tmp_path, str(path)) == EXIT_OK
        assert "createdAt desc" in capsys.readouterr().out

    def test_schema_failure(self, tmp_path, capsys, minimal_item_dict):
        minimal_item_dict["health"] = "green"
        path = _write(tmp_path, "item.json", minimal_item_dict)
        assert _run(tmp_path, str(path)) == EXIT_INVALID
        err = capsys.readouterr().err
        assert "INVALID" in err
        assert "Schema: execution_item" in err

    def test_pagination_failure(self, tmp_path, capsys):
        path = _write(tmp_path, "page.json", {"data": [], "total": 47, "page": 1, "limit": 10, "totalPages": 4})
        assert _run(tmp_path, str(path)) == EXIT_INVALID
        assert "totalPages" in capsys.readouterr().err

    def test_explicit_kind(self, tmp_path, full_hierarchy_dict):
        path = _write(tmp_path, "tree.json", full_hierarchy_dict)
        assert _run(tmp_path, str(path), "--kind", "item") == EXIT_OK

    def test_level_mismatch_warns(self, tmp_path, capsys, full_hierarchy_dict):
        full_hierarchy_dict["type"] = "Feature"
        path = _write(tmp_path, "tree.json", full_hierarchy_dict)
        assert _run(tmp_path, str(path)) == EXIT_OK
        assert "WARN:" in capsys.readouterr().out

    def test_level_mismatch_strict(self, tmp_path, full_hierarchy_dict):
        full_hierarchy_dict["type"] = "Feature"
        path = _write(tmp_path, "tree.json", full_hierarchy_dict)
        assert _run(tmp_path, str(path), "--strict") == EXIT_INVALID

    def test_strict_types_from_config(self, tmp_path, minimal_item_dict):
        (tmp_path / "roadmap.yaml").write_text("strict_types: true\n")
        minimal_item_dict["type"] = "Epic"
        path = _write(tmp_path, "item.json", minimal_item_dict)
        assert _run(tmp_path, str(path)) == EXIT_INVALID

    def test_yaml_payload(self, tmp_path, capsys):
        path = tmp_path / "sort.yaml"
        path.write_text("column: team\ndirection: desc\n")
        assert _run(tmp_path, str(path)) == EXIT_OK

    def test_verbose_after_subcommand(self, tmp_path, minimal_item_dict):
        path = _write(tmp_path, "item.json", minimal_item_dict)
        assert main(["validate", str(path), "--verbose", "--config", str(tmp_path)]) == EXIT_OK

    def test_verbose_short_flag(self, tmp_path, minimal_item_dict):
        path = _write(tmp_path, "item.json", minimal_item_dict)
        assert _run(tmp_path, str(path), "-v") == EXIT_OK

    def test_missing_file(self, tmp_path, capsys):
        assert _run(tmp_path, str(tmp_path / "missing.json")) == EXIT_ERROR
        assert "ERROR" in capsys.readouterr().err

    def test_unknown_kind_rejected_by_argparse(self, tmp_path):
        with pytest.raises(SystemExit):
            _run(tmp_path, "x.json", "--kind", "bogus")
