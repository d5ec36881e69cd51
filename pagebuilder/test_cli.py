"""Tests for the pagebuilder CLI commands."""

import json

import pytest

from pagebuilder.__main__ import (
    cmd_env,
    handle_compile_command,
    handle_create_command,
    handle_schema_command,
    handle_validate_command,
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    monkeypatch.delenv("PAGEBUILDER_DEFAULT_UNIT", raising=False)


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestCompileCommand:
    """Tests for `compile`."""

    @pytest.mark.unit
    def test_prints_classes(self, tmp_path, capsys):
        path = _write(
            tmp_path,
            "styles.json",
            {"md": {"display": "flex"}, "default": {"width": "auto"}},
        )
        assert handle_compile_command([path]) == 0
        assert capsys.readouterr().out.strip() == "w-auto md:flex"

    @pytest.mark.unit
    def test_unit_option(self, tmp_path, capsys):
        path = _write(tmp_path, "styles.json", {"default": {"paddingTop": 1}})
        assert handle_compile_command([path, "--unit", "rem"]) == 0
        assert capsys.readouterr().out.strip() == "pt-[1rem]"

    @pytest.mark.unit
    def test_unknown_breakpoint_fails(self, tmp_path):
        path = _write(tmp_path, "styles.json", {"xxl": {"width": 10}})
        assert handle_compile_command([path]) == 1

    @pytest.mark.unit
    def test_missing_file_fails(self, tmp_path):
        assert handle_compile_command([str(tmp_path / "absent.json")]) == 1


class TestValidateCommand:
    """Tests for `validate`."""

    @pytest.mark.unit
    def test_valid_tree(self, tmp_path):
        path = _write(
            tmp_path,
            "page.json",
            {
                "id": "root",
                "type": "Frame",
                "pageId": "p",
                "elements": [
                    {"id": "t", "type": "Text", "pageId": "p", "parentId": "root"}
                ],
            },
        )
        assert handle_validate_command([path]) == 0

    @pytest.mark.unit
    def test_reports_errors(self, tmp_path, capsys):
        path = _write(
            tmp_path,
            "page.json",
            [
                {"id": "a", "type": "Text", "pageId": "p"},
                {"id": "a", "type": "Text", "pageId": "p"},
            ],
        )
        assert handle_validate_command([path]) == 1
        assert "[duplicate_id] a" in capsys.readouterr().out

    @pytest.mark.unit
    def test_malformed_tree(self, tmp_path):
        path = _write(tmp_path, "page.json", {"id": "a", "type": "Nope", "pageId": "p"})
        assert handle_validate_command([path]) == 1


class TestCreateCommand:
    """Tests for `create`."""

    @pytest.mark.unit
    def test_create_type(self, capsys):
        assert handle_create_command(["Button", "--page-id", "home"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["type"] == "Button"
        assert data["pageId"] == "home"
        assert data["content"] == "Click me"

    @pytest.mark.unit
    def test_create_from_template(self, tmp_path, capsys):
        path = _write(
            tmp_path,
            "template.json",
            {"type": "Frame", "elements": [{"type": "Text", "content": "Hi"}]},
        )
        assert handle_create_command(["--template", path, "--page-id", "home"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["elements"][0]["parentId"] == data["id"]

    @pytest.mark.unit
    def test_unknown_type_fails(self):
        assert handle_create_command(["Marquee", "--page-id", "home"]) == 1


class TestSchemaAndEnv:
    """Tests for `schema` and `env`."""

    @pytest.mark.unit
    def test_schema_types(self, capsys):
        assert handle_schema_command(["--types"]) == 0
        schema = json.loads(capsys.readouterr().out)
        assert schema["Frame"]["is_container"] is True

    @pytest.mark.unit
    def test_env_lists_variables(self, capsys):
        assert cmd_env([]) == 0
        assert "PAGEBUILDER_DROP_POSITION" in capsys.readouterr().out

    @pytest.mark.unit
    def test_env_unknown_category(self):
        assert cmd_env(["nope"]) == 1
