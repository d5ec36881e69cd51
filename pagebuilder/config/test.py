"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_default_unit,
    get_drop_position,
    get_environment,
    get_environment_info,
    get_log_level,
    get_validate_snapshots,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("PAGEBUILDER_DEFAULT_UNIT", raising=False)
        result = get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT)
        assert result == "px"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("PAGEBUILDER_DEFAULT_UNIT", "em")
        result = get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT, override="rem")
        assert result == "rem"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("PAGEBUILDER_DEFAULT_UNIT", "rem")
        assert get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT) == "rem"

    @pytest.mark.unit
    def test_choice_matching_is_case_insensitive(self, monkeypatch):
        """Choices are normalized to their canonical spelling."""
        monkeypatch.setenv("PAGEBUILDER_LOG_LEVEL", "debug")
        assert get_environment(EnvVar.PAGEBUILDER_LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_invalid_choice_returns_default(self, monkeypatch):
        """Values outside the allowed choices fall back to the default."""
        monkeypatch.setenv("PAGEBUILDER_DROP_POSITION", "sideways")
        assert get_environment(EnvVar.PAGEBUILDER_DROP_POSITION) == "after"

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("PAGEBUILDER_VALIDATE_SNAPSHOTS", value)
            assert get_environment(EnvVar.PAGEBUILDER_VALIDATE_SNAPSHOTS) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("PAGEBUILDER_VALIDATE_SNAPSHOTS", value)
            assert get_environment(EnvVar.PAGEBUILDER_VALIDATE_SNAPSHOTS) is False

    @pytest.mark.unit
    def test_unparseable_bool_returns_default(self, monkeypatch):
        monkeypatch.setenv("PAGEBUILDER_VALIDATE_SNAPSHOTS", "maybe")
        assert get_environment(EnvVar.PAGEBUILDER_VALIDATE_SNAPSHOTS) is False


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.PAGEBUILDER_LOG_LEVEL)
        assert isinstance(info, EnvConfig)
        assert info.name == "PAGEBUILDER_LOG_LEVEL"
        assert info.default == "INFO"
        assert info.var_type is str
        assert info.category == "logging"


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        editor_vars = list_environment_variables("editor")
        assert EnvVar.PAGEBUILDER_DROP_POSITION in editor_vars
        assert EnvVar.PAGEBUILDER_LOG_LEVEL not in editor_vars


class TestConvenience:
    """Tests for convenience accessors."""

    @pytest.mark.unit
    def test_default_unit(self, monkeypatch):
        monkeypatch.delenv("PAGEBUILDER_DEFAULT_UNIT", raising=False)
        assert get_default_unit() == "px"
        assert get_default_unit("rem") == "rem"

    @pytest.mark.unit
    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("PAGEBUILDER_LOG_LEVEL", "warning")
        assert get_log_level() == "WARNING"

    @pytest.mark.unit
    def test_drop_position(self, monkeypatch):
        monkeypatch.delenv("PAGEBUILDER_DROP_POSITION", raising=False)
        assert get_drop_position() == "after"
        monkeypatch.setenv("PAGEBUILDER_DROP_POSITION", "Before")
        assert get_drop_position() == "before"

    @pytest.mark.unit
    def test_validate_snapshots(self, monkeypatch):
        monkeypatch.delenv("PAGEBUILDER_VALIDATE_SNAPSHOTS", raising=False)
        assert get_validate_snapshots() is False
        monkeypatch.setenv("PAGEBUILDER_VALIDATE_SNAPSHOTS", "yes")
        assert get_validate_snapshots() is True
