from __future__ import annotations

import logging

import pytest

from ardoq_adapter.config import (
    DEFAULT_REFERENCE_TYPES,
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    get_ardoq_config,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from ardoq_adapter.domain.model import Relationship, Workspace


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.delenv("MISSING_B", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_env_var_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLANK_VAR", "")
    monkeypatch.delenv("ABSENT_VAR", raising=False)

    assert optional_env_var("BLANK_VAR", "fallback") == "fallback"
    assert optional_env_var("ABSENT_VAR") is None


@pytest.mark.usefixtures("ardoq_env")
def test_get_ardoq_config_reads_environment() -> None:
    config = get_ardoq_config()

    assert config.api_url == "https://example.ardoq.test"
    assert config.workspace_id(Workspace.CODE_REPOSITORY) == "ws-repos"
    assert config.reference_type(Relationship.HOSTED_IN) == 4
    assert config.resilience.base_url == "https://example.ardoq.test"
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["Authorization"] == "Token token=secret-token"
    assert config.resilience.timeout_seconds == 30.0


def test_get_ardoq_config_requires_workspaces(
    monkeypatch: pytest.MonkeyPatch,
    ardoq_env: dict[str, str],
) -> None:
    assert "ARDOQ_SOFTWARE_FRAMEWORKS_WORKSPACE" in ardoq_env
    monkeypatch.delenv("ARDOQ_SOFTWARE_FRAMEWORKS_WORKSPACE")

    with pytest.raises(MissingConfigurationError, match="ARDOQ_SOFTWARE_FRAMEWORKS_WORKSPACE"):
        get_ardoq_config()


@pytest.mark.usefixtures("ardoq_env")
def test_get_ardoq_config_reads_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARDOQ_TIMEOUT_SECONDS", "5")

    assert get_ardoq_config().resilience.timeout_seconds == 5.0


@pytest.mark.usefixtures("ardoq_env")
def test_get_ardoq_config_rejects_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARDOQ_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ConfigurationError, match="ARDOQ_TIMEOUT_SECONDS"):
        get_ardoq_config()


@pytest.mark.usefixtures("ardoq_env")
def test_get_ardoq_config_accepts_reference_type_overrides() -> None:
    overrides = {**DEFAULT_REFERENCE_TYPES, Relationship.DEPENDS_ON: 7}

    config = get_ardoq_config(reference_types=overrides)

    assert config.reference_type(Relationship.DEPENDS_ON) == 7
    assert config.reference_type(Relationship.HOSTED_IN) == 4


@pytest.mark.usefixtures("ardoq_env")
def test_get_ardoq_config_rejects_incomplete_component_types() -> None:
    with pytest.raises(ConfigurationError, match="component type"):
        get_ardoq_config(component_types={Workspace.VCS_HOSTING: "t-host"})


def test_configure_logging_accepts_level_names(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    configure_logging(level="debug", force=True)

    assert captured["level"] == logging.DEBUG
    assert captured["force"] is True


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging(level="chatty")
