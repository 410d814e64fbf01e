"""Tests for CLI context dependency injection."""

from unittest.mock import Mock, patch

import pytest
import typer

from src.cli.context import CLIContext, build_cli_context, get_cli_context


def make_context(**overrides) -> CLIContext:
    fields = {
        "console": Mock(),
        "runner": Mock(),
        "github": Mock(),
        "constants": Mock(),
    }
    fields.update(overrides)
    return CLIContext(**fields)


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = make_context()

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


def test_build_cli_context_creates_all_dependencies():
    """Test that build_cli_context creates all required dependencies."""
    ctx = build_cli_context({"release": "web"})

    assert ctx.console is not None
    assert ctx.runner is not None
    assert ctx.github.deployment is None
    assert ctx.constants is not None
    assert ctx.parameters == {"release": "web"}


def test_build_cli_context_reads_github_environment(tmp_path, monkeypatch):
    """Test that the deployment event is loaded from GITHUB_EVENT_PATH."""
    event = tmp_path / "event.json"
    event.write_text('{"deployment": {"id": 1, "payload": {"track": "canary"}}}')
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event))

    ctx = build_cli_context()

    assert ctx.github.deployment == {"id": 1, "payload": {"track": "canary"}}


def test_get_cli_context_from_typer_context():
    """Test that get_cli_context retrieves from Typer context."""
    mock_ctx_obj = make_context()

    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = mock_ctx_obj

    result = get_cli_context(typer_ctx)

    assert result is mock_ctx_obj


def test_get_cli_context_with_none_falls_back():
    """Test that get_cli_context creates new context when ctx is None."""
    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(None)

        mock_build.assert_called_once()


def test_get_cli_context_with_invalid_obj_falls_back():
    """Test that get_cli_context falls back when ctx.obj is not CLIContext."""
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = "invalid"  # Not a CLIContext

    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(typer_ctx)

        mock_build.assert_called_once()


@patch("click.get_current_context")
def test_get_cli_context_uses_click_context_as_fallback(mock_get_click_ctx):
    """Test that get_cli_context uses click context when typer ctx is None."""
    mock_ctx_obj = make_context()

    mock_click_context = Mock()
    mock_click_context.obj = mock_ctx_obj
    mock_get_click_ctx.return_value = mock_click_context

    result = get_cli_context(None)

    assert result is mock_ctx_obj
    mock_get_click_ctx.assert_called_once_with(silent=True)
