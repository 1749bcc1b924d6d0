"""Tests for CLI option helpers and credential validation."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import click
import pytest
import typer

from pveshell.auth import Credentials
from pveshell.cli.options import (
    CommandOptions,
    get_command_options,
    login_credentials,
    make_description,
    merge_global_options,
    validate_exist_directory,
    validate_exist_file,
    validate_range,
)
from pveshell.exceptions import ConfigurationError


def _param(name="--timeout"):
    param = MagicMock(spec=click.Option)
    param.opts = [name]
    param.name = name.lstrip("-")
    return param


def _context():
    return typer.Context(click.Command("test"))


class TestCredentialsValidate:
    def test_token_only(self):
        Credentials(host="pve1", api_token="root@pam!tok=1").validate()

    def test_username_and_password(self):
        Credentials(host="pve1", username="admin@pve", password="s3cret").validate()

    def test_username_or_token_required(self):
        with pytest.raises(ConfigurationError, match="Option '--username' or '--api-token' is required!"):
            Credentials(host="pve1").validate()

    def test_password_required_with_username(self):
        with pytest.raises(ConfigurationError, match="Option '--password' is required!"):
            Credentials(host="pve1", username="admin@pve").validate()

    def test_host_required(self):
        with pytest.raises(ConfigurationError):
            Credentials(host=" ", api_token="t").validate()

    def test_repr_hides_secrets(self):
        text = repr(Credentials(host="pve1", api_token="root@pam!tok=secret", username="u", password="pw"))
        assert "secret" not in text
        assert "pw'" not in text


class TestValidators:
    def test_range_accepts(self):
        assert validate_range(1, 10)(_param(), 5) == 5
        assert validate_range(1, 10)(_param(), None) is None

    def test_range_rejects(self):
        with pytest.raises(typer.BadParameter) as exc_info:
            validate_range(1, 10)(_param(), 11)
        assert exc_info.value.message == "Option --timeout with value '11' is not in range!"

    def test_exist_file(self, tmp_path):
        script = tmp_path / "hook.sh"
        script.write_text("#!/bin/sh\n")
        assert validate_exist_file(_param("--script"), script) == script

        with pytest.raises(typer.BadParameter, match="is not a valid file!"):
            validate_exist_file(_param("--script"), tmp_path / "missing.sh")
        with pytest.raises(typer.BadParameter):
            validate_exist_file(_param("--script"), tmp_path)

    def test_exist_directory(self, tmp_path):
        assert validate_exist_directory(_param("--dir"), tmp_path) == tmp_path
        with pytest.raises(typer.BadParameter, match="is not a valid directory!"):
            validate_exist_directory(_param("--dir"), tmp_path / "missing")


class TestCommandOptions:
    def test_log_level_from_debug(self):
        assert CommandOptions(debug=True).log_level_from_debug() == logging.DEBUG
        assert CommandOptions().log_level_from_debug() == logging.WARNING

    def test_flags(self):
        options = CommandOptions(debug=True, dry_run=True)
        assert options.debug_is_active()
        assert options.dry_run_is_active()

    def test_getters_without_credentials(self):
        options = CommandOptions()
        assert options.get_host() is None
        assert options.get_password() is None

    def test_login_credentials_recorded(self):
        ctx = _context()
        credentials = login_credentials(ctx, "pve1", None, "admin@pve", "file:/tmp/pw")

        options = get_command_options(ctx)
        assert options.credentials is credentials
        assert options.get_host() == "pve1"
        assert options.get_api_token() is None
        assert options.get_username() == "admin@pve"
        assert options.get_password() == "file:/tmp/pw"

    def test_login_credentials_invalid(self):
        with pytest.raises(typer.BadParameter) as exc_info:
            login_credentials(_context(), "pve1", None, "admin@pve", None)
        assert exc_info.value.message == "Option '--password' is required!"

    def test_merge_global_options_keeps_root_flags(self):
        ctx = _context()
        ctx.obj = CommandOptions(debug=False, dry_run=True)

        with patch("pveshell.cli.options.configure_logging") as mock_logging:
            options = merge_global_options(ctx, debug=False, dry_run=False)

        assert options.dry_run_is_active()
        assert not options.debug_is_active()
        mock_logging.assert_not_called()

    def test_merge_global_options_enables_debug(self):
        ctx = _context()

        with patch("pveshell.cli.options.configure_logging") as mock_logging:
            options = merge_global_options(ctx, debug=True, dry_run=True)

        assert options is get_command_options(ctx)
        assert options.debug_is_active()
        assert options.dry_run_is_active()
        mock_logging.assert_called_once_with(logging.DEBUG)


def test_make_description():
    text = make_description("pveshell", "Helpers")
    assert text.startswith("Helpers\n\n")
    assert "pveshell is a part of suite" in text
