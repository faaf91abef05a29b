"""Tests for CLI entry point.

Tests the command-line interface and argument parsing.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from s3_tester.cli import build_parser, main, parse_args, run_remove, run_upload

GLOBAL_ARGS = ["-e", "minio.local", "-p", "9000", "-a", "key", "-s", "secret", "-b", "bucket"]


class TestParseArgs:
    """Tests for argument parsing."""

    def test_upload_command(self):
        args = parse_args(["upload", "a.bin"])
        assert args.func is run_upload
        assert args.args == ["a.bin"]

    def test_upload_alias(self):
        args = parse_args(["u", "a.bin"])
        assert args.func is run_upload

    def test_remove_command(self):
        args = parse_args(["remove", "XYZ"])
        assert args.func is run_remove
        assert args.args == ["XYZ"]

    def test_remove_alias(self):
        args = parse_args(["r", "XYZ"])
        assert args.func is run_remove

    def test_positional_count_checked_by_action(self):
        """Parser accepts any number of positionals; the action validates."""
        assert parse_args(["upload"]).args == []
        assert parse_args(["upload", "a", "b"]).args == ["a", "b"]

    def test_global_flags_before_command(self):
        args = parse_args(GLOBAL_ARGS + ["--insecure", "-vv", "upload", "a.bin"])

        assert args.endpoint == "minio.local"
        assert args.port == 9000
        assert args.access_key == "key"
        assert args.secret_key == "secret"
        assert args.bucket == "bucket"
        assert args.insecure is True
        assert args.very_verbose is True

    def test_env_defaults(self, monkeypatch):
        monkeypatch.setenv("S3_ENDPOINT", "env-host")
        monkeypatch.setenv("S3_PORT", "9000")

        args = parse_args(["--port", "9001", "upload", "a.bin"])

        assert args.endpoint == "env-host"
        assert args.port == 9001

    def test_missing_command_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])

        assert exc_info.value.code == 2
        assert "usage: s3-tester" in capsys.readouterr().err

    def test_unknown_command_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["download", "x"])

        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "s3-tester" in capsys.readouterr().out

    def test_help_lists_env_vars(self):
        help_text = build_parser().format_help()
        assert "S3_ENDPOINT" in help_text
        assert "--very-verbose" in help_text


class TestMain:
    """Tests for main function."""

    @patch("s3_tester.cli.upload")
    def test_upload_returns_0(self, mock_upload: MagicMock, capsys):
        assert main(GLOBAL_ARGS + ["upload", "a.bin"]) == 0

        descriptor, args = mock_upload.call_args.args
        assert descriptor.endpoint == "minio.local"
        assert args == ["a.bin"]

    @patch("s3_tester.cli.remove")
    def test_remove_returns_0(self, mock_remove: MagicMock, capsys):
        assert main(GLOBAL_ARGS + ["remove", "XYZ"]) == 0
        mock_remove.assert_called_once()

    @patch("s3_tester.cli.upload")
    def test_logger_initialized_first(self, mock_upload: MagicMock, capsys):
        mock_upload.side_effect = lambda *a: print("ACTION")

        main(["-v", "upload", "a.bin"])

        out = capsys.readouterr().out
        assert out.index("Logger initialized on level 'debug'") < out.index("ACTION")

    def test_upload_without_path_is_fatal(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(GLOBAL_ARGS + ["upload"])

        assert exc_info.value.code == 1
        assert "FTL Please specify a file to upload" in capsys.readouterr().out

    def test_missing_endpoint_is_fatal(self, tmp_path: Path, capsys):
        data = tmp_path / "a.bin"
        data.write_bytes(b"data")

        with pytest.raises(SystemExit) as exc_info:
            main(["upload", str(data)])

        assert exc_info.value.code == 1
        assert "Please specify an S3 endpoint" in capsys.readouterr().out

    def test_missing_file_is_fatal_with_cause(self, tmp_path: Path, capsys):
        missing = tmp_path / "missing"

        with pytest.raises(SystemExit) as exc_info:
            main(GLOBAL_ARGS + ["upload", str(missing)])

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert f"File '{missing}' does not exist" in out
        assert "No such file or directory" in out

    def test_invalid_env_value_is_fatal(self, monkeypatch, capsys):
        monkeypatch.setenv("S3_PORT", "not-a-port")

        with pytest.raises(SystemExit) as exc_info:
            main(["upload", "a.bin"])

        assert exc_info.value.code == 1
        assert "S3_PORT" in capsys.readouterr().out

    @patch("s3_tester.actions.build_s3_client")
    def test_remove_failure_is_fatal(self, mock_build: MagicMock, capsys):
        from botocore.exceptions import ClientError

        mock_build.return_value.delete_object.side_effect = ClientError(
            {"Error": {"Code": "404", "Message": "Not Found"}}, "DeleteObject"
        )

        with pytest.raises(SystemExit) as exc_info:
            main(GLOBAL_ARGS + ["remove", "XYZ"])

        assert exc_info.value.code == 1
        assert "Failed to remove object 'XYZ'" in capsys.readouterr().out
