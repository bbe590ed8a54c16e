"""Unit tests for the command-line entry point (napi_scaffold.cli)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from napi_scaffold.cli import _resolve_targets, build_parser, main, run_new
from napi_scaffold.targets import AVAILABLE_TARGETS, DEFAULT_TARGETS


pytestmark = pytest.mark.unit


def _parse(*argv: str):
    return build_parser().parse_args(["new", *argv])


class TestParser:
    def test_defaults(self):
        args = _parse("my-addon")
        assert args.command == "new"
        assert args.path == "my-addon"
        assert args.name is None
        assert args.targets is None
        assert args.type_def is False
        assert args.enable_github_actions is False
        assert args.on_unsupported is None
        assert args.debug is False
        assert args.config is None

    def test_repeated_targets(self):
        args = _parse("p", "-t", "x86_64-apple-darwin", "--targets", "i686-pc-windows-msvc")
        assert args.targets == ["x86_64-apple-darwin", "i686-pc-windows-msvc"]

    def test_requires_subcommand(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_rejects_unknown_policy(self):
        with pytest.raises(SystemExit):
            _parse("p", "--on-unsupported", "ignore")


class TestResolveTargets:
    def test_explicit_targets_win(self):
        args = _parse("p", "-t", "x86_64-apple-darwin", "--enable-all-targets")
        assert _resolve_targets(args) == ["x86_64-apple-darwin"]

    def test_default_targets(self):
        assert _resolve_targets(_parse("p", "--enable-default-targets")) == list(DEFAULT_TARGETS)

    def test_all_targets(self):
        assert _resolve_targets(_parse("p", "--enable-all-targets")) == list(AVAILABLE_TARGETS)

    def test_interactive_fallback(self):
        with patch("napi_scaffold.cli.select_targets", return_value=["x86_64-apple-darwin"]) as sel:
            assert _resolve_targets(_parse("p")) == ["x86_64-apple-darwin"]
        sel.assert_called_once_with(AVAILABLE_TARGETS, DEFAULT_TARGETS)


class TestRunNew:
    def test_success(self, tmp_path: Path):
        dest = tmp_path / "addon"
        code = run_new(_parse(str(dest), "-n", "addon", "--enable-default-targets"))
        assert code == 0
        assert (dest / "Cargo.toml").is_file()

    def test_prompts_for_name_with_path_default(self, tmp_path: Path):
        dest = tmp_path / "addon"
        with patch("napi_scaffold.cli.ask_package_name", return_value="prompted") as ask:
            code = run_new(_parse(str(dest), "--enable-default-targets"))
        assert code == 0
        ask.assert_called_once_with(str(dest))
        assert '"name": "prompted"' in (dest / "package.json").read_text(encoding="utf-8")

    def test_error_policy_exit_code(self, tmp_path: Path):
        dest = tmp_path / "addon"
        with patch("napi_scaffold.cli.print_error") as err:
            code = run_new(
                _parse(str(dest), "-n", "addon", "--enable-all-targets", "--on-unsupported", "error")
            )
        assert code == 1
        assert "aarch64" in err.call_args.args[0]

    def test_policy_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("NAPI_SCAFFOLD_ON_UNSUPPORTED", "error")
        code = run_new(_parse(str(tmp_path / "a"), "-n", "a", "-t", "aarch64-apple-darwin"))
        assert code == 1

    def test_invalid_policy_from_env_is_reported(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("NAPI_SCAFFOLD_ON_UNSUPPORTED", "ignore")
        dest = tmp_path / "a"
        with patch("napi_scaffold.cli.print_error") as err:
            code = run_new(_parse(str(dest), "-n", "a", "--enable-default-targets"))
        assert code == 1
        assert "invalid configuration" in err.call_args.args[0]
        assert not dest.exists()

    def test_config_file(self, tmp_path: Path):
        config_file = tmp_path / "napi.json"
        config_file.write_text('{"license": "ISC"}', encoding="utf-8")
        dest = tmp_path / "addon"
        code = run_new(
            _parse(str(dest), "-n", "addon", "--enable-default-targets", "-c", str(config_file))
        )
        assert code == 0
        assert 'license = "ISC"' in (dest / "Cargo.toml").read_text(encoding="utf-8")

    def test_flags_override_config_file(self, tmp_path: Path):
        config_file = tmp_path / "napi.json"
        config_file.write_text('{"on_unsupported": "skip"}', encoding="utf-8")
        code = run_new(
            _parse(
                str(tmp_path / "a"), "-n", "a", "-t", "aarch64-apple-darwin",
                "--config", str(config_file), "--on-unsupported", "error",
            )
        )
        assert code == 1

    def test_missing_config_file(self, tmp_path: Path):
        with patch("napi_scaffold.cli.print_error") as err:
            code = run_new(
                _parse(
                    str(tmp_path / "a"), "-n", "a", "--enable-default-targets",
                    "--config", str(tmp_path / "missing.json"),
                )
            )
        assert code == 1
        assert "invalid configuration" in err.call_args.args[0]

    def test_markup_like_triple_is_skipped(self, tmp_path: Path):
        dest = tmp_path / "addon"
        code = run_new(
            _parse(str(dest), "-n", "addon", "-t", "[/x]-a", "-t", "x86_64-apple-darwin")
        )
        assert code == 0
        assert [p.name for p in (dest / "npm").iterdir()] == ["darwin-x64"]

    def test_shared_platform_abi_under_error_policy(self, tmp_path: Path):
        dest = tmp_path / "addon"
        with patch("napi_scaffold.cli.print_error") as err:
            code = run_new(
                _parse(
                    str(dest), "-n", "addon",
                    "-t", "i686-pc-windows-msvc", "-t", "i686-uwp-windows-msvc",
                    "--on-unsupported", "error",
                )
            )
        assert code == 1
        assert "win32-ia32-msvc" in err.call_args.args[0]
        assert not dest.exists()

    def test_debug_flag(self, tmp_path: Path):
        dest = tmp_path / "addon"
        with patch("napi_scaffold.scaffolder.templates.console"):
            code = run_new(_parse(str(dest), "-n", "addon", "--enable-default-targets", "--debug"))
        assert code == 0
        assert not (dest / "Cargo.toml").exists()

    def test_napi_debug_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("NAPI_DEBUG", "1")
        dest = tmp_path / "addon"
        with patch("napi_scaffold.scaffolder.templates.console"):
            run_new(_parse(str(dest), "-n", "addon", "--enable-default-targets"))
        assert not (dest / "Cargo.toml").exists()

    def test_directory_failure(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        code = run_new(_parse(str(blocker / "p"), "-n", "p", "--enable-default-targets"))
        assert code == 1


class TestMain:
    def test_exit_code(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["new", str(tmp_path / "p"), "-n", "p", "--enable-default-targets"])
        assert exc_info.value.code == 0
