"""
Tests for the build, clean-build and build-release commands.

External tools are never run: subprocess.run is patched and every call is
recorded so tests can check exactly what would have been executed.
"""

from unittest.mock import Mock, patch

import pytest

from targetkit.cli.commands import build
from targetkit.cli.parser import CLI
from targetkit.core.exceptions import BuildLockTimeout


@pytest.fixture
def mock_run():
    """Patch subprocess.run so every external command succeeds."""
    with patch("subprocess.run") as mock:
        mock.return_value = Mock(returncode=0, stdout="", stderr="")
        yield mock


def commands(mock_run):
    return [c.args[0] for c in mock_run.call_args_list]


class TestBuildCommand:
    """Test the build command."""

    def test_build_selected_targets(self, mock_run, cli_args, monkeypatch):
        monkeypatch.delenv("BUILD_MODE", raising=False)

        result = build.run(cli_args(targets=["rpi", "linux"]))

        assert result == 0
        assert commands(mock_run) == [
            ["rustup", "target", "add", "armv7-unknown-linux-gnueabihf"],
            ["cargo", "build", "--target", "armv7-unknown-linux-gnueabihf"],
            ["rustup", "target", "add", "x86_64-unknown-linux-gnu"],
            ["cargo", "build", "--target", "x86_64-unknown-linux-gnu"],
        ]

    def test_build_release_mode_from_environment(self, mock_run, cli_args, monkeypatch):
        monkeypatch.setenv("BUILD_MODE", "RELEASE")

        build.run(cli_args(targets=["mac"]))

        assert commands(mock_run)[-1] == [
            "cargo",
            "build",
            "--target",
            "x86_64-apple-darwin",
            "--release",
        ]

    def test_build_without_targets(self, mock_run, cli_args, capsys, monkeypatch):
        """Test an empty selection builds once for the local machine."""
        monkeypatch.delenv("BUILD_MODE", raising=False)

        result = build.run(cli_args(targets=[]))

        assert result == 0
        assert commands(mock_run) == [["cargo", "build"]]
        assert "No target specified" in capsys.readouterr().out

    def test_no_valid_targets(self, mock_run, cli_args, capsys):
        """Test only-unknown aliases fail without running anything."""
        result = build.run(cli_args(targets=["bsd"]))

        assert result == 1
        mock_run.assert_not_called()
        assert "No valid targets specified!" in capsys.readouterr().out

    def test_compile_failure_exit_code(self, mock_run, cli_args):
        mock_run.side_effect = [
            Mock(returncode=0, stdout="", stderr=""),
            Mock(returncode=101),
        ]

        result = build.run(cli_args(targets=["linux", "mac"]))

        assert result == 1
        assert mock_run.call_count == 2

    def test_provision_failure_exit_code(self, mock_run, cli_args):
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="error: offline")

        result = build.run(cli_args(targets=["linux", "mac"]))

        assert result == 1
        assert commands(mock_run) == [
            ["rustup", "target", "add", "x86_64-unknown-linux-gnu"]
        ]

    def test_targets_from_config(self, mock_run, cli_args, tmp_path):
        (tmp_path / "targetkit.yaml").write_text(
            """targets:
  riscv: riscv64gc-unknown-linux-gnu
tools:
  compiler: cross
"""
        )

        result = build.run(cli_args(targets=["riscv", "linux"]))

        assert result == 0
        assert commands(mock_run)[-1][:4] == [
            "cross",
            "build",
            "--target",
            "riscv64gc-unknown-linux-gnu",
        ]
        assert len(commands(mock_run)) == 2

    def test_mode_env_from_config(self, mock_run, cli_args, tmp_path, monkeypatch):
        (tmp_path / "targetkit.yaml").write_text("build:\n  mode_env: KIT_MODE\n")
        monkeypatch.setenv("BUILD_MODE", "DEBUG")
        monkeypatch.setenv("KIT_MODE", "RELEASE")

        build.run(cli_args(targets=[]))

        assert commands(mock_run) == [["cargo", "build", "--release"]]

    def test_invalid_config(self, mock_run, cli_args, tmp_path, capsys):
        (tmp_path / "targetkit.yaml").write_text("version: 7\n")

        result = build.run(cli_args(targets=["linux"]))

        assert result == 1
        mock_run.assert_not_called()
        assert "ERROR: Unsupported version" in capsys.readouterr().err

    def test_lock_timeout(self, mock_run, cli_args, capsys):
        with patch.object(build, "build_lock", side_effect=BuildLockTimeout("busy")):
            result = build.run(cli_args(targets=["linux"]))

        assert result == 1
        mock_run.assert_not_called()
        assert "busy" in capsys.readouterr().err


class TestCleanBuildCommand:
    """Test the clean-build command."""

    def test_clean_then_build(self, mock_run, cli_args, monkeypatch):
        monkeypatch.delenv("BUILD_MODE", raising=False)

        result = build.run_clean_build(cli_args(targets=["linux"]))

        assert result == 0
        assert commands(mock_run) == [
            ["cargo", "clean"],
            ["rustup", "target", "add", "x86_64-unknown-linux-gnu"],
            ["cargo", "build", "--target", "x86_64-unknown-linux-gnu"],
        ]

    def test_clean_failure_stops(self, mock_run, cli_args):
        mock_run.return_value = Mock(returncode=1)

        result = build.run_clean_build(cli_args(targets=["linux"]))

        assert result == 1
        assert commands(mock_run) == [["cargo", "clean"]]


class TestBuildReleaseCommand:
    """Test the build-release command."""

    def test_release_builds_everything_then_docs(self, mock_run, cli_args, monkeypatch):
        """Test build-release ignores BUILD_MODE and always builds release."""
        monkeypatch.setenv("BUILD_MODE", "DEBUG")

        result = build.run_release(cli_args())

        assert result == 0
        cmds = commands(mock_run)
        assert cmds[0] == ["cargo", "clean"]
        assert cmds[-1] == ["cargo", "doc"]

        builds = [c for c in cmds if c[:2] == ["cargo", "build"]]
        assert [c[3] for c in builds] == [
            "x86_64-unknown-linux-gnu",
            "x86_64-pc-windows-gnu",
            "x86_64-apple-darwin",
            "armv7-unknown-linux-gnueabihf",
            "arm-unknown-linux-gnueabihf",
        ]
        assert all(c[-1] == "--release" for c in builds)

    def test_release_skips_docs_after_failure(self, mock_run, cli_args):
        def fail_windows(cmd, **kwargs):
            if cmd[:2] == ["cargo", "build"] and "x86_64-pc-windows-gnu" in cmd:
                return Mock(returncode=101)
            return Mock(returncode=0, stdout="", stderr="")

        mock_run.side_effect = fail_windows

        result = build.run_release(cli_args())

        assert result == 1
        assert ["cargo", "doc"] not in commands(mock_run)

    def test_release_docs_failure(self, mock_run, cli_args):
        def fail_doc(cmd, **kwargs):
            return Mock(returncode=1 if cmd == ["cargo", "doc"] else 0, stdout="", stderr="")

        mock_run.side_effect = fail_doc

        assert build.run_release(cli_args()) == 1


class TestBuildThroughCLI:
    """Test the build command end to end through the CLI."""

    def test_cli_build(self, mock_run, tmp_path, monkeypatch):
        monkeypatch.delenv("BUILD_MODE", raising=False)

        result = CLI().run(["--project-root", str(tmp_path), "build", "rpi-legacy"])

        assert result == 0
        assert commands(mock_run)[-1] == [
            "cargo",
            "build",
            "--target",
            "arm-unknown-linux-gnueabihf",
        ]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path.resolve()

    def test_cli_build_no_valid_targets(self, mock_run, tmp_path):
        result = CLI().run(["--project-root", str(tmp_path), "build", "bsd"])

        assert result == 1
        mock_run.assert_not_called()

    def test_cli_build_missing_project_root(self, mock_run, tmp_path, capsys):
        """Test a mistyped project root is rejected before anything is created."""
        missing = tmp_path / "typo"

        result = CLI().run(["--project-root", str(missing), "build", "linux"])

        assert result == 1
        assert not missing.exists()
        mock_run.assert_not_called()
        assert "Project root is not a directory" in capsys.readouterr().err

    def test_cli_build_project_root_is_a_file(self, mock_run, tmp_path):
        root_file = tmp_path / "Cargo.toml"
        root_file.write_text("[package]\n")

        result = CLI().run(["--project-root", str(root_file), "clean-build", "linux"])

        assert result == 1
        mock_run.assert_not_called()
