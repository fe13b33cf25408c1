from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
import typer
from rich.console import Console
from typer.testing import CliRunner

from bedrock_workspace import __version__
from bedrock_workspace.cli import CliState, app
from bedrock_workspace.cli import _state as cli_state
from bedrock_workspace.config.defaults import default_config
from bedrock_workspace.errors import VcsError, WorkspaceError
from bedrock_workspace.models.enums import DirtyResolution
from tests.factories import PACKAGE, dirty_status, make_commits, make_workspace, write_file, write_json
from tests.fakes import FakeInstaller, FakeVcs, ScriptedPrompter

runner = CliRunner()


def _state(base: Path, vcs: FakeVcs | None = None, prompter: ScriptedPrompter | None = None) -> CliState:
    fake = vcs or FakeVcs()
    return CliState(
        base=base,
        config=default_config(),
        console=Console(file=StringIO(), width=200),
        prompter=prompter or ScriptedPrompter(),
        vcs_factory=lambda _root: fake,
        installer=FakeInstaller(),
    )


def _output(state: CliState) -> str:
    return state.console.file.getvalue()  # type: ignore[attr-defined]


class TestStatus:
    def test_missing_workspace_exits_zero(self, tmp_path: Path) -> None:
        state = _state(tmp_path)
        result = runner.invoke(app, ["status"], obj=state)
        assert result.exit_code == 0
        out = _output(state)
        assert "Bedrock Workspace CLI" in out
        assert "No workspace found" in out
        assert "bedrock-workspace init" in out

    def test_existing_workspace(self, tmp_path: Path) -> None:
        make_workspace(tmp_path)
        state = _state(tmp_path, vcs=FakeVcs(incoming=make_commits(2)))
        result = runner.invoke(app, ["status"], obj=state)
        assert result.exit_code == 0
        assert "Updates available: 2 commits" in _output(state)

    def test_offline_skips_fetch(self, tmp_path: Path) -> None:
        make_workspace(tmp_path)
        vcs = FakeVcs()
        state = _state(tmp_path, vcs=vcs)
        assert runner.invoke(app, ["status", "--offline"], obj=state).exit_code == 0
        assert "fetch" not in vcs.names

    def test_status_flag(self, tmp_path: Path) -> None:
        state = _state(tmp_path)
        assert runner.invoke(app, ["--status"], obj=state).exit_code == 0
        assert "No workspace found" in _output(state)


class TestUpdate:
    def test_failure_exits_one(self, tmp_path: Path) -> None:
        make_workspace(tmp_path)
        vcs = FakeVcs(fail={"fetch": VcsError("Could not resolve host: github.com")})
        state = _state(tmp_path, vcs=vcs)
        result = runner.invoke(app, ["update"], obj=state)
        assert result.exit_code == 1
        assert "Error:" in _output(state)

    def test_missing_workspace_names_checked_root(self, tmp_path: Path) -> None:
        state = _state(tmp_path / "elsewhere")
        assert runner.invoke(app, ["update"], obj=state).exit_code == 0
        assert f"No workspace found at {tmp_path / 'elsewhere' / 'workspace'}." in _output(state)

    def test_branch_option(self, tmp_path: Path) -> None:
        make_workspace(tmp_path)
        vcs = FakeVcs()
        state = _state(tmp_path, vcs=vcs)
        assert runner.invoke(app, ["update", "--branch", "develop"], obj=state).exit_code == 0
        assert ("revparse", ("origin/develop",)) in vcs.calls

    def test_dirty_cancel_via_flag(self, tmp_path: Path) -> None:
        make_workspace(tmp_path)
        vcs = FakeVcs(status=dirty_status())
        state = _state(tmp_path, vcs=vcs, prompter=ScriptedPrompter(selects=[DirtyResolution.CANCEL]))
        assert runner.invoke(app, ["--update"], obj=state).exit_code == 0
        assert vcs.names == ["status"]


class TestClean:
    def test_already_clean(self, tmp_path: Path) -> None:
        make_workspace(tmp_path)
        state = _state(tmp_path)
        assert runner.invoke(app, ["clean"], obj=state).exit_code == 0
        assert "already clean" in _output(state)

    def test_removes_selection(self, tmp_path: Path) -> None:
        layout = make_workspace(tmp_path)
        write_file(layout.lock_file, 2048)
        state = _state(tmp_path, prompter=ScriptedPrompter(multi=[[0]], confirms=[True]))
        assert runner.invoke(app, ["clean"], obj=state).exit_code == 0
        assert not layout.lock_file.exists()
        assert "Space freed: 2.0 KB" in _output(state)


class TestInit:
    def test_default_command_initializes(self, tmp_path: Path) -> None:
        def _clone(dest: Path) -> None:
            (dest / ".git").mkdir(parents=True)
            write_json(dest / "package.json", PACKAGE)

        vcs = FakeVcs(on_clone=_clone)
        state = _state(tmp_path, vcs=vcs, prompter=ScriptedPrompter(confirms=[False, False]))
        result = runner.invoke(app, [], obj=state)
        assert result.exit_code == 0
        assert (tmp_path / "workspace/package.json").exists()
        assert "Workspace initialized successfully" in _output(state)

    def test_clone_failure_exits_one(self, tmp_path: Path) -> None:
        vcs = FakeVcs(fail={"clone": VcsError("fatal: repository not found")})
        state = _state(tmp_path, vcs=vcs)
        result = runner.invoke(app, ["init"], obj=state)
        assert result.exit_code == 1
        assert "repository not found" in _output(state)


class TestInfo:
    def test_version_command(self, tmp_path: Path) -> None:
        state = _state(tmp_path)
        assert runner.invoke(app, ["version"], obj=state).exit_code == 0
        assert f"v{__version__}" in _output(state)

    def test_version_flag(self, tmp_path: Path) -> None:
        state = _state(tmp_path)
        assert runner.invoke(app, ["--version"], obj=state).exit_code == 0
        assert "bedrock-workspace" in _output(state)

    def test_help_command_lists_commands(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["help"], obj=_state(tmp_path))
        assert result.exit_code == 0
        for command in ("init", "update", "clean", "status"):
            assert command in result.output


def test_command_without_state_is_an_error() -> None:
    ctx = typer.Context(typer.main.get_command(app))
    with pytest.raises(WorkspaceError, match="without CLI state"):
        cli_state(ctx)
