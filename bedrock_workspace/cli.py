from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from result import Err, Ok
from rich.console import Console
from rich.markup import escape

from bedrock_workspace import PACKAGE_NAME, __version__
from bedrock_workspace.config.defaults import default_config
from bedrock_workspace.config.loader import load_config
from bedrock_workspace.config.schema import AppConfig
from bedrock_workspace.errors import WorkspaceError
from bedrock_workspace.log import configure_logging
from bedrock_workspace.models.layout import WorkspaceLayout
from bedrock_workspace.services.cleaner import run_clean
from bedrock_workspace.services.evaluator import evaluate_workspace
from bedrock_workspace.services.initializer import WorkspaceInitializer
from bedrock_workspace.services.process import Installer, SubprocessInstaller, tool_available
from bedrock_workspace.services.prompts import Prompter, RichPrompter
from bedrock_workspace.services.updater import UpdateReconciler
from bedrock_workspace.services.vcs import VcsFactory, git_factory
from bedrock_workspace.ui.views import render_header, render_status, render_version

STATUS_TOOLS = ("code", "git", "npm")
_CWD = Path(".")

app = typer.Typer(
    add_completion=False,
    help="Create, update, clean and inspect a Minecraft Bedrock development workspace.",
)


@dataclass(slots=True)
class CliState:
    """Collaborators shared by every command of one invocation."""

    base: Path
    config: AppConfig
    console: Console
    prompter: Prompter
    vcs_factory: VcsFactory
    installer: Installer

    @property
    def layout(self) -> WorkspaceLayout:
        return WorkspaceLayout.under(self.base, self.config.workspace_dir)


def _load_state(base: Path, config_path: Path | None) -> CliState:
    console = Console()
    match load_config(config_path):
        case Ok(config):
            pass
        case Err(message):
            console.print(f"[yellow]Warning:[/yellow] {escape(message)} Using defaults.")
            config = default_config()
    return CliState(
        base=base,
        config=config,
        console=console,
        prompter=RichPrompter(console),
        vcs_factory=git_factory(timeout=config.git_timeout),
        installer=SubprocessInstaller(),
    )


def _guarded(state: CliState, action: Callable[[], object]) -> None:
    """Run *action*; any uncaught failure is printed and exits with status 1."""
    try:
        action()
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        state.console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _initializer(state: CliState, config: AppConfig | None = None) -> WorkspaceInitializer:
    return WorkspaceInitializer(
        layout=state.layout,
        vcs_factory=state.vcs_factory,
        prompter=state.prompter,
        installer=state.installer,
        config=config or state.config,
        console=state.console,
    )


def _do_init(state: CliState) -> None:
    _initializer(state).run()


def _do_update(state: CliState, branch: str | None = None) -> None:
    config = dataclasses.replace(state.config, branch=branch) if branch else state.config
    layout = state.layout
    UpdateReconciler(
        layout=layout,
        vcs=state.vcs_factory(layout.root),
        prompter=state.prompter,
        installer=state.installer,
        config=config,
        console=state.console,
        reinitialize=_initializer(state, config).run,
    ).run()


def _do_clean(state: CliState) -> None:
    run_clean(state.layout, state.prompter, state.console, state.config.temp_patterns)


def _do_status(state: CliState, offline: bool = False) -> None:
    layout = state.layout
    config = state.config
    snapshot = evaluate_workspace(
        layout,
        state.vcs_factory(layout.root),
        remote=config.remote,
        branch=config.branch,
        check_remote=not offline,
        compiled_extensions=config.compiled_extensions,
    )
    tools = {tool: tool_available(tool) for tool in STATUS_TOOLS}
    render_status(state.console, snapshot, tools, config.project_display_limit)


def _state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:
        raise WorkspaceError("Command invoked without CLI state")
    return state


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    path: Annotated[Path, typer.Option("--path", "-p", help="Directory that contains the workspace folder.")] = _CWD,
    config_path: Annotated[Path | None, typer.Option("--config", help="Path to a JSON config file.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    update_flag: Annotated[bool, typer.Option("--update", help="Same as the update command.")] = False,
    clean_flag: Annotated[bool, typer.Option("--clean", help="Same as the clean command.")] = False,
    status_flag: Annotated[bool, typer.Option("--status", help="Same as the status command.")] = False,
    version_flag: Annotated[bool, typer.Option("--version", help="Show version information.")] = False,
) -> None:
    """Initialize a new workspace when no command is given."""
    configure_logging(verbose)
    if not isinstance(ctx.obj, CliState):
        ctx.obj = _load_state(path, config_path)
    state: CliState = ctx.obj

    if version_flag:
        render_version(state.console, PACKAGE_NAME, __version__)
        raise typer.Exit()

    render_header(state.console)
    if ctx.invoked_subcommand is not None:
        return
    if update_flag:
        _guarded(state, lambda: _do_update(state))
    elif clean_flag:
        _guarded(state, lambda: _do_clean(state))
    elif status_flag:
        _guarded(state, lambda: _do_status(state))
    else:
        _guarded(state, lambda: _do_init(state))


@app.command()
def init(ctx: typer.Context) -> None:
    """Initialize a new workspace from the template (default)."""
    state = _state(ctx)
    _guarded(state, lambda: _do_init(state))


@app.command()
def update(
    ctx: typer.Context,
    branch: Annotated[str | None, typer.Option("--branch", "-b", help="Remote branch to update from.")] = None,
) -> None:
    """Update an existing workspace from its remote."""
    state = _state(ctx)
    _guarded(state, lambda: _do_update(state, branch))


@app.command()
def clean(ctx: typer.Context) -> None:
    """Clean dependency caches, build outputs and temporary files."""
    state = _state(ctx)
    _guarded(state, lambda: _do_clean(state))


@app.command()
def status(
    ctx: typer.Context,
    offline: Annotated[bool, typer.Option("--offline", help="Skip the remote update check.")] = False,
) -> None:
    """Show workspace status and information."""
    state = _state(ctx)
    _guarded(state, lambda: _do_status(state, offline))


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show this help message."""
    parent = ctx.parent or ctx
    typer.echo(parent.get_help())


@app.command()
def version(ctx: typer.Context) -> None:
    """Show version information."""
    render_version(_state(ctx).console, PACKAGE_NAME, __version__)


def main() -> None:
    app()
