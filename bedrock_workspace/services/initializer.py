from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from result import Result
from rich.console import Console
from rich.markup import escape

from bedrock_workspace.config.schema import AppConfig
from bedrock_workspace.errors import VcsError
from bedrock_workspace.models.enums import InitOutcome
from bedrock_workspace.models.layout import LIBRARIES_DIR, WorkspaceLayout
from bedrock_workspace.models.reports import InitReport
from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem
from bedrock_workspace.services.packages import read_package_info
from bedrock_workspace.services.process import Installer, launch_editor
from bedrock_workspace.services.prompts import Prompter
from bedrock_workspace.services.vcs import VcsFactory
from bedrock_workspace.ui.views import render_next_steps, render_package_info

logger = logging.getLogger(__name__)

type EditorLauncher = Callable[[Sequence[str], Path, float], Result[None, str]]


class WorkspaceInitializer:
    """Create a workspace from the template repository.

    The workspace is cloned with git so that ``update`` can later pull from
    the same remote.  Install, library and editor failures are warnings; any
    other failure removes the partially created root and propagates.
    """

    def __init__(
        self,
        layout: WorkspaceLayout,
        vcs_factory: VcsFactory,
        prompter: Prompter,
        installer: Installer,
        config: AppConfig,
        console: Console,
        fs: FileSystem = DEFAULT_FS,
        editor: EditorLauncher = launch_editor,
    ) -> None:
        self._layout = layout
        self._vcs_factory = vcs_factory
        self._prompter = prompter
        self._installer = installer
        self._config = config
        self._console = console
        self._fs = fs
        self._editor = editor

    def run(self) -> InitReport:
        console = self._console
        root = self._layout.root
        console.print("[blue]Initializing Bedrock Workspace...[/blue]")
        console.print()

        if self._fs.exists(root):
            console.print(f"[yellow]Warning: A '{escape(root.name)}' folder already exists.[/yellow]")
            if not self._prompter.confirm("Do you want to overwrite the existing workspace?", default=False):
                console.print("[dim]Operation cancelled.[/dim]")
                return InitReport(InitOutcome.CANCELLED, root)
            console.print("[yellow]Removing existing workspace...[/yellow]")
            self._fs.remove(root)

        try:
            return self._create()
        except Exception as exc:
            console.print(f"[red]Failed to initialize workspace:[/red] {escape(str(exc))}")
            self._cleanup()
            raise

    def _cleanup(self) -> None:
        root = self._layout.root
        if not self._fs.exists(root):
            return
        try:
            self._fs.remove(root)
        except OSError as exc:
            self._console.print(f"[red]Failed to clean up:[/red] {escape(str(exc))}")

    def _create(self) -> InitReport:
        console = self._console
        root = self._layout.root
        report = InitReport(InitOutcome.CREATED, root)

        console.print("[blue]Downloading workspace template...[/blue]")
        console.print(f"[dim]Repository: {escape(self._config.template_repo)}[/dim]")
        self._vcs_factory(root).clone(self._config.template_repo, root)
        console.print("[green]Workspace downloaded successfully![/green]")
        console.print()

        report.dependencies_installed = self._install()

        console.print()
        console.print("[green]Workspace initialized successfully![/green]")
        console.print(f"[dim]Location: {escape(str(root))}[/dim]")
        console.print()
        render_package_info(console, read_package_info(self._layout.package_json, self._fs).ok())

        console.print()
        if self._prompter.confirm("Would you like to download the shared libraries?", default=True):
            report.libraries_attached = self._attach_libraries()
        else:
            console.print("[dim]Libraries skipped. You can add them later by running:[/dim]")
            console.print(self._libraries_command(), markup=False)

        if self._prompter.confirm("Would you like to open the workspace in VS Code?", default=True):
            report.editor_opened = self._open_editor()
        else:
            console.print()
            console.print("[dim]You can open the workspace later with:[/dim]")
            console.print(self._editor_command(), markup=False)

        console.print()
        render_next_steps(console, root.name)
        return report

    def _install(self) -> bool:
        console = self._console
        command = self._config.install_command
        console.print("[blue]Installing dependencies...[/blue]")
        outcome = self._installer.run(command, self._layout.root)
        if outcome.is_err():
            logger.debug("Dependency install failed: %s", outcome.unwrap_err())
            console.print("[yellow]Warning: Failed to install dependencies automatically.[/yellow]")
            manual = escape(" ".join(command))
            console.print(f"[dim]Run '{manual}' in the workspace folder to install them manually.[/dim]")
            return False
        console.print("[green]Dependencies installed successfully![/green]")
        return True

    def _libraries_command(self) -> str:
        return f"git submodule add {self._config.libraries_repo} {LIBRARIES_DIR}"

    def _attach_libraries(self) -> bool:
        console = self._console
        console.print("[blue]Downloading shared libraries...[/blue]")
        console.print(f"[dim]Repository: {escape(self._config.libraries_repo)}[/dim]")
        vcs = self._vcs_factory(self._layout.root)
        try:
            if self._fs.exists(self._layout.libraries_dir):
                self._fs.remove(self._layout.libraries_dir)
            vcs.submodule_add(self._config.libraries_repo, LIBRARIES_DIR)
            vcs.submodule_update()
        except (VcsError, OSError) as exc:
            console.print("[yellow]Warning: Failed to download libraries automatically.[/yellow]")
            console.print("[dim]You can add them manually later from the workspace folder with:[/dim]")
            console.print(self._libraries_command(), markup=False)
            console.print(f"[dim]Error: {escape(str(exc))}[/dim]")
            return False
        console.print("[green]Libraries downloaded successfully![/green]")
        return True

    def _editor_command(self) -> str:
        return " ".join([*self._config.editor_command, f'"{self._layout.root}"'])

    def _open_editor(self) -> bool:
        console = self._console
        console.print("[yellow]Opening workspace in VS Code...[/yellow]")
        outcome = self._editor(self._config.editor_command, self._layout.root, self._config.editor_timeout)
        if outcome.is_err():
            console.print("[red]Failed to open VS Code automatically.[/red]")
            console.print(f"[dim]{escape(outcome.unwrap_err())}[/dim]")
            console.print("[dim]Make sure the 'code' command is available in PATH[/dim]")
            console.print("[dim](VS Code: Ctrl+Shift+P → 'Shell Command: Install code command in PATH').[/dim]")
            console.print()
            console.print("[dim]Alternatively, open the workspace manually:[/dim]")
            console.print(self._editor_command(), markup=False)
            return False
        console.print("[green]Workspace opened in VS Code successfully![/green]")
        return True
