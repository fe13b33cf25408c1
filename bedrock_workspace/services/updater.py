from __future__ import annotations

import logging
import time
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape

from bedrock_workspace.config.schema import AppConfig
from bedrock_workspace.errors import VcsError
from bedrock_workspace.models.enums import DirtyResolution, UpdateOutcome, WorkspaceState
from bedrock_workspace.models.layout import WorkspaceLayout
from bedrock_workspace.models.reports import InitReport, UpdateReport
from bedrock_workspace.services.evaluator import tracked_state
from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem
from bedrock_workspace.services.process import Installer
from bedrock_workspace.services.prompts import Choice, Prompter
from bedrock_workspace.services.vcs import VcsClient
from bedrock_workspace.ui.views import render_dirty_files, render_missing, render_pending

logger = logging.getLogger(__name__)

RESOLUTION_CHOICES: tuple[Choice[DirtyResolution], ...] = (
    Choice("Stash changes and update", DirtyResolution.STASH),
    Choice("Discard changes and update", DirtyResolution.DISCARD),
    Choice("Cancel update", DirtyResolution.CANCEL),
)


class UpdateReconciler:
    """Bring a workspace to the latest state of its remote template.

    Each prompt is a decision node; see :meth:`run` for the order.  Nothing
    completed is rolled back when a later step fails.
    """

    def __init__(
        self,
        layout: WorkspaceLayout,
        vcs: VcsClient,
        prompter: Prompter,
        installer: Installer,
        config: AppConfig,
        console: Console,
        reinitialize: Callable[[], InitReport],
        fs: FileSystem = DEFAULT_FS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._layout = layout
        self._vcs = vcs
        self._prompter = prompter
        self._installer = installer
        self._config = config
        self._console = console
        self._reinitialize = reinitialize
        self._fs = fs
        self._clock = clock

    def run(self) -> UpdateReport:
        console = self._console
        console.print("[blue]Updating Bedrock Workspace...[/blue]")
        console.print()

        match tracked_state(self._layout, self._fs):
            case WorkspaceState.MISSING:
                render_missing(console, self._layout.root)
                return UpdateReport(UpdateOutcome.MISSING)
            case WorkspaceState.NOT_TRACKED:
                return self._offer_reinitialize()
            case _:
                pass

        try:
            return self._update_tracked()
        except VcsError as exc:
            console.print(f"[red]Failed to update workspace:[/red] {escape(str(exc))}")
            if exc.is_conflict:
                console.print()
                console.print("[yellow]Update failed due to conflicts.[/yellow]")
                console.print("[dim]Resolve the conflicts manually in the workspace, or reinitialize it.[/dim]")
            raise

    def _offer_reinitialize(self) -> UpdateReport:
        console = self._console
        console.print("[yellow]Warning: Workspace is not a git repository.[/yellow]")
        console.print("[dim]Updates need git tracking; reinitializing keeps a backup of the current folder.[/dim]")
        if not self._prompter.confirm("Would you like to reinitialize the workspace to enable updates?", default=False):
            console.print("[dim]Update cancelled. Workspace remains unchanged.[/dim]")
            return UpdateReport(UpdateOutcome.CANCELLED)

        backup = self._layout.backup_path(int(self._clock() * 1000))
        console.print(f"[yellow]Creating backup at: {escape(str(backup))}[/yellow]")
        # Copy first: the workspace stays in place until the backup exists.
        self._fs.copy_tree(self._layout.root, backup)
        self._fs.remove(self._layout.root)
        logger.debug("Workspace backed up to %s and removed", backup)

        self._reinitialize()
        console.print()
        console.print("[green]Workspace reinitialized successfully![/green]")
        console.print(f"[dim]Backup available at: {escape(str(backup))}[/dim]")
        return UpdateReport(UpdateOutcome.REINITIALIZED, backup_path=backup)

    def _resolve_dirty(self) -> DirtyResolution | None:
        """Ask how to handle local changes; None when the tree is clean."""
        console = self._console
        console.print("[blue]Checking workspace status...[/blue]")
        status = self._vcs.status()
        if status.is_clean:
            return None

        console.print("[yellow]Warning: Workspace has uncommitted changes.[/yellow]")
        render_dirty_files(console, status)
        choice = self._prompter.select("How would you like to proceed?", RESOLUTION_CHOICES)
        match choice:
            case DirtyResolution.STASH:
                console.print("[yellow]Stashing changes...[/yellow]")
                self._vcs.stash()
            case DirtyResolution.DISCARD:
                console.print("[yellow]Discarding changes...[/yellow]")
                self._vcs.reset("hard")
                self._vcs.clean(["-f", "-d"])
            case DirtyResolution.CANCEL:
                console.print("[dim]Update cancelled.[/dim]")
        return choice

    def _update_tracked(self) -> UpdateReport:
        console = self._console
        remote, branch = self._config.remote, self._config.branch
        remote_ref = self._config.remote_ref

        resolution = self._resolve_dirty()
        if resolution is DirtyResolution.CANCEL:
            return UpdateReport(UpdateOutcome.CANCELLED)
        stashed = resolution is DirtyResolution.STASH

        console.print("[blue]Fetching latest changes...[/blue]")
        self._vcs.fetch(remote, branch)
        local_id = self._vcs.revparse("HEAD")
        remote_id = self._vcs.revparse(remote_ref)
        if local_id == remote_id:
            console.print("[green]Workspace is already up to date![/green]")
            return UpdateReport(UpdateOutcome.UP_TO_DATE, stashed=stashed)

        pending = self._vcs.log(f"HEAD..{remote_ref}")
        console.print("[blue]Changes to be applied:[/blue]")
        render_pending(console, pending, self._config.commit_display_limit)

        if not self._prompter.confirm("Do you want to apply these updates?", default=True):
            console.print("[dim]Update cancelled.[/dim]")
            if stashed:
                console.print("[yellow]Your local changes remain stashed. Restore them with 'git stash pop'.[/yellow]")
            return UpdateReport(UpdateOutcome.DECLINED, pending=pending, stashed=stashed)

        console.print("[blue]Applying updates...[/blue]")
        self._vcs.pull(remote, branch)

        report = UpdateReport(UpdateOutcome.UPDATED, pending=pending, stashed=stashed)
        if self._fs.exists(self._layout.package_json):
            report.dependencies_updated = self._offer_reinstall()

        console.print()
        console.print("[green]Workspace updated successfully![/green]")
        console.print(f"[dim]Location: {escape(str(self._layout.root))}[/dim]")
        if stashed:
            console.print("[dim]Your previous changes are stashed; run 'git stash pop' to restore them.[/dim]")
        return report

    def _offer_reinstall(self) -> bool | None:
        """Reinstall dependencies on request.  None when the operator skipped it."""
        console = self._console
        if not self._prompter.confirm("Would you like to update dependencies?", default=True):
            return None
        console.print("[blue]Updating dependencies...[/blue]")
        command = self._config.install_command
        outcome = self._installer.run(command, self._layout.root)
        if outcome.is_err():
            logger.debug("Dependency install failed: %s", outcome.unwrap_err())
            console.print("[yellow]Warning: Failed to update dependencies automatically.[/yellow]")
            manual = escape(" ".join(command))
            console.print(f"[dim]Run '{manual}' in the workspace folder to update them manually.[/dim]")
            return False
        console.print("[green]Dependencies updated successfully![/green]")
        return True
