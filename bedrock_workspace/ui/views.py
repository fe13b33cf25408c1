from __future__ import annotations

import platform
from collections.abc import Mapping, Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bedrock_workspace.models.clean import CleanableItem, CleanReport
from bedrock_workspace.models.enums import WorkspaceState
from bedrock_workspace.models.workspace import CommitInfo, PackageInfo, VcsStatus, WorkspaceSnapshot
from bedrock_workspace.services.formatting import format_age, format_bytes, percentage, truncate

RULE = "─" * 50


def render_header(console: Console) -> None:
    console.print("[bold cyan]Bedrock Workspace CLI[/bold cyan]")
    console.print("[dim]JavaScript and TypeScript workspace for Minecraft Bedrock development[/dim]")
    console.print(f"[dim]{RULE}[/dim]")


def render_missing(console: Console, root: Path) -> None:
    console.print(f"[red]Error: No workspace found at {escape(str(root))}.[/red]")
    console.print("[dim]Run 'bedrock-workspace init' first to initialize a workspace.[/dim]")


def render_dirty_files(console: Console, status: VcsStatus) -> None:
    console.print("[dim]Modified files:[/dim]")
    for path in status.modified:
        console.print(f"[dim]  M {escape(path)}[/dim]")
    for path in status.untracked:
        console.print(f"[dim]  ?? {escape(path)}[/dim]")
    for path in status.staged:
        if path not in status.modified:
            console.print(f"[dim]  A {escape(path)}[/dim]")


def render_pending(console: Console, commits: Sequence[CommitInfo], limit: int) -> None:
    shown, remaining = truncate(commits, limit)
    for commit in shown:
        console.print(f"[dim]  • {escape(commit.message)} ({commit.day})[/dim]")
    if remaining:
        console.print(f"[dim]  ... and {remaining} more commits[/dim]")


def item_label(item: CleanableItem) -> str:
    if item.size_bytes > 0:
        return f"{item.name} ({format_bytes(item.size_bytes)})"
    return item.name


def render_catalog(console: Console, items: Sequence[CleanableItem]) -> None:
    table = Table(title="Cleanable items found", header_style="bold yellow")
    table.add_column("Item")
    table.add_column("Description")
    table.add_column("Size", justify="right")
    for item in items:
        table.add_row(item.name, item.description, format_bytes(item.size_bytes) if item.size_bytes else "-")
    console.print(table)


def render_clean_report(console: Console, report: CleanReport) -> None:
    for name in report.cleaned:
        console.print(f"[green]  Cleaned: {escape(name)}[/green]")
    for failure in report.failures:
        detail = f"{failure.item} ({failure.path}): {failure.message}"
        console.print(f"[red]  Failed to clean {escape(detail)}[/red]")
    console.print()
    console.print("[green]Cleaning completed![/green]")
    console.print(f"[dim]Items cleaned: {report.items_cleaned}[/dim]")
    console.print(f"[dim]Space freed: {format_bytes(report.bytes_reclaimed)}[/dim]")
    if report.needs_reinstall:
        console.print()
        console.print("[cyan]Next steps:[/cyan]")
        console.print("[dim]Reinstall dependencies in the workspace (e.g. 'npm install') to restore them[/dim]")


def render_package_info(console: Console, package: PackageInfo | None) -> None:
    console.print("[bold]Workspace Information:[/bold]")
    if package is None:
        console.print("[yellow]  No readable package.json found[/yellow]")
        return
    console.print(f"  Name: {escape(package.name or 'Unknown')}")
    console.print(f"  Version: {escape(package.version or 'Unknown')}")
    console.print(f"  Description: {escape(package.description or 'No description')}")
    if package.author:
        console.print(f"  Author: {escape(package.author)}")


def render_next_steps(console: Console, workspace_dir: str) -> None:
    console.print("[cyan]Next steps:[/cyan]")
    console.print(f"[dim]1. Navigate to the workspace: cd {escape(workspace_dir)}[/dim]")
    console.print("[dim]2. Create a new project: npm run new-project[/dim]")
    console.print("[dim]3. Start developing your Minecraft Bedrock add-on![/dim]")


def _state_line(snapshot: WorkspaceSnapshot) -> str:
    match snapshot.state:
        case WorkspaceState.MISSING:
            return "[red]Status: No workspace found[/red]"
        case WorkspaceState.NOT_TRACKED:
            return "[yellow]Status: Workspace found (not tracked by git)[/yellow]"
        case WorkspaceState.CLEAN:
            return "[green]Status: Workspace found (clean)[/green]"
        case WorkspaceState.DIRTY:
            return "[yellow]Status: Workspace found (modified)[/yellow]"


def _git_section(console: Console, snapshot: WorkspaceSnapshot) -> None:
    console.print("[bold]Git Status:[/bold]")
    if snapshot.state is WorkspaceState.NOT_TRACKED:
        console.print("[yellow]  Not a git repository[/yellow]")
        console.print("[dim]  This workspace was initialized without git tracking[/dim]")
        return
    status = snapshot.vcs_status
    if status is None:
        console.print("[yellow]  Could not read git status[/yellow]")
        if snapshot.vcs_error:
            console.print(f"[dim]  {escape(snapshot.vcs_error)}[/dim]")
        return

    console.print(f"  Branch: {escape(status.branch or 'Unknown')}")
    console.print(f"  Status: {'[green]Clean[/green]' if status.is_clean else '[yellow]Modified[/yellow]'}")
    if status.modified_count:
        console.print(f"  Modified files: {status.modified_count}")
    if status.untracked_count:
        console.print(f"  Untracked files: {status.untracked_count}")
    if status.staged_count:
        console.print(f"  Staged files: {status.staged_count}")

    delta = snapshot.remote_delta
    if delta is None:
        if snapshot.remote_error is not None:
            console.print("[dim]  Could not check for updates[/dim]")
        return
    if delta.behind_count:
        console.print(f"[yellow]  Updates available: {delta.behind_count} commits[/yellow]")
    else:
        console.print("[green]  Up to date[/green]")
    if delta.ahead_count:
        console.print(f"[dim]  Local commits not on remote: {delta.ahead_count}[/dim]")


def _dependencies_section(console: Console, snapshot: WorkspaceSnapshot) -> None:
    console.print("[bold]Dependencies:[/bold]")
    package = snapshot.package
    if package is None:
        console.print("[yellow]  No package.json found[/yellow]")
        return
    console.print(f"  Production dependencies: {len(package.dependencies)}")
    console.print(f"  Development dependencies: {len(package.dev_dependencies)}")
    if snapshot.dependencies_installed:
        console.print("[green]  Status: Installed[/green]")
        minecraft = package.minecraft_dependencies
        if minecraft:
            console.print("  Minecraft dependencies:")
            for name, version in minecraft.items():
                console.print(f"    - {escape(name)}: {escape(version)}")
    else:
        console.print("[red]  Status: Not installed[/red]")
        console.print("[dim]  Install dependencies (e.g. 'npm install') in the workspace[/dim]")
    if snapshot.lock_file_stale:
        console.print("[yellow]  Warning: package-lock.json is older than package.json[/yellow]")


def _projects_section(console: Console, snapshot: WorkspaceSnapshot, display_limit: int) -> None:
    console.print("[bold]Projects:[/bold]")
    if not snapshot.has_projects_dir:
        console.print("[yellow]  No projects directory found[/yellow]")
        return
    projects = snapshot.user_projects
    console.print(f"  Total projects: {len(projects)}")
    shown, remaining = truncate(projects, display_limit)
    if shown:
        console.print("  Project details:")
    for project in shown:
        line = f"    - {escape(project.name)}"
        if project.is_built:
            line += " [green](built)[/green]"
        if project.version_label:
            line += f" v{project.version_label}"
        console.print(line)
    if remaining:
        console.print(f"[dim]    ... and {remaining} more projects[/dim]")
    if snapshot.has_template:
        console.print("[green]  Template: Available[/green]")
    else:
        console.print("[yellow]  Template: Missing[/yellow]")


def _libraries_section(console: Console, snapshot: WorkspaceSnapshot) -> None:
    console.print("[bold]Libraries:[/bold]")
    if not snapshot.has_libraries_dir:
        console.print("[yellow]  No libraries directory found[/yellow]")
        return
    console.print(f"  Available libraries: {len(snapshot.libraries)}")
    for library in snapshot.libraries:
        match library.status:
            case "compiled":
                suffix = " [green](compiled)[/green]"
            case "types only":
                suffix = " [yellow](types only)[/yellow]"
            case _:
                suffix = ""
        console.print(f"    - {escape(library.name)}{suffix}")


def _disk_table(snapshot: WorkspaceSnapshot) -> Table:
    table = Table(title="Disk Usage", header_style="bold magenta")
    table.add_column("Directory")
    table.add_column("Size", justify="right")
    table.add_column("Share", justify="right")
    table.add_row("[bold]total[/bold]", format_bytes(snapshot.total_size), "100%")
    for name, size in snapshot.disk_usage.items():
        table.add_row(name, format_bytes(size), f"{percentage(size, snapshot.total_size)}%")
    return table


def _system_section(console: Console, tools: Mapping[str, bool]) -> None:
    console.print("[bold]System Information:[/bold]")
    console.print(f"  Platform: {platform.system().lower()} {platform.machine()}")
    console.print(f"  Python: {platform.python_version()}")
    console.print("  Available tools:")
    for tool, available in tools.items():
        if available:
            console.print(f"[green]    - {tool}[/green]")
        else:
            console.print(f"[red]    - {tool} (not found)[/red]")


def render_status(
    console: Console,
    snapshot: WorkspaceSnapshot,
    tools: Mapping[str, bool],
    project_display_limit: int = 10,
) -> None:
    console.print("[blue]Bedrock Workspace Status[/blue]")
    console.print(f"[dim]{RULE}[/dim]")
    console.print(_state_line(snapshot))
    if snapshot.state is WorkspaceState.MISSING:
        console.print(f"[dim]Checked: {escape(str(snapshot.root_path))}[/dim]")
        console.print("[dim]Run 'bedrock-workspace init' to initialize a workspace.[/dim]")
        return

    console.print(f"[dim]Location: {escape(str(snapshot.root_path))}[/dim]")
    console.print()
    render_package_info(console, snapshot.package)
    if snapshot.age is not None:
        console.print(f"  Created: {format_age(snapshot.age)}")
    console.print()
    _git_section(console, snapshot)
    console.print()
    _dependencies_section(console, snapshot)
    console.print()
    _projects_section(console, snapshot, project_display_limit)
    console.print()
    _libraries_section(console, snapshot)
    console.print()
    console.print(_disk_table(snapshot))
    console.print()
    _system_section(console, tools)


def render_version(console: Console, name: str, version: str) -> None:
    body = f"[bold]{name} v{version}[/bold]\n[dim]Python {platform.python_version()}[/dim]"
    console.print(Panel(body, border_style="blue"))
