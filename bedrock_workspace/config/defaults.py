from __future__ import annotations

from bedrock_workspace.config.schema import AppConfig

TEMPLATE_REPO = "https://github.com/ackinari/VSCode-Workspace.git"
LIBRARIES_REPO = "https://github.com/ackinari/bedrock-workspace-libraries.git"


def default_config() -> AppConfig:
    return AppConfig(
        workspace_dir="workspace",
        template_repo=TEMPLATE_REPO,
        libraries_repo=LIBRARIES_REPO,
        remote="origin",
        branch="main",
        install_command=["npm", "install"],
        editor_command=["code", "-r"],
        editor_timeout=10,
        git_timeout=120,
        project_display_limit=10,
        commit_display_limit=5,
        compiled_extensions=[".js"],
        temp_patterns=["*.tmp", "*.temp", ".DS_Store", "Thumbs.db", "*.log"],
    )
