from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# (json_key, attr_name, minimum)
_INT_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("editorTimeout", "editor_timeout", 1),
    ("gitTimeout", "git_timeout", 1),
    ("projectDisplayLimit", "project_display_limit", 1),
    ("commitDisplayLimit", "commit_display_limit", 1),
)

# (json_key, attr_name)
_STR_FIELDS: tuple[tuple[str, str], ...] = (
    ("workspaceDir", "workspace_dir"),
    ("templateRepo", "template_repo"),
    ("librariesRepo", "libraries_repo"),
    ("remote", "remote"),
    ("branch", "branch"),
)

_LIST_FIELDS: tuple[tuple[str, str], ...] = (
    ("installCommand", "install_command"),
    ("editorCommand", "editor_command"),
    ("compiledExtensions", "compiled_extensions"),
    ("tempPatterns", "temp_patterns"),
)


def _get_int(data: dict[str, Any], json_key: str, default: int, minimum: int) -> int:
    return max(minimum, int(data.get(json_key, default)))


def _get_list(data: dict[str, Any], json_key: str, default: list[str]) -> list[str]:
    raw = data.get(json_key)
    if raw is None:
        return list(default)
    if not isinstance(raw, list):
        msg = f"{json_key} must be a list of strings"
        raise ValueError(msg)
    return [str(x) for x in raw]


@dataclass(slots=True)
class AppConfig:
    workspace_dir: str = "workspace"
    template_repo: str = ""
    libraries_repo: str = ""
    remote: str = "origin"
    branch: str = "main"
    install_command: list[str] = field(default_factory=list)
    editor_command: list[str] = field(default_factory=list)
    editor_timeout: int = 10
    git_timeout: int = 120
    project_display_limit: int = 10
    commit_display_limit: int = 5
    compiled_extensions: list[str] = field(default_factory=list)
    temp_patterns: list[str] = field(default_factory=list)

    @property
    def remote_ref(self) -> str:
        return f"{self.remote}/{self.branch}"

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        str_kwargs: dict[str, str] = {}
        for json_key, attr in _STR_FIELDS:
            str_kwargs[attr] = str(data.get(json_key, getattr(defaults, attr)))

        list_kwargs: dict[str, list[str]] = {}
        for json_key, attr in _LIST_FIELDS:
            list_kwargs[attr] = _get_list(data, json_key, getattr(defaults, attr))

        int_kwargs: dict[str, int] = {}
        for json_key, attr, minimum in _INT_FIELDS:
            int_kwargs[attr] = _get_int(data, json_key, getattr(defaults, attr), minimum)

        return cls(**str_kwargs, **list_kwargs, **int_kwargs)
