from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt


@dataclass(slots=True, frozen=True)
class Choice[T]:
    label: str
    value: T
    checked: bool = True


class Prompter(Protocol):
    def confirm(self, message: str, default: bool = False) -> bool: ...

    def select[T](self, message: str, choices: Sequence[Choice[T]]) -> T: ...

    def multi_select[T](self, message: str, choices: Sequence[Choice[T]]) -> list[T]: ...


def parse_selection(answer: str, count: int) -> list[int] | None:
    """Turn ``"1,3"`` / ``"all"`` / ``"none"`` into zero-based indexes.

    Returns ``None`` when the answer contains anything out of range.
    """
    text = answer.strip().lower()
    if text in ("all", "*"):
        return list(range(count))
    if text in ("", "none", "-"):
        return []
    picked: list[int] = []
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if not part.isdigit():
            return None
        index = int(part) - 1
        if not 0 <= index < count:
            return None
        if index not in picked:
            picked.append(index)
    return picked


class RichPrompter:
    """Interactive prompts on a rich console."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self._console)

    def select[T](self, message: str, choices: Sequence[Choice[T]]) -> T:
        self._console.print(message)
        for number, choice in enumerate(choices, start=1):
            self._console.print(f"  [cyan]{number}[/cyan]) {choice.label}")
        answer = Prompt.ask(
            "Choose",
            choices=[str(n) for n in range(1, len(choices) + 1)],
            default="1",
            console=self._console,
        )
        return choices[int(answer) - 1].value

    def multi_select[T](self, message: str, choices: Sequence[Choice[T]]) -> list[T]:
        self._console.print(message)
        for number, choice in enumerate(choices, start=1):
            mark = "x" if choice.checked else " "
            self._console.print(f"  [cyan]{number}[/cyan]) \\[{mark}] {choice.label}")
        preset = [str(n) for n, c in enumerate(choices, start=1) if c.checked]
        default = ",".join(preset) if preset else "none"
        while True:
            answer = Prompt.ask("Numbers separated by commas, 'all' or 'none'", default=default, console=self._console)
            indexes = parse_selection(answer, len(choices))
            if indexes is not None:
                return [choices[i].value for i in indexes]
            self._console.print("[red]Please enter numbers from the list.[/red]")
