"""Terminal input and output for the chat session, built on ``rich``."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Prompt

from .schemas import MenuChoice


class ConsoleIO:
    """Blocking menu and text prompts.

    ``read_choice`` only accepts the keys of :class:`MenuChoice`; anything
    else is rejected by the prompt and asked again.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def read_choice(self) -> MenuChoice:
        self.console.print("\n[bold]Select one:[/bold]")
        for choice in MenuChoice:
            self.console.print(f"{choice.key}. {choice.label}")
        key = Prompt.ask(
            "Choose an option",
            choices=[choice.key for choice in MenuChoice],
            console=self.console,
        )
        return MenuChoice.from_key(key)

    def read_text(self, prompt: str) -> str:
        return Prompt.ask(f"[bold cyan]{prompt}[/bold cyan]", console=self.console)

    def show(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def notice(self, text: str) -> None:
        self.console.print(text, style="yellow", markup=False, highlight=False)

    def error(self, text: str) -> None:
        self.console.print(text, style="bold red", markup=False, highlight=False)


__all__ = ["ConsoleIO"]
