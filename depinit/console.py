"""Console output helpers."""

from typing import Callable

from rich.console import Console
from rich.text import Text

console = Console()


def warn(message: str) -> None:
    console.print(Text(f"\n     {message}", style="yellow"))


def error(message: str) -> None:
    console.print(Text(f"\n     {message}", style="red"))


def command_log(message: str) -> Callable[..., None]:
    """Print a progress line and return a callback that completes it.

    The callback marks the line with a check mark, or with a cross when an
    error message is given; ``error_info`` is printed dimmed and indented
    below the error.
    """
    console.print(Text.assemble((" • ", "cyan"), message), end="")

    def done(error_message: str | None = None, error_info: str | None = None) -> None:
        if error_message:
            console.print(Text.assemble(". ", ("✖", "red")))
            error(error_message)
            if error_info:
                details = Text("\n").join(
                    Text(f"     {line}", style="dim") for line in error_info.split("\n")
                )
                console.print(details)
                console.print()
            return

        console.print(Text.assemble(". ", ("✓", "green")))

    return done


def padded_log(message: str) -> None:
    console.print(Text("\n".join(f"    {line}" for line in message.split("\n"))))


def code_log(code_lines: list[str], left_pad: int | None = None) -> None:
    """Print lines as an inverted code block of equal width."""
    width = max((len(line) for line in code_lines), default=0)
    pad = " " * (left_pad or 2)
    block = Text("\n").join(
        Text.assemble(pad, (f" {line.ljust(width)} ", "reverse")) for line in code_lines
    )
    console.print(block)
