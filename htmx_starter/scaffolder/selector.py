"""Interactive stack selection.

Renders the supported stacks as a numbered list and reads exactly one answer.
There is no re-prompting: an unusable answer aborts the run with
``InputError``.
"""

from __future__ import annotations

from rich.console import Console

from htmx_starter.errors import InputError
from htmx_starter.scaffolder.registry import StackIdentifier
from htmx_starter.utils import console as default_console

PROMPT = "Select the language for your project:"


def parse_selection(answer: str) -> StackIdentifier:
    """Map an answer to a stack.

    Accepts the 1-based item number, the stack value or its label, ignoring
    case and surrounding whitespace.

    Raises:
        InputError: If the answer does not name exactly one stack.
    """
    stacks = list(StackIdentifier)
    text = answer.strip()
    if not text:
        raise InputError("No selection made")

    if text.isdigit():
        index = int(text)
        if 1 <= index <= len(stacks):
            return stacks[index - 1]
        raise InputError(f"Selection {index} is out of range (1-{len(stacks)})", answer=text)

    lowered = text.lower()
    for stack in stacks:
        if lowered in (stack.value, stack.label.lower()):
            return stack
    raise InputError(f"Unknown selection: {text!r}", answer=text)


def select_stack(console: Console | None = None) -> StackIdentifier:
    """Prompt once for a stack and return it.

    Raises:
        InputError: On end of input, interruption, or an invalid answer.
    """
    out = console or default_console
    out.print(f"[bold]{PROMPT}[/bold]")
    for number, stack in enumerate(StackIdentifier, start=1):
        out.print(f"  [dim]{number})[/dim] [bold {stack.color}]{stack.label}[/bold {stack.color}]")

    try:
        answer = out.input("[bold cyan]> [/bold cyan]")
    except EOFError as exc:
        raise InputError("Input closed before a selection was made") from exc
    except KeyboardInterrupt as exc:
        raise InputError("Selection cancelled") from exc

    return parse_selection(answer)
