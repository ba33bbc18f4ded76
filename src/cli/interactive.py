"""Interactive prompt: type a domain, press Enter, read the results.

Each prompt line replaces the query text and the Enter that ends it is fed to
the controller as a key press. The next line is only read once the request has
settled, so the trigger is never pressed while loading.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from rich.console import Console

from cli.ui_components import build_view_renderable, print_banner
from core.domain.view import LOADING_TEXT
from core.services.query_controller import ENTER_KEY, QueryController

QUIT_COMMANDS = frozenset({":q", ":quit"})
PROMPT = "[bold cyan]domain[/bold cyan] > "


async def run_session(
    controller: QueryController,
    console: Console,
    *,
    read_line: Callable[[], str] | None = None,
    show_banner: bool = True,
) -> int:
    """Run the prompt loop until EOF or a quit command. Returns submissions made."""

    read_line = read_line or (lambda: console.input(PROMPT))
    if show_banner:
        print_banner(console)
        console.print(build_view_renderable(controller.view()))

    submissions = 0
    while True:
        try:
            line = await asyncio.to_thread(read_line)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if line.strip() in QUIT_COMMANDS:
            break

        controller.update_domain(line)
        with console.status(LOADING_TEXT, spinner="dots"):
            state = await controller.on_key_press(ENTER_KEY)
        if state is not None:
            submissions += 1
        console.print(build_view_renderable(controller.view()))

    return submissions
