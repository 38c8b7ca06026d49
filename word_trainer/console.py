"""Terminal input and output used by the quiz and enrichment steps."""

from enum import Enum
from typing import Optional, Protocol

import click


class Style(str, Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


STYLE_COLORS = {
    Style.DEFAULT: "white",
    Style.SUCCESS: "green",
    Style.ERROR: "red",
    Style.INFO: "bright_black",
}


class Console(Protocol):
    """Writes styled lines and reads single lines of user input."""

    def write_line(self, text: str = "", style: Style = Style.DEFAULT):
        ...

    def read_line(self) -> Optional[str]:
        ...


class TerminalConsole:
    """``Console`` that talks to the user's terminal."""

    def write_line(self, text: str = "", style: Style = Style.DEFAULT):
        click.secho(text, fg=STYLE_COLORS[style])

    def read_line(self) -> Optional[str]:
        """Read one line; end of input is returned as None."""
        try:
            return input()
        except EOFError:
            return None
