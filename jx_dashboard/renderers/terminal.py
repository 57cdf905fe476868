"""
Terminal renderer using rich for output formatting
"""

from typing import Optional

from rich.console import Console
from rich.text import Text


class TerminalRenderer:
    """Renders launcher messages for the console

    Colors follow the output.colors_enabled setting; lines wrap at 100 chars.
    """

    def __init__(self, colors_enabled: bool = True, width: Optional[int] = None):
        self.console = Console(
            color_system="auto" if colors_enabled else None,
            width=width or min(100, Console().size.width),
            legacy_windows=False
        )
        self.colors_enabled = colors_enabled

    def _capture(self, text: Text) -> str:
        console = Console(
            file=None,
            width=self.console.size.width,
            color_system=self.console.color_system if self.colors_enabled else None,
            force_terminal=self.colors_enabled and self.console.is_terminal,
        )
        with console.capture() as capture:
            console.print(text, soft_wrap=True)
        return capture.get().rstrip("\n")

    def render_url(self, url: str) -> str:
        """Line announcing where the dashboard is running"""
        text = Text("Jenkins X dashboard is running at: ")
        text.append(url, style="green")
        return self._capture(text)
