"""
Opener capability

An Opener launches its URL in some viewer. The launcher points the opener at
the final dashboard URL, then calls open(). The CLI uses BrowserOpener.
"""

import webbrowser
from abc import ABC, abstractmethod

from .errors import BrowserOpenError


class Opener(ABC):
    """Launches a URL"""

    def __init__(self, url: str = ""):
        self.url = url

    @abstractmethod
    def open(self) -> None:
        """Open self.url

        Raises:
            DashboardError: When the URL could not be opened
        """
        pass


class BrowserOpener(Opener):
    """Opens the URL in the OS default browser"""

    def open(self) -> None:
        try:
            opened = webbrowser.open(self.url)
        except webbrowser.Error as e:
            raise BrowserOpenError(f"failed to open browser: {e}") from e
        if not opened:
            raise BrowserOpenError("failed to open browser: no runnable browser found")
