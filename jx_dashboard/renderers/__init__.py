"""Output renderers"""

from .terminal import TerminalRenderer

__all__ = ['TerminalRenderer']
