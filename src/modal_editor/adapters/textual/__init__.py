"""Textual front-end: key translation, rendering hooks, and the app."""

from .controller import TextualEditorAdapter, TextualUIHooks, status_line

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "status_line"]
