"""Textual host: controller hooks plus the ``piece-table`` editor app."""

from .controller import EditorView, PieceTableController, TextualUIHooks

__all__ = ["EditorView", "PieceTableController", "TextualUIHooks"]
