"""Sink that prompts the user for a save location."""

from pathlib import Path

from PyQt6.QtWidgets import QFileDialog, QWidget

from src.adapters.markdown_sink import MarkdownSink, write_document
from src.core.exceptions import SinkError
from src.core.types import MarkdownDocument


class SaveDialogSink(MarkdownSink):
    """Shows a save dialog pre-filled with the derived filename."""

    def __init__(self, parent: QWidget, default_dir: Path):
        self._parent = parent
        self._default_dir = Path(default_dir)

    def save(self, document: MarkdownDocument) -> Path:
        chosen, _ = QFileDialog.getSaveFileName(
            self._parent,
            "Save Markdown",
            str(self._default_dir / document.filename),
            "Markdown (*.md);;All files (*)",
        )
        if not chosen:
            raise SinkError("Save cancelled")
        path = Path(chosen)
        write_document(document, path)
        return path
