"""
Workers for text comparison.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject

from spotdiff.workers.base_worker import BaseWorker
from spotdiff.core.diff.text_diff import TextDiffEngine, TextCompareOptions
from spotdiff.core.models import DiffResult
from spotdiff.services.file_io import FileIOService


class TextCompareWorker(BaseWorker):
    """
    Worker for comparing text content directly.

    Useful when content is already in memory.
    """

    def __init__(
        self,
        original_text: str,
        modified_text: str,
        left_label: str = "original",
        right_label: str = "modified",
        options: Optional[TextCompareOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.original_text = original_text
        self.modified_text = modified_text
        self.left_label = left_label
        self.right_label = right_label
        self.options = options or TextCompareOptions()

    def do_work(self) -> DiffResult:
        """Perform text comparison."""
        self.report_status("Computing differences...")

        engine = TextDiffEngine(self.options)
        result = engine.compare(
            self.original_text,
            self.modified_text,
            self.left_label,
            self.right_label
        )

        self.report_status("Complete")
        return result


class FileCompareWorker(BaseWorker):
    """
    Worker for comparing two text files.

    Reads both files, then runs the text diff engine in the background thread.
    """

    def __init__(
        self,
        left_path: str | Path,
        right_path: str | Path,
        options: Optional[TextCompareOptions] = None,
        encoding: Optional[str] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.left_path = Path(left_path)
        self.right_path = Path(right_path)
        self.options = options or TextCompareOptions()
        self.encoding = encoding

    def do_work(self) -> DiffResult:
        """Read both files and compare them."""
        self.report_status(f"Comparing {self.left_path.name}...")
        file_io_service = FileIOService()

        self.report_progress(0, 3, "Reading left file...")
        left_text = self._read(file_io_service, self.left_path)
        self.check_cancelled()

        self.report_progress(1, 3, "Reading right file...")
        right_text = self._read(file_io_service, self.right_path)
        self.check_cancelled()

        self.report_progress(2, 3, "Computing differences...")
        engine = TextDiffEngine(self.options)
        result = engine.compare(
            left_text,
            right_text,
            str(self.left_path),
            str(self.right_path)
        )

        self.report_progress(3, 3, "Complete")
        return result

    def _read(self, service: FileIOService, path: Path) -> str:
        read_result = service.read_file(path, encoding=self.encoding)
        if not read_result.success:
            if read_result.is_binary:
                raise IOError(f"File appears to be binary and cannot be compared as text: {path}")
            raise IOError(f"Failed to read {path}: {read_result.error}")
        return read_result.content.text
