"""
QObject plumbing shared by the diff workers.

A worker owns one comparison. The caller moves it to a QThread, listens
on `signals`, and may call `cancel()` at any time; a diff that finishes
after cancellation is thrown away rather than delivered.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot, QMutex, QMutexLocker


logger = logging.getLogger(__name__)


class WorkerState(Enum):
    """Lifecycle of a diff worker."""
    PENDING = auto()
    RUNNING = auto()
    CANCELLING = auto()
    CANCELLED = auto()
    COMPLETED = auto()
    FAILED = auto()


class WorkerSignals(QObject):
    """Signals a diff worker emits towards its owner."""
    progress = pyqtSignal(int, int, str)  # step, steps, label
    status = pyqtSignal(str)
    started = pyqtSignal()
    finished = pyqtSignal(object)  # DiffResult
    error = pyqtSignal(str, str)  # exception class name, message
    cancelled = pyqtSignal()
    state_changed = pyqtSignal(object)  # WorkerState


# QObject and ABC bring different metaclasses
class WorkerMeta(type(QObject), type(ABC)):
    pass


class BaseWorker(QObject, ABC, metaclass=WorkerMeta):
    """
    Runs `do_work` once and reports the outcome through `signals`.

        worker = FileCompareWorker(left, right, options)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.signals.finished.connect(show_diff)
        worker.signals.finished.connect(thread.quit)
        thread.start()

    The engine cannot be interrupted mid-diff, so `cancel()` only marks
    the worker; `run` then emits `cancelled` instead of `finished`.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals()
        self._state = WorkerState.PENDING
        self._cancelled = False
        self._mutex = QMutex()
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None

    @property
    def state(self) -> WorkerState:
        """Current worker state."""
        with QMutexLocker(self._mutex):
            return self._state

    @state.setter
    def state(self, value: WorkerState) -> None:
        with QMutexLocker(self._mutex):
            self._state = value
        self.signals.state_changed.emit(value)

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation was requested."""
        with QMutexLocker(self._mutex):
            return self._cancelled

    @property
    def result(self) -> Any:
        """DiffResult once completed, else None."""
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """(exception class name, message) once failed."""
        return self._error

    def cancel(self) -> None:
        """Request cancellation."""
        with QMutexLocker(self._mutex):
            self._cancelled = True
            if self._state == WorkerState.RUNNING:
                self._state = WorkerState.CANCELLING
        self.signals.state_changed.emit(WorkerState.CANCELLING)

    @pyqtSlot()
    def run(self) -> None:
        """Slot for `QThread.started`; subclasses implement `do_work` instead."""
        self.state = WorkerState.RUNNING
        self.signals.started.emit()

        try:
            result = self.do_work()
        except CancelledException:
            self._finish_cancelled()
            return
        except Exception as e:
            logger.exception("%s failed", type(self).__name__)
            self._error = (type(e).__name__, str(e))
            self.state = WorkerState.FAILED
            self.signals.error.emit(type(e).__name__, str(e))
            return

        if self.is_cancelled:
            self._finish_cancelled()
        else:
            self._result = result
            self.state = WorkerState.COMPLETED
            self.signals.finished.emit(result)

    def _finish_cancelled(self) -> None:
        self.state = WorkerState.CANCELLED
        self.signals.cancelled.emit()

    @abstractmethod
    def do_work(self) -> Any:
        """Produce the worker's DiffResult, calling `check_cancelled` between steps."""

    def report_progress(self, step: int, steps: int, label: str = "") -> None:
        self.signals.progress.emit(step, steps, label)

    def report_status(self, message: str) -> None:
        self.signals.status.emit(message)

    def check_cancelled(self) -> None:
        """Raise CancelledException if cancellation was requested."""
        if self.is_cancelled:
            raise CancelledException("Operation cancelled")


class CancelledException(Exception):
    """Raised when a worker is cancelled."""
    pass
