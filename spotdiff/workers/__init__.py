"""
Background workers for non-blocking diff computation.

Provides QObject-based workers for:
- Comparing in-memory text
- Reading and comparing text files

All workers use Qt signals for thread-safe communication
with the UI thread.
"""

from spotdiff.workers.base_worker import (
    BaseWorker,
    CancelledException,
    WorkerSignals,
    WorkerState,
)
from spotdiff.workers.compare_worker import (
    TextCompareWorker,
    FileCompareWorker,
)

__all__ = [
    # Base
    'BaseWorker',
    'CancelledException',
    'WorkerSignals',
    'WorkerState',
    # Compare
    'TextCompareWorker',
    'FileCompareWorker',
]
