from typing import Any, Callable

from PySide6 import QtCore


class WorkerSignals(QtCore.QObject):
    """
    Defines the signals available from a running worker thread.

    Attributes:
        finished (object): Emitted with the task result when the task is done.
        error (object): Emitted with the exception if the task fails.
    """
    finished = QtCore.Signal(object)
    error = QtCore.Signal(object)


class ReportWorker(QtCore.QRunnable):
    """
    Background worker that runs one backend call (a report, the brief, a client action...).
    Prevents the UI from freezing while waiting on the backend.

    Args:
        task (callable): Function to run, e.g. report_service.expiring_report.
        *args, **kwargs: Forwarded to the task.
    """
    def __init__(self, task: Callable[..., Any], *args: Any, **kwargs: Any):
        super().__init__()
        self.task = task
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            result = self.task(*self.args, **self.kwargs)
            self.signals.finished.emit(result)
        except Exception as e:
            self.signals.error.emit(e)
