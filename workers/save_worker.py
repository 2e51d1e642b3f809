from PySide6 import QtCore

from core.session import ApiSession
from models.client import Client
from services.client_service import create_client, update_client


class WorkerSignals(QtCore.QObject):
    """
    Defines the signals available from a running worker thread.

    Attributes:
        finished (object): Emitted with the saved Client when successful.
        error (object): Emitted with the exception if saving fails.
    """
    finished = QtCore.Signal(object)
    error = QtCore.Signal(object)


class SaveWorker(QtCore.QRunnable):
    """
    Background worker that sends a client form to the backend.
    Creates the client when it has no id yet, updates it otherwise.
    """
    def __init__(self, session: ApiSession, client: Client):
        super().__init__()
        self.session = session
        self.client = client
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            if self.client.id is None:
                saved = create_client(self.session, self.client)
            else:
                saved = update_client(self.session, self.client)
            self.signals.finished.emit(saved)
        except Exception as e:
            self.signals.error.emit(e)
