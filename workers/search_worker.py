from PySide6 import QtCore

from core.session import ApiSession
from models.filters import ClientFilters, PaymentFilters
from services.client_service import list_clients
from services.payment_service import load_payments


class WorkerSignals(QtCore.QObject):
    """
    Defines signals for the list search workers.

    Attributes:
        finished (int, object): Emitted with the request id and the loaded result.
        error (int, object): Emitted with the request id and the raised exception.
    """
    finished = QtCore.Signal(int, object)
    error = QtCore.Signal(int, object)


class ClientSearchWorker(QtCore.QRunnable):
    """
    Background worker that loads the client list for a set of filters.
    The request id lets the dashboard discard results of superseded searches.
    """
    def __init__(self, request_id: int, session: ApiSession, filters: ClientFilters):
        super().__init__()
        self.request_id = request_id
        self.session = session
        self.filters = filters
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            clients = list_clients(self.session, self.filters)
            self.signals.finished.emit(self.request_id, clients)
        except Exception as e:
            self.signals.error.emit(self.request_id, e)


class PaymentSearchWorker(QtCore.QRunnable):
    """
    Background worker that loads (and, for several clients, aggregates) payments.
    """
    def __init__(self, request_id: int, session: ApiSession, filters: PaymentFilters):
        super().__init__()
        self.request_id = request_id
        self.session = session
        self.filters = filters
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            page = load_payments(self.session, self.filters)
            self.signals.finished.emit(self.request_id, page)
        except Exception as e:
            self.signals.error.emit(self.request_id, e)
