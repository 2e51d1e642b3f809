import logging
import sys
from typing import List, Optional

from PySide6 import QtWidgets, QtCore

from core.session import ApiSession
from services.auth_service import is_logged_in, logout
from services.file_manager import load_or_setup_server, load_token
from ui.dialogs.login_dialog import LoginDialog
from ui.dashboards.admin_dashboard import AdminDashboard
import config

logger = logging.getLogger(__name__)

SESSION_EXPIRED_NOTICE = "Your session has expired. Please log in again."


class GymAdminApp(QtWidgets.QApplication):
    """
    The main Application class that manages the application lifecycle.
    1. Resolves the backend address.
    2. Builds the API session shared by every screen.
    3. Handles Login (skipped when a token is already stored).
    4. Launches the Dashboard and sends the user back to Login on logout or a 401.
    """
    # Emitted by the session on an unsuppressed 401, possibly from a worker thread.
    # Always delivered queued, so the handler runs after the failing call has unwound.
    session_expired = QtCore.Signal()

    def __init__(self, args: List[str]):
        super().__init__(args)
        self.main_window: Optional[QtWidgets.QMainWindow] = None
        self.session: Optional[ApiSession] = None
        self._handling_expiry = False
        self.session_expired.connect(self.on_session_expired, QtCore.Qt.QueuedConnection)

    def start(self) -> None:
        """Initializes the environment and shows the first screen."""
        # 1. Backend address
        load_or_setup_server()

        # 2. Session gateway
        self.session = ApiSession(
            config.API_BASE_URL,
            token_loader=load_token,
            on_unauthorized=self.session_expired.emit,
        )
        logger.info("Using backend %s", config.API_BASE_URL)

        # 3. Reuse a stored token, otherwise ask for credentials
        if is_logged_in():
            self.show_dashboard()
        else:
            self.show_login()

    def show_login(self, notice: Optional[str] = None) -> None:
        """Displays the login dialog and opens the dashboard on success."""
        dlg = LoginDialog(self.session, notice=notice)
        if dlg.exec() != QtWidgets.QDialog.Accepted:
            # User closed the login window without logging in
            sys.exit(0)
        self.show_dashboard()

    def show_dashboard(self) -> None:
        self.main_window = AdminDashboard(self.session)
        self.main_window.logout_signal.connect(self.on_logout)
        self.main_window.show()

    def close_dashboard(self) -> None:
        if self.main_window:
            self.main_window.close()
            self.main_window.deleteLater()
            self.main_window = None

    def on_logout(self) -> None:
        """Closes the current dashboard and re-opens the login screen."""
        logout()
        self.close_dashboard()
        self.show_login()

    def on_session_expired(self) -> None:
        """
        Several requests in flight can all come back 401;
        only the first one sends the user to the login screen.
        """
        if self._handling_expiry:
            return
        self._handling_expiry = True
        try:
            logger.warning("Session expired, returning to login")
            logout()
            self.close_dashboard()
            self.show_login(SESSION_EXPIRED_NOTICE)
        finally:
            self._handling_expiry = False
