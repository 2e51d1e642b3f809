import sys
from typing import Optional

from PySide6 import QtWidgets, QtCore

from core.errors import ApiError, NetworkError, ValidationError
from core.session import ApiSession
from services.auth_service import login
from ui.dialogs.confirm_dialog import describe_error
from ui.dialogs.password_dialog import PasswordResetDialog
import config


class LoginDialog(QtWidgets.QDialog):
    """
    The login dialog shown at start-up and whenever the session expires.
    Stores the token on success; offers password recovery.
    """
    def __init__(self, session: ApiSession, notice: Optional[str] = None):
        super().__init__()
        self.session = session
        self.setWindowTitle(f"Login - {config.APP_NAME}")
        self.setModal(True)
        self.setFixedSize(500, 480)

        self.notice = notice

        self.init_ui()
        self.apply_style()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(30, 30, 30, 30)
        layout.setSpacing(15)

        # --- TITLE ---
        title_label = QtWidgets.QLabel(f"💪 {config.APP_NAME}")
        title_label.setAlignment(QtCore.Qt.AlignCenter)
        title_label.setStyleSheet("font-size: 32px; font-weight: bold; color: #ffcc00; margin-bottom: 10px;")
        layout.addWidget(title_label)

        subtitle = QtWidgets.QLabel("🔐 Login to Access the Admin Panel")
        subtitle.setAlignment(QtCore.Qt.AlignCenter)
        subtitle.setStyleSheet("font-size: 16px; color: #ffffff; margin-bottom: 10px;")
        layout.addWidget(subtitle)

        server = QtWidgets.QLabel(f"Server: {config.API_BASE_URL}")
        server.setAlignment(QtCore.Qt.AlignCenter)
        server.setStyleSheet("font-size: 12px; color: #888;")
        layout.addWidget(server)

        # --- FORM ---
        form_layout = QtWidgets.QFormLayout()
        form_layout.setVerticalSpacing(15)

        self.email = QtWidgets.QLineEdit()
        self.email.setPlaceholderText("Enter email")
        self.email.setMinimumHeight(45)

        self.passwd = QtWidgets.QLineEdit()
        self.passwd.setPlaceholderText("Enter password")
        self.passwd.setEchoMode(QtWidgets.QLineEdit.Password)
        self.passwd.setMinimumHeight(45)
        self.passwd.returnPressed.connect(self.do_login)

        form_layout.addRow(QtWidgets.QLabel("Email:"), self.email)
        form_layout.addRow(QtWidgets.QLabel("Password:"), self.passwd)
        layout.addLayout(form_layout)

        # Inline error / session notice
        self.lbl_error = QtWidgets.QLabel(self.notice or "")
        self.lbl_error.setAlignment(QtCore.Qt.AlignCenter)
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setStyleSheet("color: #ff5252; font-size: 13px;")
        layout.addWidget(self.lbl_error)

        # Login Button
        self.btn_login = QtWidgets.QPushButton("🔐 Login")
        self.btn_login.setFixedHeight(50)
        self.btn_login.clicked.connect(self.do_login)
        self.btn_login.setCursor(QtCore.Qt.PointingHandCursor)
        layout.addWidget(self.btn_login)

        # Password recovery
        self.btn_forgot = QtWidgets.QPushButton("🔑 Forgot your password?")
        self.btn_forgot.setFixedHeight(30)
        self.btn_forgot.setCursor(QtCore.Qt.PointingHandCursor)
        self.btn_forgot.clicked.connect(self.open_recovery)
        self.btn_forgot.setStyleSheet(
            "background: transparent; color: #888; border: none; font-size: 13px; text-decoration: underline;")
        layout.addWidget(self.btn_forgot)

        layout.addStretch()

        # --- EXIT BUTTON ---
        exit_layout = QtWidgets.QHBoxLayout()
        exit_layout.addStretch()
        self.btn_exit = QtWidgets.QPushButton("🚪 Exit")
        self.btn_exit.setFixedSize(120, 40)
        self.btn_exit.clicked.connect(self.do_exit)
        exit_layout.addWidget(self.btn_exit)
        exit_layout.addStretch()
        layout.addLayout(exit_layout)

    def apply_style(self) -> None:
        self.setStyleSheet("""
            QDialog { background: #0c0c0c; color: #ffffff; font-family: 'Segoe UI'; }
            QLabel { color: #ffffff; font-size: 14px; }
            QLineEdit {
                background: #1b1b1b; color: #ffffff; border: 1px solid #333;
                border-radius: 6px; padding: 10px; font-size: 14px;
            }
            QLineEdit:focus { border: 1px solid #ffcc00; }
            QPushButton {
                background: #b71c1c; color: #ffffff; border-radius: 8px;
                font-weight: bold; font-size: 15px; border: none;
            }
            QPushButton:hover { background: #d32f2f; }
        """)

    def do_login(self) -> None:
        self.lbl_error.setText("")
        try:
            login(self.session, self.email.text(), self.passwd.text())
        except (ValidationError, ApiError, NetworkError) as e:
            self.lbl_error.setText(describe_error(e))
            return
        self.accept()

    def open_recovery(self) -> None:
        dlg = PasswordResetDialog(self.session, self, email=self.email.text().strip())
        dlg.exec()

    def do_exit(self) -> None:
        sys.exit(0)
