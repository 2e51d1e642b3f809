from typing import Optional

from PySide6 import QtWidgets, QtCore

from core.errors import ApiError, NetworkError, SessionExpiredError, ValidationError
from core.session import ApiSession
from services.auth_service import (
    change_password, confirm_password_reset, request_password_reset,
    validate_reset_token, PASSWORD_RULE_MESSAGE
)
from ui.dialogs.confirm_dialog import describe_error

DIALOG_STYLE = """
    QDialog { background: #0c0c0c; color: #ffffff; font-family: 'Segoe UI'; }
    QLabel { color: #ffffff; font-size: 14px; }
    QLineEdit {
        background: #1b1b1b; color: #ffffff; border: 1px solid #333;
        border-radius: 6px; padding: 8px; font-size: 13px;
    }
    QPushButton {
        background: #b71c1c; color: #ffffff; border-radius: 8px;
        padding: 10px 20px; font-weight: bold; font-size: 14px;
    }
    QPushButton:hover { background: #ffcc00; color: #111; }
"""


class ChangePasswordDialog(QtWidgets.QDialog):
    """
    Lets the logged-in admin change their password.
    An expired session is reported inline instead of jumping to the login screen,
    so what was typed here isn't lost.
    """
    def __init__(self, session: ApiSession, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.session = session
        self.setWindowTitle("Change Password")
        self.setModal(True)
        self.setFixedSize(450, 300)

        self.init_ui()
        self.setStyleSheet(DIALOG_STYLE)

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        title = QtWidgets.QLabel("🔐 Change Password")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: bold; margin: 10px;")
        layout.addWidget(title)

        form = QtWidgets.QFormLayout()
        self.current = QtWidgets.QLineEdit()
        self.current.setEchoMode(QtWidgets.QLineEdit.Password)
        self.passwd = QtWidgets.QLineEdit()
        self.passwd.setEchoMode(QtWidgets.QLineEdit.Password)
        self.passwd.setToolTip(PASSWORD_RULE_MESSAGE)
        self.passwd2 = QtWidgets.QLineEdit()
        self.passwd2.setEchoMode(QtWidgets.QLineEdit.Password)

        form.addRow("Current Password:", self.current)
        form.addRow("New Password:", self.passwd)
        form.addRow("Confirm Password:", self.passwd2)
        layout.addLayout(form)

        self.lbl_msg = QtWidgets.QLabel("")
        self.lbl_msg.setWordWrap(True)
        self.lbl_msg.setStyleSheet("color: #ff5252; font-size: 12px;")
        layout.addWidget(self.lbl_msg)

        btn = QtWidgets.QPushButton("✓ Update Password")
        btn.setFixedHeight(40)
        btn.clicked.connect(self.do_change)
        layout.addWidget(btn)

    def do_change(self) -> None:
        if self.passwd.text() != self.passwd2.text():
            self.lbl_msg.setText("Passwords do not match.")
            return
        try:
            change_password(self.session, self.current.text(), self.passwd.text())
        except SessionExpiredError as e:
            self.lbl_msg.setText(e.message)
            return
        except (ValidationError, ApiError, NetworkError) as e:
            self.lbl_msg.setText(describe_error(e))
            return

        QtWidgets.QMessageBox.information(self, "Success", "Password updated.")
        self.accept()


class PasswordResetDialog(QtWidgets.QDialog):
    """
    Two-step password recovery:
    1. Request a reset email.
    2. Paste the emailed token and choose a new password.
    """
    def __init__(self, session: ApiSession, parent: Optional[QtWidgets.QWidget] = None, email: str = ""):
        super().__init__(parent)
        self.session = session
        self.setWindowTitle("Password Recovery")
        self.setModal(True)
        self.setFixedSize(480, 420)

        self.init_ui(email)
        self.setStyleSheet(DIALOG_STYLE)

    def init_ui(self, email: str) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        # Step 1
        step1 = QtWidgets.QGroupBox("1. Request a recovery email")
        f1 = QtWidgets.QFormLayout(step1)
        self.email = QtWidgets.QLineEdit(email)
        self.email.setPlaceholderText("Account email")
        btn_req = QtWidgets.QPushButton("📧 Send Instructions")
        btn_req.clicked.connect(self.do_request)
        f1.addRow("Email:", self.email)
        f1.addRow(btn_req)
        layout.addWidget(step1)

        # Step 2
        step2 = QtWidgets.QGroupBox("2. Set a new password")
        f2 = QtWidgets.QFormLayout(step2)
        self.token = QtWidgets.QLineEdit()
        self.token.setPlaceholderText("Token from the email")
        self.passwd = QtWidgets.QLineEdit()
        self.passwd.setEchoMode(QtWidgets.QLineEdit.Password)
        self.passwd.setToolTip(PASSWORD_RULE_MESSAGE)
        self.passwd2 = QtWidgets.QLineEdit()
        self.passwd2.setEchoMode(QtWidgets.QLineEdit.Password)
        btn_conf = QtWidgets.QPushButton("✓ Reset Password")
        btn_conf.clicked.connect(self.do_confirm)
        f2.addRow("Token:", self.token)
        f2.addRow("New Password:", self.passwd)
        f2.addRow("Confirm:", self.passwd2)
        f2.addRow(btn_conf)
        layout.addWidget(step2)

        self.lbl_msg = QtWidgets.QLabel("")
        self.lbl_msg.setWordWrap(True)
        self.lbl_msg.setStyleSheet("font-size: 12px;")
        layout.addWidget(self.lbl_msg)

    def _show(self, text: str, ok: bool) -> None:
        self.lbl_msg.setStyleSheet(f"font-size: 12px; color: {'#00e676' if ok else '#ff5252'};")
        self.lbl_msg.setText(text)

    def do_request(self) -> None:
        try:
            msg = request_password_reset(self.session, self.email.text())
        except (ValidationError, ApiError, NetworkError) as e:
            self._show(describe_error(e), False)
            return
        self._show(msg, True)

    def do_confirm(self) -> None:
        if self.passwd.text() != self.passwd2.text():
            self._show("Passwords do not match.", False)
            return
        try:
            if not validate_reset_token(self.session, self.token.text()):
                self._show("The token is invalid or has expired. Please request a new one.", False)
                return
            msg = confirm_password_reset(self.session, self.token.text(), self.passwd.text())
        except (ValidationError, ApiError, NetworkError) as e:
            self._show(describe_error(e), False)
            return

        QtWidgets.QMessageBox.information(self, "Success", msg)
        self.accept()
