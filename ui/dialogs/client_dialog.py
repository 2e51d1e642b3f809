import datetime
from typing import Optional

from PySide6 import QtWidgets, QtCore

from core.errors import ValidationError
from models.client import Client
from services.client_service import validate_client


class ClientDialog(QtWidgets.QDialog):
    """
    Form for registering a new client or editing an existing one.
    The dialog only collects and validates the data; saving is left to the caller
    (the dashboard runs it on a SaveWorker).
    """
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, client: Optional[Client] = None):
        super().__init__(parent)
        self.client = client
        self.result_client: Optional[Client] = None

        editing = client is not None
        self.setWindowTitle("Edit Client" if editing else "New Client")
        self.setModal(True)
        self.setFixedSize(450, 560)

        self.init_ui()
        self.apply_style()
        if editing:
            self.load_client(client)

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(30, 30, 30, 30)
        layout.setSpacing(12)

        title = QtWidgets.QLabel("✏️ Edit Client" if self.client else "📝 New Client")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: bold; color: #ffcc00; margin-bottom: 10px;")
        layout.addWidget(title)

        self.first_name = QtWidgets.QLineEdit()
        self.first_name.setPlaceholderText("First name")
        self.last_name = QtWidgets.QLineEdit()
        self.last_name.setPlaceholderText("Last name")
        self.email = QtWidgets.QLineEdit()
        self.email.setPlaceholderText("name@example.com")
        self.phone = QtWidgets.QLineEdit()
        self.phone.setPlaceholderText("Optional")

        self.start_date = QtWidgets.QDateEdit()
        self.start_date.setCalendarPopup(True)
        self.start_date.setDisplayFormat("yyyy-MM-dd")
        self.start_date.setDate(QtCore.QDate.currentDate())

        self.active = QtWidgets.QCheckBox("Active")
        self.active.setChecked(True)

        self.notes = QtWidgets.QPlainTextEdit()
        self.notes.setPlaceholderText("Notes (optional)")
        self.notes.setFixedHeight(70)

        for w in (self.first_name, self.last_name, self.email, self.phone, self.start_date):
            w.setMinimumHeight(36)

        form = QtWidgets.QFormLayout()
        form.addRow("First Name:", self.first_name)
        form.addRow("Last Name:", self.last_name)
        form.addRow("Email:", self.email)
        form.addRow("Phone:", self.phone)
        form.addRow("Start Date:", self.start_date)
        form.addRow("", self.active)
        form.addRow("Notes:", self.notes)
        layout.addLayout(form)

        self.lbl_error = QtWidgets.QLabel("")
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setStyleSheet("color: #ff5252; font-size: 12px;")
        layout.addWidget(self.lbl_error)

        btn_save = QtWidgets.QPushButton("✓ Save Client")
        btn_save.setFixedHeight(45)
        btn_save.setCursor(QtCore.Qt.PointingHandCursor)
        btn_save.clicked.connect(self.do_save)
        layout.addWidget(btn_save)

    def load_client(self, client: Client) -> None:
        self.first_name.setText(client.first_name)
        self.last_name.setText(client.last_name)
        self.email.setText(client.email)
        self.phone.setText(client.phone or "")
        if client.start_date:
            d = client.start_date
            self.start_date.setDate(QtCore.QDate(d.year, d.month, d.day))
        self.active.setChecked(client.active)
        self.notes.setPlainText(client.notes or "")

    def collect(self) -> Client:
        """Builds a Client from the form, keeping fields the form doesn't edit."""
        qd = self.start_date.date()
        base = self.client
        return Client(
            id=base.id if base else None,
            first_name=self.first_name.text().strip(),
            last_name=self.last_name.text().strip(),
            email=self.email.text().strip(),
            phone=self.phone.text().strip(),
            active=self.active.isChecked(),
            start_date=datetime.date(qd.year(), qd.month(), qd.day()),
            paused_from=base.paused_from if base else None,
            paused_to=base.paused_to if base else None,
            pause_reason=base.pause_reason if base else None,
            notes=self.notes.toPlainText().strip() or None,
        )

    def do_save(self) -> None:
        client = self.collect()
        try:
            validate_client(client)
        except ValidationError as e:
            self.lbl_error.setText(str(e))
            return
        self.result_client = client
        self.accept()

    def apply_style(self) -> None:
        self.setStyleSheet("""
            QDialog { background: #0c0c0c; color: white; font-family: 'Segoe UI'; }
            QLabel, QCheckBox { color: white; font-size: 14px; }
            QLineEdit, QDateEdit, QPlainTextEdit {
                background: #1b1b1b; color: white; border: 1px solid #333;
                border-radius: 6px; padding: 5px; font-size: 13px;
            }
            QLineEdit:focus, QDateEdit:focus, QPlainTextEdit:focus { border: 1px solid #ffcc00; }
            QPushButton {
                background: #b71c1c; color: white; border-radius: 8px;
                font-weight: bold; font-size: 14px;
            }
            QPushButton:hover { background: #d32f2f; }
        """)
