from typing import Any, Dict, Optional

from PySide6 import QtWidgets, QtCore

from core.errors import ValidationError
from core.utils import format_date, pause_duration_days
from models.client import Client


def _qdate_text(qd: QtCore.QDate) -> str:
    return qd.toString("yyyy-MM-dd")


class PauseDialog(QtWidgets.QDialog):
    """
    Dialog for pausing a client's membership.
    Shows the inclusive length of the pause live and refuses a reversed range.
    """
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, client: Optional[Client] = None):
        super().__init__(parent)
        self.setWindowTitle("⏸ Pause Membership")
        self.setFixedSize(420, 380)

        self.client = client
        self.result_data: Optional[Dict[str, Any]] = None  # date_from, date_to, reason

        self.init_ui()
        self.apply_style()
        self.update_preview()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setSpacing(15)

        # --- Header Info ---
        info_box = QtWidgets.QGroupBox("Client")
        ib_layout = QtWidgets.QVBoxLayout(info_box)
        name = self.client.full_name if self.client else "-"
        lbl_name = QtWidgets.QLabel(name)
        lbl_name.setStyleSheet("color: #aaa; font-weight: bold;")
        ib_layout.addWidget(lbl_name)
        if self.client and self.client.paused_from:
            lbl_prev = QtWidgets.QLabel(
                f"Current pause: {format_date(self.client.paused_from)} to {format_date(self.client.paused_to)}")
            lbl_prev.setStyleSheet("color: #888;")
            ib_layout.addWidget(lbl_prev)
        layout.addWidget(info_box)

        # --- Pause Form ---
        form_box = QtWidgets.QGroupBox("Pause Window")
        form = QtWidgets.QFormLayout(form_box)

        today = QtCore.QDate.currentDate()
        self.inp_from = QtWidgets.QDateEdit()
        self.inp_from.setCalendarPopup(True)
        self.inp_from.setDisplayFormat("yyyy-MM-dd")
        self.inp_from.setDate(today)
        self.inp_from.dateChanged.connect(self.update_preview)

        self.inp_to = QtWidgets.QDateEdit()
        self.inp_to.setCalendarPopup(True)
        self.inp_to.setDisplayFormat("yyyy-MM-dd")
        self.inp_to.setDate(today.addDays(6))
        self.inp_to.dateChanged.connect(self.update_preview)

        self.inp_reason = QtWidgets.QLineEdit()
        self.inp_reason.setPlaceholderText("Reason (optional)")

        form.addRow("From:", self.inp_from)
        form.addRow("To:", self.inp_to)
        form.addRow("Reason:", self.inp_reason)
        layout.addWidget(form_box)

        # --- Result Preview ---
        self.lbl_result = QtWidgets.QLabel("Duration: -")
        self.lbl_result.setAlignment(QtCore.Qt.AlignCenter)
        self.lbl_result.setWordWrap(True)
        self.lbl_result.setStyleSheet("font-size: 16px; font-weight: bold; color: #00ff00; margin: 10px;")
        layout.addWidget(self.lbl_result)

        # --- Buttons ---
        btn_layout = QtWidgets.QHBoxLayout()
        self.btn_save = QtWidgets.QPushButton("⏸ Confirm Pause")
        self.btn_save.setFixedHeight(40)
        self.btn_save.setStyleSheet("background: #006600; font-weight: bold;")
        self.btn_save.clicked.connect(self.save_and_close)

        btn_cancel = QtWidgets.QPushButton("Cancel")
        btn_cancel.setFixedHeight(40)
        btn_cancel.clicked.connect(self.reject)

        btn_layout.addWidget(self.btn_save)
        btn_layout.addWidget(btn_cancel)
        layout.addLayout(btn_layout)

    def update_preview(self) -> None:
        """Live inclusive duration; a reversed range disables the confirm button."""
        try:
            days = pause_duration_days(_qdate_text(self.inp_from.date()), _qdate_text(self.inp_to.date()))
        except ValidationError as e:
            self.lbl_result.setStyleSheet("font-size: 14px; font-weight: bold; color: #ff5252; margin: 10px;")
            self.lbl_result.setText(str(e))
            self.btn_save.setEnabled(False)
            return

        self.lbl_result.setStyleSheet("font-size: 16px; font-weight: bold; color: #00ff00; margin: 10px;")
        self.lbl_result.setText(f"Duration: {days} day{'s' if days != 1 else ''}")
        self.btn_save.setEnabled(True)

    def save_and_close(self) -> None:
        date_from = _qdate_text(self.inp_from.date())
        date_to = _qdate_text(self.inp_to.date())
        try:
            pause_duration_days(date_from, date_to)
        except ValidationError as e:
            QtWidgets.QMessageBox.warning(self, "Check the Dates", str(e))
            return

        self.result_data = {
            "date_from": date_from,
            "date_to": date_to,
            "reason": self.inp_reason.text().strip() or None,
        }
        self.accept()

    def apply_style(self) -> None:
        self.setStyleSheet("""
            QDialog { background: #1a1a1a; color: white; font-family: 'Segoe UI'; }
            QGroupBox { border: 1px solid #444; margin-top: 10px; padding-top: 15px; font-weight: bold; }
            QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 5px; }
            QLabel { color: white; }
            QDateEdit, QLineEdit { background: #222; color: white; border: 1px solid #555; padding: 5px; }
            QPushButton { background: #333; color: white; border: 1px solid #555; border-radius: 4px; }
            QPushButton:hover { background: #444; }
            QPushButton:disabled { color: #666; }
        """)
