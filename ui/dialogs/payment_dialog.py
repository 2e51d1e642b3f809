import datetime
from typing import Any, Dict, Optional

from PySide6 import QtWidgets, QtCore

from core.client_cache import ClientCache
from models.payment import PaymentDuration, PaymentMethod

DURATION_LABELS = {
    PaymentDuration.FIFTEEN_DAYS: "15 days",
    PaymentDuration.ONE_MONTH: "1 month (30 days)",
}


class PaymentDialog(QtWidgets.QDialog):
    """
    Collects a new payment: client, amount, date, billing period and method.
    The client list comes from the dashboard's cache, so no request is made here.
    """
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, cache: Optional[ClientCache] = None):
        super().__init__(parent)
        self.setWindowTitle("💰 Register Payment")
        self.setFixedSize(420, 400)

        self.cache = cache or ClientCache()
        self.result_data: Optional[Dict[str, Any]] = None

        self.init_ui()
        self.apply_style()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setSpacing(15)

        form_box = QtWidgets.QGroupBox("Payment Details")
        form = QtWidgets.QFormLayout(form_box)

        self.inp_client = QtWidgets.QComboBox()
        self.inp_client.addItem("Select client", None)
        for c in sorted(self.cache, key=lambda c: c.full_name.lower()):
            self.inp_client.addItem(f"{c.full_name} ({c.email})", c.id)

        self.inp_amount = QtWidgets.QDoubleSpinBox()
        self.inp_amount.setRange(0, 10_000_000)
        self.inp_amount.setDecimals(2)
        self.inp_amount.setPrefix("$ ")

        self.inp_date = QtWidgets.QDateEdit()
        self.inp_date.setCalendarPopup(True)
        self.inp_date.setDisplayFormat("yyyy-MM-dd")
        self.inp_date.setDate(QtCore.QDate.currentDate())

        self.inp_duration = QtWidgets.QComboBox()
        for d in PaymentDuration:
            self.inp_duration.addItem(DURATION_LABELS[d], d)
        self.inp_duration.setCurrentIndex(self.inp_duration.findData(PaymentDuration.ONE_MONTH))

        self.inp_method = QtWidgets.QComboBox()
        for m in PaymentMethod:
            self.inp_method.addItem(m.value.title(), m)

        form.addRow("Client:", self.inp_client)
        form.addRow("Amount:", self.inp_amount)
        form.addRow("Payment Date:", self.inp_date)
        form.addRow("Period:", self.inp_duration)
        form.addRow("Method:", self.inp_method)
        layout.addWidget(form_box)

        btn_layout = QtWidgets.QHBoxLayout()
        btn_save = QtWidgets.QPushButton("✅ Register")
        btn_save.setFixedHeight(40)
        btn_save.setStyleSheet("background: #006600; font-weight: bold;")
        btn_save.clicked.connect(self.save_and_close)

        btn_cancel = QtWidgets.QPushButton("Cancel")
        btn_cancel.setFixedHeight(40)
        btn_cancel.clicked.connect(self.reject)

        btn_layout.addWidget(btn_save)
        btn_layout.addWidget(btn_cancel)
        layout.addLayout(btn_layout)

    def save_and_close(self) -> None:
        client_id = self.inp_client.currentData()
        if client_id is None:
            QtWidgets.QMessageBox.warning(self, "Missing Data", "Please select a client.")
            return

        qd = self.inp_date.date()
        self.result_data = {
            "client_id": client_id,
            "amount": self.inp_amount.value(),
            "payment_date": datetime.date(qd.year(), qd.month(), qd.day()),
            "duration": self.inp_duration.currentData(),
            "method": self.inp_method.currentData(),
        }
        self.accept()

    def apply_style(self) -> None:
        self.setStyleSheet("""
            QDialog { background: #1a1a1a; color: white; font-family: 'Segoe UI'; }
            QGroupBox { border: 1px solid #444; margin-top: 10px; padding-top: 15px; font-weight: bold; }
            QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 5px; }
            QLabel { color: white; }
            QDateEdit, QComboBox, QDoubleSpinBox {
                background: #222; color: white; border: 1px solid #555; padding: 5px;
            }
            QPushButton { background: #333; color: white; border: 1px solid #555; border-radius: 4px; }
            QPushButton:hover { background: #444; }
        """)
