import datetime
import logging
from typing import Any, Callable, List, Optional, Sequence

from PySide6 import QtWidgets, QtCore

from core.actions import ActionDispatcher, ClientAction, actions_for
from core.client_cache import ClientCache
from core.errors import SessionExpiredError, ValidationError
from core.filters import resolve_client_filters, resolve_payment_filters
from core.sequencer import RequestSequencer
from core.session import ApiSession
from core.status import MembershipStatus, derived_status
from core.utils import format_date
from models.client import Client
from models.payment import Payment, PaymentPage, PaymentState

# Workers
from workers.save_worker import SaveWorker
from workers.search_worker import ClientSearchWorker, PaymentSearchWorker
from workers.report_worker import ReportWorker

# Services
from services.auth_service import welcome_text
from services.client_service import activate_client, deactivate_client, pause_client, resume_client
from services.payment_service import PaymentVoidFlow, register_payment
from services.pdf_service import export_rows_pdf
from services.report_service import build_brief, cashflow, expiring_report, overdue_report

# Dialogs
from ui.dialogs.client_dialog import ClientDialog
from ui.dialogs.confirm_dialog import confirm, show_error
from ui.dialogs.password_dialog import ChangePasswordDialog
from ui.dialogs.pause_dialog import PauseDialog
from ui.dialogs.payment_dialog import PaymentDialog
import config

logger = logging.getLogger(__name__)

TABLE_STYLE = (
    "QHeaderView::section { background-color: #333; color: white; padding: 5px; } "
    "QTableWidget { gridline-color: #444; }"
)

STATUS_BADGES = {
    MembershipStatus.ACTIVE: ("✅ ACTIVE", "green"),
    MembershipStatus.PAUSED: ("⏸ PAUSED", "orange"),
    MembershipStatus.INACTIVE: ("❌ INACTIVE", "#b71c1c"),
}

ACTION_BUTTONS = {
    ClientAction.EDIT: ("✏️ Edit", "#0044cc"),
    ClientAction.PAUSE: ("⏸ Pause", "#d4af37"),
    ClientAction.RESUME: ("▶ Resume", "#006600"),
    ClientAction.ACTIVATE: ("✅ Activate", "#006600"),
    ClientAction.DEACTIVATE: ("🚫 Deactivate", "#500"),
}

PAYMENT_HEADERS = ["ID", "Client", "Date", "Expires", "Amount", "Method", "State"]


def _date_of(edit: QtWidgets.QDateEdit) -> datetime.date:
    qd = edit.date()
    return datetime.date(qd.year(), qd.month(), qd.day())


def _date_edit(value: QtCore.QDate) -> QtWidgets.QDateEdit:
    d = QtWidgets.QDateEdit()
    d.setCalendarPopup(True)
    d.setDisplayFormat("yyyy-MM-dd")
    d.setDate(value)
    return d


def _table(headers: Sequence[str]) -> QtWidgets.QTableWidget:
    t = QtWidgets.QTableWidget()
    t.setColumnCount(len(headers))
    t.setHorizontalHeaderLabels(list(headers))
    t.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
    t.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
    t.setStyleSheet(TABLE_STYLE)
    return t


class AdminDashboard(QtWidgets.QMainWindow):
    """
    The main administration window.
    Handles Clients (search, edit, pause, activate), Payments (search, register, void)
    and Reports (expiring, overdue, cashflow, PDF export).
    """
    logout_signal = QtCore.Signal()

    def __init__(self, session: ApiSession):
        super().__init__()
        self.session = session
        self.setWindowTitle(f"💪 {config.APP_NAME} - Admin Dashboard")
        self.resize(1400, 900)

        # ThreadPool for background tasks (Search, Save, etc.)
        self.pool = QtCore.QThreadPool()
        self.pool.setMaxThreadCount(4)

        self.cache = ClientCache()
        self.client_seq = RequestSequencer()
        self.payment_seq = RequestSequencer()
        self.report_seq = RequestSequencer()

        self.payments: List[Payment] = []
        self.report_title = ""
        self.report_headers: List[str] = []
        self.report_rows: List[List[Any]] = []

        self.dispatcher = ActionDispatcher()
        self.dispatcher.register(ClientAction.EDIT, self.edit_client)
        self.dispatcher.register(ClientAction.PAUSE, self.pause_client)
        self.dispatcher.register(ClientAction.RESUME, self.resume_client)
        self.dispatcher.register(ClientAction.ACTIVATE, self.activate_client)
        self.dispatcher.register(ClientAction.DEACTIVATE, self.deactivate_client)

        self.init_ui()
        self.apply_style()

        QtCore.QTimer.singleShot(0, self.load_clients)

    def init_ui(self) -> None:
        cw = QtWidgets.QWidget()
        self.setCentralWidget(cw)
        layout = QtWidgets.QHBoxLayout(cw)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- SIDEBAR ---
        sidebar = QtWidgets.QVBoxLayout()
        sidebar.setContentsMargins(10, 10, 10, 10)
        sidebar.addWidget(QtWidgets.QLabel("💪 ADMIN PANEL"))
        self.lbl_welcome = QtWidgets.QLabel(welcome_text())
        self.lbl_welcome.setWordWrap(True)
        self.lbl_welcome.setStyleSheet("color:#fc0")
        sidebar.addWidget(self.lbl_welcome)
        sidebar.addSpacing(10)

        # Navigation Buttons
        self.b_cli = QtWidgets.QPushButton("👤 Clients")
        self.b_pay = QtWidgets.QPushButton("💰 Payments")
        self.b_rep = QtWidgets.QPushButton("📊 Reports")

        for b in (self.b_cli, self.b_pay, self.b_rep):
            b.setMinimumHeight(40)
            b.setCursor(QtCore.Qt.PointingHandCursor)
            sidebar.addWidget(b)

        sidebar.addSpacing(15)
        self.b_brief = QtWidgets.QPushButton("📄 Daily Brief")
        self.b_brief.clicked.connect(self.show_brief)
        sidebar.addWidget(self.b_brief)

        self.b_pwd = QtWidgets.QPushButton("🔐 Change Password")
        self.b_pwd.clicked.connect(self.change_password)
        sidebar.addWidget(self.b_pwd)

        sidebar.addStretch()
        self.b_out = QtWidgets.QPushButton("🚪 Logout")
        self.b_out.clicked.connect(self.logout)
        sidebar.addWidget(self.b_out)

        sw = QtWidgets.QWidget()
        sw.setLayout(sidebar)
        sw.setMaximumWidth(250)
        sw.setStyleSheet("border-right:2px solid #333;background:#111")
        layout.addWidget(sw)

        # --- CONTENT AREA (Stacked Widget) ---
        self.stacked = QtWidgets.QStackedWidget()
        layout.addWidget(self.stacked, 1)

        self.p_cli = QtWidgets.QWidget()
        self.init_client_page()
        self.stacked.addWidget(self.p_cli)

        self.p_pay = QtWidgets.QWidget()
        self.init_payment_page()
        self.stacked.addWidget(self.p_pay)

        self.p_rep = QtWidgets.QWidget()
        self.init_report_page()
        self.stacked.addWidget(self.p_rep)

        # Navigation Signals
        self.b_cli.clicked.connect(lambda: [self.stacked.setCurrentWidget(self.p_cli), self.load_clients()])
        self.b_pay.clicked.connect(lambda: [self.stacked.setCurrentWidget(self.p_pay), self.load_payments()])
        self.b_rep.clicked.connect(lambda: self.stacked.setCurrentWidget(self.p_rep))

    # --- BACKGROUND TASKS ---
    def run_task(self, task: Callable[..., Any], *args: Any,
                 on_done: Optional[Callable[[Any], None]] = None, **kwargs: Any) -> None:
        """Runs a service call on the pool and reports failures with a message box."""
        w = ReportWorker(task, *args, **kwargs)
        if on_done:
            w.signals.finished.connect(on_done)
        w.signals.error.connect(self.task_failed)
        self.pool.start(w)

    def task_failed(self, e: Exception) -> None:
        # The application already sends the user back to the login screen.
        if isinstance(e, SessionExpiredError):
            return
        logger.warning("Background task failed: %s", e)
        show_error(self, e)

    # --- CLIENTS ---
    def init_client_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_cli)
        layout.addWidget(QtWidgets.QLabel("👤 Search, Edit or Pause Clients"))

        bar = QtWidgets.QHBoxLayout()
        self.cli_q = QtWidgets.QLineEdit()
        self.cli_q.setPlaceholderText("Name, email or phone")
        self.cli_q.returnPressed.connect(self.load_clients)

        self.cli_active = QtWidgets.QComboBox()
        self.cli_active.addItems(["All", "Active", "Inactive"])

        self.cli_payment = QtWidgets.QComboBox()
        self.cli_payment.addItems(["Payment: All", "Payment: Up to date", "Payment: Expired", "Payment: Voided"])

        b_src = QtWidgets.QPushButton("🔍 Search")
        b_src.setStyleSheet("background:#0044cc;font-weight:bold")
        b_src.clicked.connect(self.load_clients)

        b_new = QtWidgets.QPushButton("➕ New Client")
        b_new.setStyleSheet("background:#006600;font-weight:bold")
        b_new.clicked.connect(self.new_client)

        bar.addWidget(self.cli_q, 2)
        bar.addWidget(self.cli_active)
        bar.addWidget(self.cli_payment)
        bar.addWidget(b_src)
        bar.addWidget(b_new)
        layout.addLayout(bar)

        self.cli_state = QtWidgets.QLabel("")
        self.cli_state.setAlignment(QtCore.Qt.AlignCenter)
        self.cli_state.setStyleSheet("color:#aaa;padding:5px")
        layout.addWidget(self.cli_state)

        self.cli_table = _table(["ID", "Name", "Email", "Phone", "Status", "Actions"])
        self.cli_table.horizontalHeader().setSectionResizeMode(5, QtWidgets.QHeaderView.ResizeToContents)
        layout.addWidget(self.cli_table)

    def load_clients(self) -> None:
        filters = resolve_client_filters({
            "q": self.cli_q.text(),
            "active": self.cli_active.currentText(),
            "payment": self.cli_payment.currentText(),
        })
        rid = self.client_seq.next()
        self.cli_state.setText("Loading...")

        w = ClientSearchWorker(rid, self.session, filters)
        w.signals.finished.connect(self._clients_loaded)
        w.signals.error.connect(self._clients_failed)
        self.pool.start(w)

    def _clients_loaded(self, rid: int, clients: List[Client]) -> None:
        if not self.client_seq.is_current(rid):
            logger.debug("Dropping stale client list #%d", rid)
            return
        self.cache.replace(clients)
        self.render_clients(clients)
        self.cli_state.setText("No results." if not clients else f"{len(clients)} client(s)")

    def _clients_failed(self, rid: int, e: Exception) -> None:
        if not self.client_seq.is_current(rid):
            return
        self.cli_table.setRowCount(0)
        self.cli_state.setText("Could not load clients.")
        self.task_failed(e)

    def render_clients(self, clients: List[Client]) -> None:
        self.cli_table.setRowCount(0)
        for i, c in enumerate(clients):
            self.cli_table.insertRow(i)
            self.cli_table.setItem(i, 0, QtWidgets.QTableWidgetItem(str(c.id)))
            self.cli_table.setItem(i, 1, QtWidgets.QTableWidgetItem(c.full_name))
            self.cli_table.setItem(i, 2, QtWidgets.QTableWidgetItem(c.email))
            self.cli_table.setItem(i, 3, QtWidgets.QTableWidgetItem(c.phone or "-"))

            # Badge Color Logic
            text, color = STATUS_BADGES[derived_status(c)]
            badge = QtWidgets.QLabel(text)
            badge.setAlignment(QtCore.Qt.AlignCenter)
            badge.setStyleSheet(f"background:{color};color:white;font-weight:bold;padding:3px")
            if c.paused_from:
                badge.setToolTip(f"Paused {format_date(c.paused_from)} to {format_date(c.paused_to)}"
                                 + (f"\n{c.pause_reason}" if c.pause_reason else ""))
            self.cli_table.setCellWidget(i, 4, badge)

            w = QtWidgets.QWidget()
            h = QtWidgets.QHBoxLayout(w)
            h.setContentsMargins(0, 0, 0, 0)
            for action in actions_for(c.active):
                label, bg = ACTION_BUTTONS[action]
                b = QtWidgets.QPushButton(label)
                b.setStyleSheet(f"background:{bg};font-size:11px;padding:4px")
                b.clicked.connect(lambda checked=False, a=action, x=c.id: self.dispatcher.dispatch(a, x))
                h.addWidget(b)
            self.cli_table.setCellWidget(i, 5, w)

    def new_client(self) -> None:
        dlg = ClientDialog(self)
        if dlg.exec() == QtWidgets.QDialog.Accepted:
            self.save_client(dlg.result_client)

    def edit_client(self, client_id: int) -> None:
        client = self.cache.get(client_id)
        if client is None:
            QtWidgets.QMessageBox.warning(self, "Error", f"Client #{client_id} is not loaded.")
            return
        dlg = ClientDialog(self, client)
        if dlg.exec() == QtWidgets.QDialog.Accepted:
            self.save_client(dlg.result_client)

    def save_client(self, client: Client) -> None:
        w = SaveWorker(self.session, client)
        w.signals.finished.connect(self._client_saved)
        w.signals.error.connect(self.task_failed)
        self.pool.start(w)

    def _client_saved(self, client: Client) -> None:
        QtWidgets.QMessageBox.information(self, "Success", f"Saved: {client.full_name}")
        self.load_clients()

    def pause_client(self, client_id: int) -> None:
        dlg = PauseDialog(self, self.cache.get(client_id))
        if dlg.exec() != QtWidgets.QDialog.Accepted:
            return
        data = dlg.result_data
        self.run_task(pause_client, self.session, client_id, data["date_from"], data["date_to"], data["reason"],
                      on_done=lambda _: self.load_clients())

    def resume_client(self, client_id: int) -> None:
        name = self.cache.display_name(client_id)
        if confirm(self, "Confirm Resume", f"Resume the membership of {name}?"):
            self.run_task(resume_client, self.session, client_id, on_done=lambda _: self.load_clients())

    def activate_client(self, client_id: int) -> None:
        name = self.cache.display_name(client_id)
        if confirm(self, "Confirm Activation", f"Activate {name}?"):
            self.run_task(activate_client, self.session, client_id, on_done=lambda _: self.load_clients())

    def deactivate_client(self, client_id: int) -> None:
        name = self.cache.display_name(client_id)
        if confirm(self, "Confirm Deactivation", f"Deactivate {name}?"):
            self.run_task(deactivate_client, self.session, client_id, on_done=lambda _: self.load_clients())

    # --- PAYMENTS ---
    def init_payment_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_pay)
        layout.addWidget(QtWidgets.QLabel("💰 Payments"))

        bar = QtWidgets.QHBoxLayout()
        self.pay_client = QtWidgets.QLineEdit()
        self.pay_client.setPlaceholderText("Client name, email or ID")
        self.pay_client.returnPressed.connect(self.load_payments)

        today = QtCore.QDate.currentDate()
        self.pay_range = QtWidgets.QCheckBox("Date range")
        self.pay_from = _date_edit(today.addMonths(-1))
        self.pay_to = _date_edit(today)

        self.pay_state = QtWidgets.QComboBox()
        self.pay_state.addItems(["All", "Up to date", "Expired", "Voided"])

        b_src = QtWidgets.QPushButton("🔍 Search")
        b_src.setStyleSheet("background:#0044cc;font-weight:bold")
        b_src.clicked.connect(self.load_payments)

        bar.addWidget(self.pay_client, 2)
        bar.addWidget(self.pay_range)
        bar.addWidget(self.pay_from)
        bar.addWidget(self.pay_to)
        bar.addWidget(self.pay_state)
        bar.addWidget(b_src)
        layout.addLayout(bar)

        actions = QtWidgets.QHBoxLayout()
        b_new = QtWidgets.QPushButton("➕ Register Payment")
        b_new.setStyleSheet("background:#006600;font-weight:bold")
        b_new.clicked.connect(self.new_payment)
        b_pdf = QtWidgets.QPushButton("📄 Export PDF")
        b_pdf.clicked.connect(self.export_payments)
        actions.addWidget(b_new)
        actions.addWidget(b_pdf)
        actions.addStretch()
        layout.addLayout(actions)

        self.pay_state_lbl = QtWidgets.QLabel("")
        self.pay_state_lbl.setAlignment(QtCore.Qt.AlignCenter)
        self.pay_state_lbl.setStyleSheet("color:#aaa;padding:5px")
        layout.addWidget(self.pay_state_lbl)

        self.pay_table = _table(PAYMENT_HEADERS + ["Action"])
        layout.addWidget(self.pay_table)

    def load_payments(self) -> None:
        use_range = self.pay_range.isChecked()
        try:
            filters = resolve_payment_filters(
                self.pay_client.text(),
                _date_of(self.pay_from) if use_range else None,
                _date_of(self.pay_to) if use_range else None,
                self.pay_state.currentText(),
                self.cache,
            )
        except ValidationError as e:
            show_error(self, e)
            return

        rid = self.payment_seq.next()
        self.pay_state_lbl.setText("Loading...")

        w = PaymentSearchWorker(rid, self.session, filters)
        w.signals.finished.connect(self._payments_loaded)
        w.signals.error.connect(self._payments_failed)
        self.pool.start(w)

    def _payments_loaded(self, rid: int, page: PaymentPage) -> None:
        if not self.payment_seq.is_current(rid):
            logger.debug("Dropping stale payment list #%d", rid)
            return
        self.payments = page.items
        self.render_payments(page.items)
        if not page.items:
            self.pay_state_lbl.setText("No results.")
        else:
            self.pay_state_lbl.setText(f"Showing {len(page.items)} of {page.total} payment(s)")

    def _payments_failed(self, rid: int, e: Exception) -> None:
        if not self.payment_seq.is_current(rid):
            return
        self.payments = []
        self.pay_table.setRowCount(0)
        self.pay_state_lbl.setText("Could not load payments.")
        self.task_failed(e)

    def payment_row(self, p: Payment) -> List[str]:
        return [
            str(p.id),
            p.client_name or self.cache.display_name(p.client_id),
            format_date(p.payment_date),
            format_date(p.expiration_date),
            f"{p.amount:.2f}",
            p.method or "-",
            p.state or "-",
        ]

    def render_payments(self, payments: List[Payment]) -> None:
        self.pay_table.setRowCount(0)
        for i, p in enumerate(payments):
            self.pay_table.insertRow(i)
            for col, value in enumerate(self.payment_row(p)):
                self.pay_table.setItem(i, col, QtWidgets.QTableWidgetItem(value))

            if p.voided or p.state == PaymentState.VOIDED.value:
                self.pay_table.setCellWidget(i, len(PAYMENT_HEADERS), QtWidgets.QLabel("(Voided)"))
            else:
                b = QtWidgets.QPushButton("🗑️ Void")
                b.setStyleSheet("background: #b71c1c; font-size:11px;")
                b.clicked.connect(lambda checked=False, x=p.id: self.void_payment(x))
                self.pay_table.setCellWidget(i, len(PAYMENT_HEADERS), b)

    def new_payment(self) -> None:
        dlg = PaymentDialog(self, self.cache)
        if dlg.exec() != QtWidgets.QDialog.Accepted:
            return
        self.run_task(register_payment, self.session, **dlg.result_data, on_done=self._payment_registered)

    def _payment_registered(self, payment: Payment) -> None:
        QtWidgets.QMessageBox.information(
            self, "Success", f"Payment of {payment.amount:.2f} registered for "
                             f"{payment.client_name or self.cache.display_name(payment.client_id)}.")
        self.load_payments()

    def void_payment(self, payment_id: int) -> None:
        reason, ok = QtWidgets.QInputDialog.getText(self, "Void Payment", "Reason (optional):")
        if not ok:
            return

        flow = PaymentVoidFlow(self.session, payment_id, reload=self.load_payments)
        if not flow.begin(lambda: confirm(self, "Confirm Void", f"Void payment #{payment_id}? This can't be undone.")):
            return

        def done(_result: Any) -> None:
            flow.succeeded()
            QtWidgets.QMessageBox.information(self, "Voided", f"Payment #{payment_id} voided.")

        def failed(e: Exception) -> None:
            flow.failed(e)
            self.task_failed(e)

        w = ReportWorker(flow.submit, reason)
        w.signals.finished.connect(done)
        w.signals.error.connect(failed)
        self.pool.start(w)

    def export_payments(self) -> None:
        self.export_pdf("Payments", PAYMENT_HEADERS, [self.payment_row(p) for p in self.payments])

    # --- REPORTS ---
    def init_report_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_rep)
        layout.addWidget(QtWidgets.QLabel("📊 Reports"))

        bar = QtWidgets.QHBoxLayout()
        b_exp = QtWidgets.QPushButton("⏳ Expiring (7 days)")
        b_exp.clicked.connect(self.load_expiring)
        b_over = QtWidgets.QPushButton("⚠️ Overdue")
        b_over.clicked.connect(self.load_overdue)
        b_pdf = QtWidgets.QPushButton("📄 Export PDF")
        b_pdf.clicked.connect(lambda: self.export_pdf(self.report_title, self.report_headers, self.report_rows))
        bar.addWidget(b_exp)
        bar.addWidget(b_over)
        bar.addStretch()
        bar.addWidget(b_pdf)
        layout.addLayout(bar)

        gb = QtWidgets.QGroupBox("Cashflow")
        hb = QtWidgets.QHBoxLayout(gb)
        today = QtCore.QDate.currentDate()
        self.cash_from = _date_edit(QtCore.QDate(today.year(), today.month(), 1))
        self.cash_to = _date_edit(today)
        b_cash = QtWidgets.QPushButton("💵 Calculate")
        b_cash.setStyleSheet("background:#006600")
        b_cash.clicked.connect(self.load_cashflow)
        self.lbl_cash = QtWidgets.QLabel("Total: -")
        self.lbl_cash.setStyleSheet("font-size:16px;font-weight:bold;color:#0f0")
        hb.addWidget(QtWidgets.QLabel("From"))
        hb.addWidget(self.cash_from)
        hb.addWidget(QtWidgets.QLabel("To"))
        hb.addWidget(self.cash_to)
        hb.addWidget(b_cash)
        hb.addWidget(self.lbl_cash, 1)
        layout.addWidget(gb)

        self.rep_state = QtWidgets.QLabel("")
        self.rep_state.setAlignment(QtCore.Qt.AlignCenter)
        self.rep_state.setStyleSheet("color:#aaa;padding:5px")
        layout.addWidget(self.rep_state)

        self.rep_table = _table([""])
        layout.addWidget(self.rep_table)

    def load_report(self, title: str, task: Callable[[ApiSession], list], to_row: Callable[[Any], List[Any]],
                    headers: List[str]) -> None:
        rid = self.report_seq.next()
        self.rep_state.setText("Loading...")

        def done(rows: list) -> None:
            if not self.report_seq.is_current(rid):
                return
            self.report_title = title
            self.report_headers = headers
            self.report_rows = [to_row(r) for r in rows]
            self.render_report()
            self.rep_state.setText("No results." if not rows else f"{title}: {len(rows)} client(s)")

        def failed(e: Exception) -> None:
            if not self.report_seq.is_current(rid):
                return
            self.report_rows = []
            self.rep_table.setRowCount(0)
            self.rep_state.setText(f"Could not load the {title.lower()} report.")
            self.task_failed(e)

        w = ReportWorker(task, self.session)
        w.signals.finished.connect(done)
        w.signals.error.connect(failed)
        self.pool.start(w)

    def load_expiring(self) -> None:
        self.load_report(
            "Expiring", expiring_report,
            lambda c: [c.id, c.full_name, c.email, format_date(c.expiration_date)],
            ["ID", "Name", "Email", "Expires"],
        )

    def load_overdue(self) -> None:
        self.load_report(
            "Overdue", overdue_report,
            lambda c: [c.id, c.full_name, c.email, format_date(c.expiration_date),
                       "Yes" if c.reminder_sent else "No"],
            ["ID", "Name", "Email", "Expired", "Reminder Sent"],
        )

    def render_report(self) -> None:
        self.rep_table.clear()
        self.rep_table.setColumnCount(len(self.report_headers))
        self.rep_table.setHorizontalHeaderLabels(self.report_headers)
        self.rep_table.setRowCount(0)
        for i, row in enumerate(self.report_rows):
            self.rep_table.insertRow(i)
            for col, value in enumerate(row):
                self.rep_table.setItem(i, col, QtWidgets.QTableWidgetItem(str(value)))

    def load_cashflow(self) -> None:
        date_from, date_to = _date_of(self.cash_from), _date_of(self.cash_to)
        if date_to < date_from:
            QtWidgets.QMessageBox.warning(self, "Check the Dates", "The end date can't be before the start date.")
            return
        self.lbl_cash.setText("Total: ...")
        self.run_task(cashflow, self.session, date_from, date_to,
                      on_done=lambda total: self.lbl_cash.setText(f"Total: {total:,.2f}"))

    # --- UTILS ---
    def export_pdf(self, title: str, headers: List[str], rows: List[List[Any]]) -> None:
        if not headers:
            QtWidgets.QMessageBox.warning(self, "Export", "Load a report first.")
            return
        default = f"{title.replace(' ', '_')}_{datetime.date.today().isoformat()}.pdf"
        s, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export", default, "PDF (*.pdf)")
        if not s:
            return
        try:
            export_rows_pdf(s, title, headers, rows)
        except OSError as e:
            QtWidgets.QMessageBox.critical(self, "Error", str(e))
            return
        QtWidgets.QMessageBox.information(self, "Done", "Exported")

    def show_brief(self) -> None:
        self.run_task(build_brief, self.session, on_done=self._show_brief)

    def _show_brief(self, txt: str) -> None:
        d = QtWidgets.QDialog(self)
        d.setWindowTitle("Daily Brief")
        d.resize(500, 600)
        d.setStyleSheet("background:#111;color:white")
        l = QtWidgets.QVBoxLayout(d)
        t = QtWidgets.QTextEdit()
        t.setReadOnly(True)
        t.setMarkdown(txt)
        l.addWidget(t)
        d.exec()

    def change_password(self) -> None:
        ChangePasswordDialog(self.session, self).exec()

    def logout(self) -> None:
        if confirm(self, "Logout", "Do you want to log out?"):
            self.logout_signal.emit()

    def apply_style(self) -> None:
        self.setStyleSheet("""
            QMainWindow{background:#0c0c0c;color:white}
            QLabel{color:white}
            QLineEdit,QComboBox,QDateEdit,QTextEdit{padding:8px;background:#222;color:white;border:1px solid #444}
            QTableWidget{background:#151515;color:white}
            QGroupBox{color:white;border:1px solid #444;margin-top:10px;padding-top:15px}
            QPushButton{background:#333;color:white;padding:8px}
            QPushButton:hover{background:#fc0;color:black}
        """)
