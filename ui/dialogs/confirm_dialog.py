from typing import Optional

from PySide6 import QtWidgets

from core.errors import ConflictError, NetworkError, SessionExpiredError, ValidationError


def confirm(parent: Optional[QtWidgets.QWidget], title: str, text: str) -> bool:
    """Asks a Yes/No question. Returns True only on an explicit Yes."""
    return QtWidgets.QMessageBox.question(
        parent, title, text,
        QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No,
        QtWidgets.QMessageBox.No,
    ) == QtWidgets.QMessageBox.Yes


def describe_error(exc: BaseException) -> str:
    """User-facing text for an exception raised by a service call."""
    if isinstance(exc, NetworkError):
        return "Network error. Check your connection and try again."
    if isinstance(exc, SessionExpiredError):
        return "Your session has expired. Please log in again."
    return str(exc) or exc.__class__.__name__


def show_error(parent: Optional[QtWidgets.QWidget], exc: BaseException, title: str = "Error") -> None:
    """
    Shows an exception the way the dashboard reports failures.
    Validation and duplicate errors are the user's to fix, so they are warnings.
    """
    msg = describe_error(exc)
    if isinstance(exc, ConflictError):
        QtWidgets.QMessageBox.warning(parent, "Already Exists", msg)
    elif isinstance(exc, ValidationError):
        QtWidgets.QMessageBox.warning(parent, "Check the Form", msg)
    else:
        QtWidgets.QMessageBox.critical(parent, title, msg)
