import logging
import sys
from pathlib import Path
from typing import Optional

from PySide6 import QtWidgets
import config

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "http://localhost:8080"


def ensure_folder(p: Path) -> None:
    """Creates the folder if it does not exist."""
    p.mkdir(parents=True, exist_ok=True)


# --- TOKEN STORAGE ---

def load_token() -> Optional[str]:
    """Returns the persisted bearer token, or None if the user isn't logged in."""
    try:
        if config.TOKEN_FILE.exists():
            return config.TOKEN_FILE.read_text(encoding="utf-8").strip() or None
    except OSError as e:
        logger.error("Could not read token file %s: %s", config.TOKEN_FILE, e)
    return None


def save_token(token: str) -> None:
    ensure_folder(config.TOKEN_FILE.parent)
    config.TOKEN_FILE.write_text(token, encoding="utf-8")


def clear_token() -> None:
    try:
        config.TOKEN_FILE.unlink()
    except FileNotFoundError:
        pass


# --- SERVER SETUP ---

def init_server(url: str) -> None:
    """Sets the backend base URL used by every session."""
    config.API_BASE_URL = url.strip().rstrip("/")


def load_saved_server() -> Optional[str]:
    """Reads the backend URL saved on a previous run, if any."""
    if not config.CONFIG_FILE.exists():
        return None
    try:
        content = config.CONFIG_FILE.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.warning("Ignoring unreadable config %s: %s", config.CONFIG_FILE, e)
        return None
    return content or None


def save_server(url: str) -> None:
    config.CONFIG_FILE.write_text(url.strip(), encoding="utf-8")
    init_server(url)


def load_or_setup_server() -> None:
    """
    Resolves the backend URL: environment first, then the saved config file.
    If neither is set, asks the user once and saves the answer for next time.
    """
    # 1. Environment override (GYM_API_URL)
    if config.API_BASE_URL:
        init_server(config.API_BASE_URL)
        return

    # 2. Saved config
    saved = load_saved_server()
    if saved:
        init_server(saved)
        return

    # 3. First run: prompt through a dialog.
    app = QtWidgets.QApplication.instance()
    if not app:
        app = QtWidgets.QApplication(sys.argv)

    url, ok = QtWidgets.QInputDialog.getText(
        None, f"{config.APP_NAME} - First Time Setup",
        "Welcome.\nEnter the address of the gym backend server:",
        QtWidgets.QLineEdit.Normal, DEFAULT_SERVER
    )

    if not ok or not url.strip():
        QtWidgets.QMessageBox.critical(None, "Error", "A server address is required to continue.")
        sys.exit(0)

    try:
        save_server(url)
    except OSError as e:
        QtWidgets.QMessageBox.critical(None, "Error", f"Failed to save configuration: {str(e)}")
        sys.exit(0)
