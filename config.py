import os
from pathlib import Path

# Global Config
API_BASE_URL = os.getenv("GYM_API_URL", "")
CONFIG_FILE = Path.home() / ".gymadmin_config"
TOKEN_FILE = Path.home() / ".gymadmin_token"

LOG_LEVEL = os.getenv("GYM_LOG_LEVEL", "INFO")

# Page size cap used for every payments request (single and fan-out)
PAYMENTS_PAGE_SIZE = int(os.getenv("GYM_PAYMENTS_PAGE_SIZE", "200"))

# Upper bound on concurrent per-client payment requests
MAX_FAN_OUT = 8

APP_NAME = "GYM ADMIN"

# Backend entry points
LOGIN_PATH = "/auth/login"
CLIENTS_PATH = "/api/clients"
PAYMENTS_PATH = "/api/payments"
REPORTS_PATH = "/api/reports"
DASHBOARD_PATH = "/api/dashboard"
PASSWORD_PATH = "/api/password"
USERS_PATH = "/api/users"
