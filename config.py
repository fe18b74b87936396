import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoicing.db")
    CREATE_TABLES = bool(data.get("CREATE_TABLES", 1))  # create_all on startup via api.py
    API_RELOAD = bool(data.get("API_RELOAD", False))
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Invoicing fallbacks, used when a user has no saved settings
    DEFAULT_DUE_DAYS = data.get("DEFAULT_DUE_DAYS", 14)
    DEFAULT_TAX_RATE = data.get("DEFAULT_TAX_RATE", 0)  # Percent, 0 = not VAT registered
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "CZK")
    DEFAULT_BANK_ACCOUNT = data.get("DEFAULT_BANK_ACCOUNT", None)
