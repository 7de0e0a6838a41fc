"""Values shared by every environment, read from the process environment."""

import os


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def db_config(default_database: str) -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", default_database),
    }


# Gateway key id is public; the secret signs payment callbacks and must stay private.
PAYMENT_KEY_ID = os.getenv("PAYMENT_KEY_ID", "")

DEFAULTER_THRESHOLD = float(os.getenv("DEFAULTER_THRESHOLD", "75"))
