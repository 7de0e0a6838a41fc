import os

from .base import DEFAULTER_THRESHOLD, PAYMENT_KEY_ID, db_config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DB_CONFIG = db_config("academic_ledger")
PAYMENT_KEY_SECRET = os.getenv("PAYMENT_KEY_SECRET", "dev-payment-secret")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# schema.sql is idempotent (CREATE ... IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", True)
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", False)
