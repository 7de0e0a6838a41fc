import os

from .base import DEFAULTER_THRESHOLD, PAYMENT_KEY_ID, db_config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = db_config("academic_ledger")
PAYMENT_KEY_SECRET = os.getenv("PAYMENT_KEY_SECRET", "")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
AUTO_SEED_DB = False
