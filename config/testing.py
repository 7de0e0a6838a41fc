from .base import DEFAULTER_THRESHOLD, PAYMENT_KEY_ID, db_config, env_flag

SECRET_KEY = "test-secret"
DB_CONFIG = db_config("academic_ledger_test")
PAYMENT_KEY_SECRET = "test-payment-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", False)
