import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_ledger"),
}

DEBUG = True

# Apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Deadlock / lock-wait retries per write transaction
TX_MAX_RETRIES = int(os.getenv("TX_MAX_RETRIES", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
