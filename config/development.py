import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Title line printed above every PDF report
REPORT_SCHOOL_NAME = os.getenv("REPORT_SCHOOL_NAME", "SMP Negeri 1")

# Apply database/schema.sql on startup (CREATE ... IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
