import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///class_register.db")
SQL_ECHO = bool(int(os.getenv("SQL_ECHO", "0")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Create tables on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed a demo roster on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Interstitial gate after saving attendance
ADS_ENABLED = bool(int(os.getenv("ADS_ENABLED", "0")))
INTERSTITIAL_COOLDOWN_SECONDS = int(os.getenv("INTERSTITIAL_COOLDOWN_SECONDS", "30"))
MAX_INTERSTITIALS_PER_SESSION = int(os.getenv("MAX_INTERSTITIALS_PER_SESSION", "5"))
