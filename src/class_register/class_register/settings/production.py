import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///class_register.db")
SQL_ECHO = False

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ADS_ENABLED = bool(int(os.getenv("ADS_ENABLED", "1")))
INTERSTITIAL_COOLDOWN_SECONDS = int(os.getenv("INTERSTITIAL_COOLDOWN_SECONDS", "30"))
MAX_INTERSTITIALS_PER_SESSION = int(os.getenv("MAX_INTERSTITIALS_PER_SESSION", "5"))
