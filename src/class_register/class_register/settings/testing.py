import os

SECRET_KEY = "test-secret"

# In-memory database shared by every thread of the process
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
SQL_ECHO = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
AUTO_SEED_DB = False

ADS_ENABLED = False
INTERSTITIAL_COOLDOWN_SECONDS = 30
MAX_INTERSTITIALS_PER_SESSION = 5
