from .config import Config, env_flag

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()

DEBUG = True
LOG_LEVEL = Config.LOG_LEVEL or "DEBUG"

PAGE_SIZE = Config.PAGE_SIZE
EXTENDED_CSV_EXPORT = Config.EXTENDED_CSV_EXPORT
# Fail loudly on unknown stored status values while developing.
STRICT_PROJECTION = env_flag("STRICT_PROJECTION", "1")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo data on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
