import os

from .config import Config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL or "INFO"

PAGE_SIZE = Config.PAGE_SIZE
EXTENDED_CSV_EXPORT = Config.EXTENDED_CSV_EXPORT
# Unknown stored status values are shown as Absent (and logged) instead of failing the page.
STRICT_PROJECTION = env_flag("STRICT_PROJECTION", "0")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
