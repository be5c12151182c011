from .config import Config

SECRET_KEY = "test-secret"
DB_CONFIG = Config.db_config()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PAGE_SIZE = 15
EXTENDED_CSV_EXPORT = False
STRICT_PROJECTION = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
