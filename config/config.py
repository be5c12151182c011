import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "ravisabha-dev-secret"

    # Database
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "ravisabha_db")

    # Attendance views
    PAGE_SIZE = int(os.environ.get("PAGE_SIZE", "15"))
    EXTENDED_CSV_EXPORT = env_flag("EXTENDED_CSV_EXPORT", "0")

    LOG_LEVEL = os.environ.get("LOG_LEVEL")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
