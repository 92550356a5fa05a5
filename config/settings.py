import os


def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")


def env_int(key, default):
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DB_BOOTSTRAP_INDEXES = env_bool("DB_BOOTSTRAP_INDEXES")

STATS_DEFAULT_DAYS = env_int("STATS_DEFAULT_DAYS", 28)
OWNER_PAGE_SIZE = env_int("OWNER_PAGE_SIZE", 8)
PUBLIC_PAGE_SIZE = env_int("PUBLIC_PAGE_SIZE", 5)
TOP_CONTENT_LIMIT = env_int("TOP_CONTENT_LIMIT", 5)
STATS_MAX_DAYS = env_int("STATS_MAX_DAYS", 3650)
MAX_PAGE_SIZE = env_int("MAX_PAGE_SIZE", 100)
MAX_PAGE = env_int("MAX_PAGE", 100000)
