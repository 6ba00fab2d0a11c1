from os import getenv

class Settings:
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "60"))

    # fenêtres par défaut (en jours) des endpoints de lecture
    STATS_DEFAULT_DAYS = int(getenv("STATS_DEFAULT_DAYS", "30"))
    DASHBOARD_DEFAULT_DAYS = int(getenv("DASHBOARD_DEFAULT_DAYS", "30"))
    EXPORT_DEFAULT_DAYS = int(getenv("EXPORT_DEFAULT_DAYS", "90"))
    REPORT_DEFAULT_DAYS = int(getenv("REPORT_DEFAULT_DAYS", "30"))

    # nombre max de snapshots lus par requête
    SNAPSHOT_QUERY_LIMIT = int(getenv("SNAPSHOT_QUERY_LIMIT", "100"))

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
