import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Projection target for "classes needed" and the zone badge bands.
ATTENDANCE_THRESHOLD = float(os.getenv("ATTENDANCE_THRESHOLD", "0.75"))
SAFE_ZONE_MIN = int(os.getenv("SAFE_ZONE_MIN", "75"))
AVERAGE_ZONE_MIN = int(os.getenv("AVERAGE_ZONE_MIN", "60"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
