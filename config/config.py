"""Settings shared by every environment module."""
import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "classroom_attendance"),
}

# Single teacher login checked by the auth service.
AUTH = {
    "name": os.getenv("ADMIN_NAME", ""),
    "email": os.getenv("ADMIN_EMAIL", ""),
    "password": os.getenv("ADMIN_PASSWORD", ""),
}

FULL_DAY_HOURS = float(os.getenv("FULL_DAY_HOURS", "8"))
if FULL_DAY_HOURS <= 0:
    raise ValueError(f"FULL_DAY_HOURS must be greater than 0, got {FULL_DAY_HOURS}")
PERIODS = tuple(p.strip() for p in os.getenv("PERIODS", "1,2,3,4,5,6").split(",") if p.strip())
