from .config import DB_CONFIG, FULL_DAY_HOURS, PERIODS  # noqa: F401

SECRET_KEY = "test-secret"

AUTH = {"name": "Teacher", "email": "teacher@example.com", "password": "secret123"}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
