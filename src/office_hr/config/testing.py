from .base import *  # noqa: F401,F403
from .base import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env("office_hr_test")

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
