import os

from .base import *  # noqa: F401,F403
from .base import _flag, db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = _flag("AUTO_INIT_DB")
