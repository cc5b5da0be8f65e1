import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, defaults to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "office_hr.config.production"

    if env in {"test", "testing"}:
        return "office_hr.config.testing"

    return "office_hr.config.development"
