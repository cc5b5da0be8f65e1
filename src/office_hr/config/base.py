import os


def _flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_database: str = "office_hr") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", default_database),
    }


def payroll_rates_from_env() -> dict:
    """Named rates; unset variables fall back to the built-in schedule."""
    names = {
        "transport_rate": "PAYROLL_TRANSPORT_RATE",
        "medical_rate": "PAYROLL_MEDICAL_RATE",
        "bonus_flat": "PAYROLL_BONUS_FLAT",
        "tax_rate": "PAYROLL_TAX_RATE",
        "insurance_rate": "PAYROLL_INSURANCE_RATE",
        "other_flat": "PAYROLL_OTHER_FLAT",
    }
    return {key: os.environ[env] for key, env in names.items() if os.getenv(env)}


ATTENDANCE_CUTOFF = os.getenv("ATTENDANCE_CUTOFF", "09:00")
PAYROLL_RATES = payroll_rates_from_env()
ALLOW_NEGATIVE_LEAVE_BALANCE = _flag("ALLOW_NEGATIVE_LEAVE_BALANCE")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
