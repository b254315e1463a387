import logging
import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

MATRIX_LOCALE = os.getenv("MATRIX_LOCALE", "en")

# Rule defaults applied when the caller's rules leave the key out
RULE_OVERRIDES_ENV = {
    "hoursAfterDay": "DEFAULT_HOURS_AFTER_DAY",
    "hoursAfterNight": "DEFAULT_HOURS_AFTER_NIGHT",
    "weeklyRestHours": "DEFAULT_WEEKLY_REST_HOURS",
    "sundayRuleDays": "DEFAULT_SUNDAY_RULE_DAYS",
}


def rule_overrides() -> dict:
    overrides = {}
    for key, env_name in RULE_OVERRIDES_ENV.items():
        value = os.getenv(env_name)
        if value is None or not value.strip():
            continue
        try:
            overrides[key] = float(value)
        except ValueError:
            logging.warning(f"Ignoring {env_name}={value!r}: not a number")
    return overrides


def apply_rule_defaults(rules: dict | None) -> dict:
    """Fill rule keys missing from the caller's rules with environment overrides."""
    merged = rule_overrides()
    merged.update(rules or {})
    return merged
