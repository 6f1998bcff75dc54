import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./washrooms.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Shared secret for the scheduler calling /api/check-overdue
CRON_SECRET = os.getenv("CRON_SECRET")

# Dashboard base URL used in email links
APP_URL = os.getenv("APP_URL", "https://app.acadiacleaniq.ca")

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "Acadia Clean <alerts@acadiacleaniq.ca>")

# Overdue alert defaults (applied when a washroom leaves a setting empty)
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "America/Moncton")
DEFAULT_THRESHOLD_HOURS = int(os.getenv("DEFAULT_THRESHOLD_HOURS", "8"))
DEFAULT_BUSINESS_HOURS_START = "08:00"
DEFAULT_BUSINESS_HOURS_END = "17:00"
DEFAULT_ALERT_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]

# Minimum gap between two overdue alerts for the same washroom
ALERT_COOLDOWN_HOURS = float(os.getenv("ALERT_COOLDOWN_HOURS", "2"))
# Resend allows 2 requests/sec on the default plan
ALERT_SEND_DELAY_SECONDS = float(os.getenv("ALERT_SEND_DELAY_SECONDS", "0.6"))
OVERDUE_CHECK_MINUTES = int(os.getenv("OVERDUE_CHECK_MINUTES", "30"))

# Session tokens issued on business login
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(7 * 24 * 3600)))

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
