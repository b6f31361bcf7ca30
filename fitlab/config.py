# fitlab/config.py
import os, logging

# ── Helpers ───────────────────────────────────────────────────────────────────
def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default

# ── Database ─────────────────────────────────────────────────────────────────
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///fitlab.db")

# ── Local timezone ───────────────────────────────────────────────────────────
TZ_NAME = os.environ.get("TZ_NAME", "Europe/Rome")

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ── Admin notifications (empty = disabled) ───────────────────────────────────
ADMIN_WEBHOOK_URL = os.environ.get("ADMIN_WEBHOOK_URL", "").strip()
ADMIN_WEBHOOK_TIMEOUT = _int_env("ADMIN_WEBHOOK_TIMEOUT", 10)

# ── Admin calendar grid ──────────────────────────────────────────────────────
CALENDAR_START_HOUR = _int_env("CALENDAR_START_HOUR", 8)
CALENDAR_END_HOUR   = _int_env("CALENDAR_END_HOUR", 22)

# ── Startup logging ──────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)
logger.info(
    f"[CONFIG] Loaded TZ_NAME={TZ_NAME}, CALENDAR={CALENDAR_START_HOUR}-{CALENDAR_END_HOUR}, "
    f"webhook={'on' if ADMIN_WEBHOOK_URL else 'off'}"
)
