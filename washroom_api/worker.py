"""
arq worker for deployments without a platform cron: runs the overdue
cleaning check every OVERDUE_CHECK_MINUTES minutes.

    arq washroom_api.worker.WorkerSettings
"""

import logging
import os
from urllib.parse import urlparse

from arq.connections import RedisSettings
from arq.cron import cron

from . import models  # noqa: F401
from .config import OVERDUE_CHECK_MINUTES
from .database import SessionLocal
from .email_service import EmailNotConfiguredError, is_email_configured
from .services.overdue_service import run_overdue_check

logger = logging.getLogger(__name__)


def get_redis_settings() -> RedisSettings:
    """Connection for the job queue, from REDIS_URL (redis:// or rediss://) or REDIS_* variables"""
    redis_url = os.getenv("REDIS_URL")
    if redis_url:
        parsed = urlparse(redis_url)
        host, port, password = parsed.hostname or "localhost", parsed.port or 6379, parsed.password
        ssl = parsed.scheme == "rediss"
    else:
        host = os.getenv("REDIS_HOST", "localhost")
        port = int(os.getenv("REDIS_PORT", "6379"))
        password = os.getenv("REDIS_PASSWORD")
        ssl = os.getenv("REDIS_SSL", "false").lower() == "true"

    return RedisSettings(
        host=host, port=port, password=password, ssl=ssl, conn_timeout=15, conn_retry_delay=1
    )


def check_minutes(interval: int) -> set[int]:
    """Minutes past the hour at which a check every `interval` minutes runs"""
    if not 1 <= interval <= 60:
        raise ValueError(f"OVERDUE_CHECK_MINUTES must be between 1 and 60, got {interval}")
    return set(range(0, 60, interval))


async def overdue_check_task(ctx):
    """Scheduled overdue check; returns the same summary as /api/check-overdue"""
    logger.info(f"⏰ Overdue check job {ctx.get('job_id', '?')} started")

    if not is_email_configured():
        logger.error("❌ RESEND_API_KEY missing, overdue check not run")
        raise EmailNotConfiguredError("Email service not configured")

    db = SessionLocal()
    try:
        result = await run_overdue_check(db)
    except Exception as e:
        logger.error(f"❌ Overdue check job failed: {e}")
        raise
    finally:
        db.close()

    logger.info(f"✅ Overdue check job done: {result['checked']} checked, {result['alerts']} alerted")
    return result


class WorkerSettings:
    functions = [overdue_check_task]
    redis_settings = get_redis_settings()

    max_jobs = int(os.getenv("ARQ_MAX_JOBS", "5"))
    job_timeout = int(os.getenv("ARQ_JOB_TIMEOUT", "600"))
    keep_result = int(os.getenv("ARQ_KEEP_RESULT", "3600"))
    health_check_interval = 60

    # A missed tick is picked up by the next one
    max_tries = 1

    cron_jobs = [
        cron(overdue_check_task, minute=check_minutes(OVERDUE_CHECK_MINUTES)),
    ]
