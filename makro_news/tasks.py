from __future__ import annotations

import logging

from celery import shared_task
from celery.schedules import crontab

from makro_news.celery import app
from makro_news.news import preprocessor
from makro_news.news.ingest import run_ingestion

logger = logging.getLogger(__name__)


###############################################################################
# Celery tasks
###############################################################################


@shared_task
def ingest_all_sources() -> dict:
    """Fetch every active RSS source and flag duplicate URLs."""
    try:
        report = run_ingestion()
    except Exception as exc:  # noqa: BLE001
        logger.error("Ingestion run failed: %s", exc, exc_info=True)
        raise
    return report.as_dict()


@shared_task
def warm_preprocessed_cache() -> int:
    return preprocessor.warm_common_filters()


@shared_task
def purge_expired_cache() -> int:
    return preprocessor.purge_expired_cache()


###############################################################################
# Periodic job registration
###############################################################################


@app.on_after_configure.connect
def setup_periodic_tasks(sender, **kwargs):
    sender.add_periodic_task(
        crontab(minute=0, hour="*/2"),
        ingest_all_sources.s(),
        name="Ingest RSS sources",
    )
    sender.add_periodic_task(
        crontab(minute="*/5"),
        warm_preprocessed_cache.s(),
        name="Warm preprocessed news cache",
    )
    sender.add_periodic_task(
        crontab(minute=15),
        purge_expired_cache.s(),
        name="Purge expired news cache",
    )
