from celery import Celery
from celery.signals import setup_logging as celery_setup_logging

from app.core.config import settings
from app.core.logging import setup_logging

celery_app = Celery(
    "casebrief",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["app.tasks.brief_tasks"]
)

celery_app.conf.update(
    task_track_started=True,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    result_expires=3600,
    broker_connection_retry_on_startup=True,
)

# Periodic sweep so pending jobs are picked up without an HTTP trigger
if settings.WORKER_POLL_INTERVAL > 0:
    celery_app.conf.beat_schedule = {
        "process-pending-briefs": {
            "task": "briefs.process_next_job",
            "schedule": float(settings.WORKER_POLL_INTERVAL),
        },
    }


@celery_setup_logging.connect
def configure_worker_logging(**kwargs):
    setup_logging()
