import asyncio
import logging

from kombu.exceptions import OperationalError

from app.core.celery_app import celery_app
from app.db.session import SessionLocal
from app.services.ai.summarizer import get_summarization_service
from app.services.brief_worker import BriefWorker
from app.services.job_store import JobStore
from app.services.storage import get_blob_store

logger = logging.getLogger(__name__)

# One loop per worker process; the cached provider client is bound to it
_loop = None


def run_async(coro):
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
        asyncio.set_event_loop(_loop)
    return _loop.run_until_complete(coro)


@celery_app.task(name="briefs.process_next_job")
def process_next_job():
    """
    Background task: claim the oldest pending job and summarize it
    """
    db = SessionLocal()
    try:
        worker = BriefWorker(JobStore(db), get_blob_store(), get_summarization_service())
        result = run_async(worker.process_next())
        if result.job_id:
            logger.info(f"Worker run finished job {result.job_id} as {result.status}")
        return result.to_dict()
    except Exception as e:
        logger.error(f"Brief worker task failed: {str(e)}")
        raise
    finally:
        db.close()


def dispatch_brief_worker() -> bool:
    """Enqueue a worker run; the job stays pending for the next run if the broker is down"""
    try:
        process_next_job.delay()
    except (OperationalError, ConnectionError) as e:
        logger.warning(f"Could not dispatch brief worker: {e}")
        return False
    return True
