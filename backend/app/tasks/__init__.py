from .brief_tasks import process_next_job, dispatch_brief_worker
