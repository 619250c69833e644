import threading
from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import JobNotFoundError, JobStateError
from app.models.job import Job
from app.services.ai.base import ProviderError
from app.services.brief_worker import BriefWorker, WorkerResult
from app.services.extraction import extract_text
from tests.factories import CompletedJobFactory, JobFactory, make_blank_pdf, make_docx


@pytest.fixture
def worker(job_store, blob_store, summarizer):
    return BriefWorker(job_store, blob_store, summarizer, claim_attempts=3)


def _stored(db_session, job_id) -> Job:
    db_session.expire_all()
    return db_session.query(Job).filter(Job.id == job_id).first()


@pytest.mark.unit
class TestBriefWorker:

    @pytest.mark.asyncio
    async def test_no_pending_jobs_is_noop(self, worker, db_session, fake_ai):
        db_session.add(CompletedJobFactory.create())
        db_session.commit()

        result = await worker.process_next()

        assert result.ok is True
        assert result.message == "no pending jobs"
        assert result.job_id is None
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_success(self, worker, db_session, pending_job):
        result = await worker.process_next()

        assert result == WorkerResult(ok=True, job_id=pending_job.id, status="done")
        job = _stored(db_session, pending_job.id)
        assert job.status == "done"
        assert job.brief
        assert job.error is None

    @pytest.mark.asyncio
    async def test_docx_job(self, worker, db_session, blob_store, fake_ai):
        job = JobFactory.create(filename="judgment.docx", storage_path="uploads/1-judgment.docx")
        blob_store.put(job.storage_path, make_docx())
        db_session.add(job)
        db_session.commit()

        result = await worker.process_next()

        assert result.status == "done"
        assert "appellant was not heard" in fake_ai.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_empty_extraction_never_done(self, worker, db_session, blob_store, fake_ai):
        job = JobFactory.create()
        blob_store.put(job.storage_path, make_blank_pdf())
        db_session.add(job)
        db_session.commit()

        result = await worker.process_next()

        assert result.ok is False
        assert result.status_code == 422
        stored = _stored(db_session, job.id)
        assert stored.status == "failed"
        assert stored.error == "no text extracted"
        assert stored.brief is None
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_upstream_error_recorded(self, worker, db_session, pending_job, fake_ai):
        fake_ai.error = ProviderError("OpenAI API error (401): invalid key", "openai", "fake-model")

        result = await worker.process_next()

        assert result.status_code == 502
        stored = _stored(db_session, pending_job.id)
        assert stored.status == "failed"
        assert "invalid key" in stored.error

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_job_with_500(self, worker, db_session, pending_job, mocker):
        mocker.patch("app.services.brief_worker.extract_text", side_effect=RuntimeError("parser crashed"))

        result = await worker.process_next()

        assert result.ok is False
        assert result.status_code == 500
        assert result.error == "Unexpected error: parser crashed"

        stored = _stored(db_session, pending_job.id)
        assert stored.status == "failed"
        assert "parser crashed" in stored.error

    @pytest.mark.asyncio
    async def test_extraction_runs_off_the_event_loop_thread(self, worker, pending_job, mocker):
        threads = []

        def _recording_extract(data, hint):
            threads.append(threading.current_thread())
            return extract_text(data, hint)

        mocker.patch("app.services.brief_worker.extract_text", side_effect=_recording_extract)

        result = await worker.process_next()

        assert result.ok is True
        assert len(threads) == 1
        assert threads[0] is not threading.current_thread()

    @pytest.mark.asyncio
    async def test_processes_oldest_first(self, worker, db_session, blob_store, sample_pdf):
        now = datetime.now(timezone.utc)
        newer = JobFactory.create(created_at=now)
        older = JobFactory.create(created_at=now - timedelta(hours=1))
        for job in (newer, older):
            blob_store.put(job.storage_path, sample_pdf)
            db_session.add(job)
        db_session.commit()

        result = await worker.process_next()

        assert result.job_id == older.id
        assert _stored(db_session, newer.id).status == "pending"

    @pytest.mark.asyncio
    async def test_stale_candidate_is_not_processed_twice(self, worker, job_store, db_session, pending_job, fake_ai, mocker):
        """A worker whose candidate was claimed elsewhere does nothing."""
        job_store.claim(pending_job.id)
        mocker.patch.object(job_store, "select_oldest_pending", side_effect=[pending_job, None])

        result = await worker.process_next()

        assert result.message == "no pending jobs"
        assert fake_ai.calls == []
        assert _stored(db_session, pending_job.id).status == "processing"

    @pytest.mark.asyncio
    async def test_process_specific_job(self, worker, db_session, pending_job):
        result = await worker.process_job(pending_job.id)

        assert result.status == "done"

    @pytest.mark.asyncio
    async def test_process_specific_job_requires_pending(self, worker, db_session):
        job = CompletedJobFactory.create()
        db_session.add(job)
        db_session.commit()

        with pytest.raises(JobStateError):
            await worker.process_job(job.id)
        with pytest.raises(JobNotFoundError):
            await worker.process_job("missing")


@pytest.mark.unit
def test_worker_result_payload():
    assert WorkerResult(ok=True, message="no pending jobs").to_dict() == {"ok": True, "message": "no pending jobs"}
    assert WorkerResult(ok=False, job_id="j", status="failed", error="e", status_code=422).to_dict() == {
        "ok": False, "jobId": "j", "status": "failed", "error": "e"
    }
