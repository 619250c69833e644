import pytest
from sqlalchemy.orm import Session

from app.models.job import Job, JobStatus
from tests.factories import JobFactory


@pytest.mark.db
class TestJobModel:
    """Test the Job model."""

    def test_create_job_defaults(self, db_session: Session):
        job = Job(filename="judgment.pdf", storage_path="uploads/x-judgment.pdf")
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)

        assert len(job.id) == 36
        assert job.status == JobStatus.PENDING.value
        assert job.brief is None
        assert job.error is None
        assert job.created_at is not None
        assert job.updated_at is not None

    def test_ids_are_unique(self, db_session: Session):
        jobs = [Job(filename=f"{i}.pdf") for i in range(5)]
        db_session.add_all(jobs)
        db_session.commit()

        assert len({job.id for job in jobs}) == 5

    def test_factory_job_round_trips(self, db_session: Session):
        job = JobFactory.create()
        db_session.add(job)
        db_session.commit()

        stored = db_session.query(Job).filter(Job.id == job.id).first()
        assert stored.storage_path == f"uploads/{job.id}-{job.filename}"
        assert stored.content_type == "application/pdf"

    def test_repr(self):
        job = JobFactory.build(id="abc", status="pending")
        assert repr(job) == "<Job abc pending>"


@pytest.mark.unit
class TestJobStatus:
    def test_values(self):
        assert [s.value for s in JobStatus] == ["pending", "processing", "done", "failed"]

    @pytest.mark.parametrize("status,terminal", [
        (JobStatus.PENDING, False),
        (JobStatus.PROCESSING, False),
        (JobStatus.DONE, True),
        (JobStatus.FAILED, True),
    ])
    def test_is_terminal(self, status, terminal):
        assert status.is_terminal is terminal
