import pytest

from app.core.exceptions import JobNotFoundError, JobStateError, ValidationError
from app.services.chat import ChatService
from tests.factories import SAMPLE_BRIEF, CompletedJobFactory, FailedJobFactory


@pytest.fixture
def chat_service(job_store, summarizer):
    return ChatService(job_store, summarizer)


@pytest.mark.unit
class TestChatService:

    @pytest.mark.asyncio
    async def test_inline_brief_wins_over_brief_id(self, chat_service, db_session, fake_ai):
        job = CompletedJobFactory.create(brief="Facts: stored brief")
        db_session.add(job)
        db_session.commit()

        await chat_service.answer("Who won?", brief="Facts: inline brief", brief_id=job.id)

        assert "inline brief" in fake_ai.calls[0]["prompt"]
        assert "stored brief" not in fake_ai.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_blank_question(self, chat_service, fake_ai):
        with pytest.raises(ValidationError):
            await chat_service.answer("  ", brief=SAMPLE_BRIEF)
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_control_characters_stripped(self, chat_service, fake_ai):
        await chat_service.answer("Who\x00 won?\x07", brief=SAMPLE_BRIEF)

        assert "User question: Who won?" in fake_ai.calls[0]["prompt"]

    def test_failed_job_brief_not_ready(self, chat_service, db_session):
        job = FailedJobFactory.create()
        db_session.add(job)
        db_session.commit()

        with pytest.raises(JobStateError):
            chat_service.resolve_brief(None, job.id)

    def test_unknown_brief_id(self, chat_service, db_session):
        with pytest.raises(JobNotFoundError):
            chat_service.resolve_brief("", "missing")
