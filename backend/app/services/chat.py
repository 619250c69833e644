"""
Follow-up questions answered only from a generated brief
"""

import logging
from typing import Optional

from app.core.exceptions import JobStateError, ValidationError
from app.core.security_utils import InputValidator
from app.models.job import JobStatus
from app.services.ai.summarizer import SummarizationService
from app.services.job_store import JobStore

logger = logging.getLogger(__name__)

MAX_QUESTION_CHARS = 4000


class ChatService:
    def __init__(self, job_store: JobStore, summarizer: SummarizationService):
        self.job_store = job_store
        self.summarizer = summarizer

    def resolve_brief(self, brief: Optional[str], brief_id: Optional[str]) -> str:
        """Inline brief text wins over a brief looked up by job id"""
        if brief and brief.strip():
            return brief
        if not brief_id:
            raise ValidationError("brief or briefId is required")

        job = self.job_store.get_or_404(brief_id)
        if job.status != JobStatus.DONE.value or not job.brief:
            raise JobStateError(f"Brief {brief_id} is not ready (status: {job.status})")
        return job.brief

    async def answer(
        self,
        user_message: Optional[str],
        brief: Optional[str] = None,
        brief_id: Optional[str] = None
    ) -> str:
        question = InputValidator.sanitize_string(user_message or "", max_length=MAX_QUESTION_CHARS)
        if not question:
            raise ValidationError("Missing userMessage")

        brief_text = self.resolve_brief(brief, brief_id)
        logger.info(f"Answering chat question ({len(question)} chars)")
        return await self.summarizer.answer_question(brief_text, question)
