"""
Summarization service used by the worker, the chat endpoint and direct summaries.

Wraps a chat-completion provider and converts provider failures into
UpstreamError so callers only deal with the application error taxonomy.
"""

import logging
from typing import Optional

from app.core.config import settings
from app.core.exceptions import UpstreamError
from app.services.ai.base import BaseAIService, AIServiceError
from app.services.ai.prompts import (
    BRIEF_SYSTEM_PROMPT,
    CHAT_SYSTEM_PROMPT,
    REFERENCE_SYSTEM_PROMPT,
    build_brief_prompt,
    build_chat_prompt,
    build_reference_prompt,
)
from app.services.ai.providers import AIServiceFactory

logger = logging.getLogger(__name__)


class SummarizationService:
    """Case brief generation and brief-grounded question answering"""

    def __init__(self, ai_service: Optional[BaseAIService] = None, max_prompt_chars: int = None):
        self._ai_service = ai_service
        self.max_prompt_chars = max_prompt_chars or settings.MAX_PROMPT_CHARS

    @property
    def ai_service(self) -> BaseAIService:
        """Provider client, built on first use"""
        if self._ai_service is None:
            try:
                self._ai_service = AIServiceFactory.create_text_service()
            except AIServiceError as e:
                logger.error(f"Summarization service unavailable: {e.message}")
                raise UpstreamError(f"Summarization service unavailable: {e.message}") from e
        return self._ai_service

    async def complete(
        self,
        prompt: str,
        system_prompt: str = "",
        max_tokens: int = 1000,
        temperature: float = 0.7
    ) -> str:
        try:
            response = await self.ai_service.generate(
                prompt,
                system_prompt=system_prompt,
                max_tokens=max_tokens,
                temperature=temperature
            )
        except AIServiceError as e:
            logger.error(f"Summarization call failed: {e.message}")
            raise UpstreamError(e.message) from e
        return response.content

    async def generate_brief(self, text: str) -> str:
        """Summarize extracted judgment text into a structured brief"""
        if len(text) > self.max_prompt_chars:
            logger.info(f"Truncating document text from {len(text)} to {self.max_prompt_chars} chars")
        return await self.complete(
            build_brief_prompt(text, self.max_prompt_chars),
            system_prompt=BRIEF_SYSTEM_PROMPT,
            max_tokens=settings.BRIEF_MAX_TOKENS,
            temperature=settings.BRIEF_TEMPERATURE
        )

    async def summarize_reference(self, file_url: Optional[str], prompt: Optional[str] = None) -> str:
        """Direct mode: use an explicit prompt, or point the model at a document URL"""
        user_prompt = prompt if prompt and prompt.strip() else build_reference_prompt(file_url)
        return await self.complete(
            user_prompt,
            system_prompt=REFERENCE_SYSTEM_PROMPT,
            max_tokens=settings.REFERENCE_MAX_TOKENS,
            temperature=settings.REFERENCE_TEMPERATURE
        )

    async def answer_question(self, brief: str, question: str) -> str:
        return await self.complete(
            build_chat_prompt(brief, question),
            system_prompt=CHAT_SYSTEM_PROMPT,
            max_tokens=settings.CHAT_MAX_TOKENS,
            temperature=settings.CHAT_TEMPERATURE
        )


# Global service instance
_summarization_service: Optional[SummarizationService] = None


def get_summarization_service() -> SummarizationService:
    """Get the process-wide summarization service"""
    global _summarization_service
    if _summarization_service is None:
        _summarization_service = SummarizationService()
    return _summarization_service
