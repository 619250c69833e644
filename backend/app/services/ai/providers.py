"""
AI Provider Implementations

Concrete chat-completion implementations for OpenAI and Anthropic
with standardized interfaces and error handling.
"""

import json
from typing import Optional

import openai
import anthropic
from openai import AsyncOpenAI
from anthropic import AsyncAnthropic

from app.core.config import settings
from app.services.ai.base import (
    BaseAIService,
    AIProvider,
    AIResponse,
    AIUsageMetrics,
    AIServiceError,
    AITimeoutError,
    RateLimitError,
    ProviderError,
)

import logging

logger = logging.getLogger(__name__)


def _status_error_body(error) -> str:
    """Best-effort diagnostic text from an SDK status error"""
    body = getattr(error, "body", None)
    if body is None:
        response = getattr(error, "response", None)
        return getattr(response, "text", "") or str(error)
    if isinstance(body, (dict, list)):
        return json.dumps(body)
    return str(body)


class OpenAIService(BaseAIService):
    """OpenAI chat completion service implementation"""

    def __init__(self, model: str = None, client: Optional[AsyncOpenAI] = None):
        model = model or settings.DEFAULT_TEXT_MODEL
        super().__init__(AIProvider.OPENAI, model)

        if client is None:
            if not settings.OPENAI_API_KEY:
                raise AIServiceError("OpenAI API key not configured", "openai", model)
            client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.AI_REQUEST_TIMEOUT,
                max_retries=0
            )
        self.client = client

    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        """Make request to OpenAI API"""
        max_tokens = kwargs.get('max_tokens', 1000)
        temperature = kwargs.get('temperature', 0.7)
        system_prompt = kwargs.get('system_prompt', '')

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APITimeoutError as e:
            raise AITimeoutError(f"OpenAI request timed out: {e}", "openai", self.model, e)
        except openai.RateLimitError as e:
            raise RateLimitError(
                f"OpenAI rate limit exceeded: {_status_error_body(e)}", "openai", self.model, e
            )
        except openai.APIStatusError as e:
            raise ProviderError(
                f"OpenAI API error ({e.status_code}): {_status_error_body(e)}", "openai", self.model, e
            )
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {e}", "openai", self.model, e)

        if not response.choices:
            raise ProviderError("OpenAI returned no choices", "openai", self.model)

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise ProviderError("OpenAI returned an empty completion", "openai", self.model)

        usage = response.usage
        return AIResponse(
            content=content,
            usage=AIUsageMetrics(
                provider=self.provider,
                model=self.model,
                tokens_input=getattr(usage, "prompt_tokens", 0) or 0,
                tokens_output=getattr(usage, "completion_tokens", 0) or 0,
                requests_count=1
            ),
            metadata={
                "finish_reason": response.choices[0].finish_reason,
                "model": response.model
            }
        )


class AnthropicService(BaseAIService):
    """Anthropic Claude service implementation"""

    def __init__(self, model: str = None, client: Optional[AsyncAnthropic] = None):
        model = model or settings.ANTHROPIC_MODEL
        super().__init__(AIProvider.ANTHROPIC, model)

        if client is None:
            if not settings.ANTHROPIC_API_KEY:
                raise AIServiceError("Anthropic API key not configured", "anthropic", model)
            client = AsyncAnthropic(
                api_key=settings.ANTHROPIC_API_KEY,
                timeout=settings.AI_REQUEST_TIMEOUT,
                max_retries=0
            )
        self.client = client

    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        """Make request to Anthropic API"""
        max_tokens = kwargs.get('max_tokens', 1000)
        temperature = kwargs.get('temperature', 0.7)
        system_prompt = kwargs.get('system_prompt', '')

        request = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            request["system"] = system_prompt

        try:
            response = await self.client.messages.create(**request)
        except anthropic.APITimeoutError as e:
            raise AITimeoutError(f"Anthropic request timed out: {e}", "anthropic", self.model, e)
        except anthropic.RateLimitError as e:
            raise RateLimitError(
                f"Anthropic rate limit exceeded: {_status_error_body(e)}", "anthropic", self.model, e
            )
        except anthropic.APIStatusError as e:
            raise ProviderError(
                f"Anthropic API error ({e.status_code}): {_status_error_body(e)}", "anthropic", self.model, e
            )
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic API error: {e}", "anthropic", self.model, e)

        content = "".join(
            getattr(block, "text", "") for block in (response.content or [])
        ).strip()
        if not content:
            raise ProviderError("Anthropic returned an empty completion", "anthropic", self.model)

        usage = response.usage
        return AIResponse(
            content=content,
            usage=AIUsageMetrics(
                provider=self.provider,
                model=self.model,
                tokens_input=getattr(usage, "input_tokens", 0) or 0,
                tokens_output=getattr(usage, "output_tokens", 0) or 0,
                requests_count=1
            ),
            metadata={
                "stop_reason": response.stop_reason,
                "model": response.model
            }
        )


class AIServiceFactory:
    """Factory for creating AI service instances"""

    @staticmethod
    def create_text_service(provider: str = None, model: str = None) -> BaseAIService:
        """Create a text generation service"""
        provider = provider or settings.DEFAULT_MODEL_PROVIDER

        if provider == AIProvider.OPENAI:
            return OpenAIService(model)
        elif provider == AIProvider.ANTHROPIC:
            return AnthropicService(model)
        else:
            raise AIServiceError(f"Unsupported provider: {provider}")
