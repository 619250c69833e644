"""
Base AI Service Classes

Provides the abstract base class for chat-completion providers with
standardized error types, a hard request deadline and usage tracking.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)


class AIProvider(str, Enum):
    """Supported AI providers"""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass
class AIUsageMetrics:
    """Tracks AI service usage per request"""
    provider: str
    model: str
    tokens_input: int = 0
    tokens_output: int = 0
    requests_count: int = 0
    latency_ms: int = 0
    timestamp: float = 0.0

    def __post_init__(self):
        if self.timestamp == 0.0:
            self.timestamp = time.time()


@dataclass
class AIResponse:
    """Standardized AI response format"""
    content: str
    usage: AIUsageMetrics
    metadata: Dict[str, Any]


class AIServiceError(Exception):
    """Base exception for AI service errors"""
    def __init__(self, message: str, provider: str = "", model: str = "", original_error: Exception = None):
        self.message = message
        self.provider = provider
        self.model = model
        self.original_error = original_error
        super().__init__(self.message)


class RateLimitError(AIServiceError):
    """Rate limit exceeded error"""
    pass


class ProviderError(AIServiceError):
    """Provider-specific error (non-success status, transport failure, empty output)"""
    pass


class AITimeoutError(AIServiceError):
    """Request did not complete within the configured deadline"""
    pass


class BaseAIService(ABC):
    """Abstract base class for all AI services"""

    def __init__(self, provider: AIProvider, model: str, timeout: float = None):
        self.provider = provider
        self.model = model
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT
        self.usage_metrics: List[AIUsageMetrics] = []

    @abstractmethod
    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        """Make the actual API request to the AI provider"""
        pass

    async def generate(self, prompt: str, **kwargs) -> AIResponse:
        """Generate a completion; no retries, bounded by the request timeout"""
        if not prompt or not prompt.strip():
            raise AIServiceError("Input text cannot be empty", self.provider, self.model)

        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                self._make_request(prompt=prompt, **kwargs),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AITimeoutError(
                f"{self.provider} request timed out after {self.timeout}s",
                self.provider, self.model, e
            )

        response.usage.latency_ms = int((time.time() - start_time) * 1000)
        self.usage_metrics.append(response.usage)
        logger.info(
            f"{self.provider}/{self.model} completion: {response.usage.tokens_input} in, "
            f"{response.usage.tokens_output} out, {response.usage.latency_ms}ms"
        )
        return response

    def get_usage_stats(self) -> Dict[str, Any]:
        """Get usage statistics for this process"""
        if not self.usage_metrics:
            return {}

        total_requests = len(self.usage_metrics)
        return {
            "provider": self.provider,
            "model": self.model,
            "total_tokens_input": sum(m.tokens_input for m in self.usage_metrics),
            "total_tokens_output": sum(m.tokens_output for m in self.usage_metrics),
            "total_requests": total_requests,
            "average_latency_ms": sum(m.latency_ms for m in self.usage_metrics) / total_requests,
        }
