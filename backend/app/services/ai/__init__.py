"""
AI Services Package

This package contains the chat-completion layer for CaseBrief:
- LLM providers (OpenAI, Anthropic)
- Prompt templates for briefs and follow-up chat
- The summarization service used by the worker and the chat endpoint
"""
