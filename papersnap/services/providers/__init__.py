"""
AI Providers Module - Modular AI provider implementations.

This module provides a plug-and-play architecture for AI providers
using the Strategy pattern.

To add a new AI provider:
1. Create a new provider class inheriting from AIProvider
2. Implement extract_document, generate_flashcards and chat
3. Register it in AIProviderFactory
"""
from . import factory
from .anthropic_provider import AnthropicProvider
from .base import AIProvider, ProviderResponseError, parse_json_response
from .factory import AIProviderFactory
from .gemini_provider import GeminiProvider
from .mock_provider import MockProvider
from .openrouter_provider import OpenRouterProvider

__all__ = [
    "AIProvider",
    "AIProviderFactory",
    "AnthropicProvider",
    "GeminiProvider",
    "MockProvider",
    "OpenRouterProvider",
    "ProviderResponseError",
    "factory",
    "parse_json_response",
]
