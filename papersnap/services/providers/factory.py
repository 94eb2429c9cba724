"""
AI Provider Factory.

Manages provider selection and initialization based on configuration.
Uses the Factory pattern to provide plug-and-play AI provider support.
"""
from ...core.config import (
    AI_PROVIDER,
    ANTHROPIC_API_KEY,
    GEMINI_API_KEY,
    OPENROUTER_API_KEY
)
from ...core.logging_config import get_logger
from .anthropic_provider import AnthropicProvider
from .base import AIProvider
from .gemini_provider import GeminiProvider
from .mock_provider import MockProvider
from .openrouter_provider import OpenRouterProvider

logger = get_logger(__name__)

# Preference order used when the configured provider has no key
_FALLBACK_ORDER = (
    ("gemini", GEMINI_API_KEY, GeminiProvider),
    ("openrouter", OPENROUTER_API_KEY, OpenRouterProvider),
    ("anthropic", ANTHROPIC_API_KEY, AnthropicProvider),
)


class AIProviderFactory:
    """
    Factory for creating AI provider instances.

    Automatically selects the appropriate provider based on:
    1. AI_PROVIDER configuration
    2. Available API keys
    3. Fallback to MockProvider if no keys available
    """

    @staticmethod
    def get_provider(provider_type: str = None) -> AIProvider:
        """
        Get the appropriate AI provider based on configuration.

        Returns:
            AIProvider instance (Gemini, OpenRouter, Anthropic or Mock)
        """
        provider_type = (provider_type or AI_PROVIDER).lower()

        if provider_type == "mock":
            logger.info("Using MockProvider (configured)")
            return MockProvider()

        for name, api_key, provider_cls in _FALLBACK_ORDER:
            if name == provider_type:
                if api_key:
                    logger.info(f"Using {provider_cls.__name__}")
                    return provider_cls()
                logger.warning(f"⚠️  {name} API key not configured, checking other providers...")
                break
        else:
            logger.warning(f"⚠️  Unknown provider '{provider_type}', checking available API keys...")

        for name, api_key, provider_cls in _FALLBACK_ORDER:
            if api_key:
                logger.info(f"✓ Using {provider_cls.__name__} as fallback")
                return provider_cls()

        logger.warning("⚠️  No API keys configured, using MockProvider")
        return MockProvider()
