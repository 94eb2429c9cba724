"""
Anthropic AI Provider.

Provides extraction, flashcards and chat using Anthropic's Claude API directly.
Images and PDFs are sent as base64 content blocks; plain text is inlined.
"""
import base64
from typing import Any, Dict, List

import anthropic

from ...core.config import ANTHROPIC_API_KEY, ANTHROPIC_MODEL
from ...core.logging_config import get_logger
from ...domain.value_objects import ScanMode
from ..prompts import FLASHCARD_SCHEMA, json_schema_hint
from .base import AIProvider, ProviderResponseError, parse_json_response

logger = get_logger(__name__)

IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


class AnthropicProvider(AIProvider):
    """AI Provider using Anthropic Claude API directly."""

    def __init__(self, api_key: str = None, model_name: str = ANTHROPIC_MODEL):
        """Initialize Anthropic provider with API key."""
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model_name = model_name
        if self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None

    def _require_client(self):
        if not self.client:
            raise ValueError("Anthropic API key not configured")
        return self.client

    @staticmethod
    def _file_block(file_bytes: bytes, mime_type: str) -> Dict[str, Any]:
        if mime_type in IMAGE_TYPES:
            return {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": mime_type,
                    "data": base64.b64encode(file_bytes).decode("ascii"),
                },
            }
        if mime_type == "application/pdf":
            return {
                "type": "document",
                "source": {
                    "type": "base64",
                    "media_type": "application/pdf",
                    "data": base64.b64encode(file_bytes).decode("ascii"),
                },
            }
        if mime_type.startswith("text/"):
            return {"type": "text", "text": file_bytes.decode("utf-8", errors="replace")}
        raise ValueError(f"Anthropic provider cannot read files of type {mime_type}")

    def extract_document(
        self,
        file_bytes: bytes,
        mime_type: str,
        scan_mode: ScanMode,
        instructions: str,
        schema: Dict[str, Any]
    ) -> Dict[str, Any]:
        client = self._require_client()
        try:
            message = client.messages.create(
                model=self.model_name,
                max_tokens=4000,
                temperature=0.1,
                messages=[{
                    "role": "user",
                    "content": [
                        self._file_block(file_bytes, mime_type),
                        {"type": "text", "text": instructions + json_schema_hint(schema)},
                    ],
                }],
            )
        except Exception as e:
            logger.error(f"Anthropic API Error (Extraction): {e}")
            raise

        result = parse_json_response(message.content[0].text)
        if not isinstance(result, dict):
            raise ProviderResponseError(f"Expected a JSON object, got {type(result).__name__}")
        return result

    def generate_flashcards(self, prompt: str) -> List[Dict[str, Any]]:
        client = self._require_client()
        try:
            message = client.messages.create(
                model=self.model_name,
                max_tokens=2000,
                temperature=0.4,
                messages=[{"role": "user", "content": prompt + json_schema_hint(FLASHCARD_SCHEMA)}],
            )
        except Exception as e:
            logger.error(f"Anthropic API Error (Flashcards): {e}")
            raise

        result = parse_json_response(message.content[0].text)
        if not isinstance(result, list):
            raise ProviderResponseError(f"Expected a JSON array, got {type(result).__name__}")
        return result

    def chat(self, system_instruction: str, history: List[Dict[str, str]], message: str) -> str:
        client = self._require_client()
        messages = [{"role": turn["role"], "content": turn["text"]} for turn in history]
        messages.append({"role": "user", "content": message})
        try:
            reply = client.messages.create(
                model=self.model_name,
                max_tokens=1000,
                system=system_instruction,
                messages=messages,
            )
        except Exception as e:
            logger.error(f"Anthropic API Error (Chat): {e}")
            raise
        return reply.content[0].text
