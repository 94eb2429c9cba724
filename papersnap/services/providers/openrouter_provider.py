"""
OpenRouter AI Provider.

Provides extraction, flashcards and chat using the OpenRouter API
(OpenAI-compatible) through the openai SDK. Any vision-capable model
routed by OpenRouter can be configured with OPENROUTER_MODEL.
"""
import base64
from typing import Any, Dict, List

from openai import OpenAI

from ...core.config import OPENROUTER_API_KEY, OPENROUTER_BASE_URL, OPENROUTER_MODEL
from ...core.logging_config import get_logger
from ...domain.value_objects import ScanMode
from ..prompts import FLASHCARD_SCHEMA, json_schema_hint
from .base import AIProvider, ProviderResponseError, parse_json_response

logger = get_logger(__name__)


class OpenRouterProvider(AIProvider):
    """AI Provider using OpenRouter API."""

    def __init__(self, api_key: str = None, model_name: str = OPENROUTER_MODEL):
        """Initialize OpenRouter provider with API key."""
        self.api_key = api_key or OPENROUTER_API_KEY
        self.model_name = model_name
        if self.api_key:
            self.client = OpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key
            )
        else:
            self.client = None

    def _require_client(self):
        if not self.client:
            raise ValueError("OpenRouter API key not configured")
        return self.client

    @staticmethod
    def _file_part(file_bytes: bytes, mime_type: str) -> Dict[str, Any]:
        if mime_type.startswith("text/"):
            return {"type": "text", "text": file_bytes.decode("utf-8", errors="replace")}
        data_url = f"data:{mime_type};base64,{base64.b64encode(file_bytes).decode('ascii')}"
        if mime_type.startswith("image/"):
            return {"type": "image_url", "image_url": {"url": data_url}}
        return {"type": "file", "file": {"filename": "upload", "file_data": data_url}}

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
            response = client.chat.completions.create(
                model=self.model_name,
                temperature=0.1,
                response_format={"type": "json_object"},
                messages=[{
                    "role": "user",
                    "content": [
                        self._file_part(file_bytes, mime_type),
                        {"type": "text", "text": instructions + json_schema_hint(schema)},
                    ],
                }],
            )
        except Exception as e:
            logger.error(f"OpenRouter API Error (Extraction): {e}")
            raise

        result = parse_json_response(response.choices[0].message.content or "")
        if not isinstance(result, dict):
            raise ProviderResponseError(f"Expected a JSON object, got {type(result).__name__}")
        return result

    def generate_flashcards(self, prompt: str) -> List[Dict[str, Any]]:
        client = self._require_client()
        try:
            response = client.chat.completions.create(
                model=self.model_name,
                temperature=0.4,
                messages=[{"role": "user", "content": prompt + json_schema_hint(FLASHCARD_SCHEMA)}],
            )
        except Exception as e:
            logger.error(f"OpenRouter API Error (Flashcards): {e}")
            raise

        result = parse_json_response(response.choices[0].message.content or "")
        # json_object mode is not used here, but some models still wrap arrays
        if isinstance(result, dict) and isinstance(result.get("cards"), list):
            result = result["cards"]
        if not isinstance(result, list):
            raise ProviderResponseError(f"Expected a JSON array, got {type(result).__name__}")
        return result

    def chat(self, system_instruction: str, history: List[Dict[str, str]], message: str) -> str:
        client = self._require_client()
        messages = [{"role": "system", "content": system_instruction}]
        messages.extend({"role": turn["role"], "content": turn["text"]} for turn in history)
        messages.append({"role": "user", "content": message})
        try:
            response = client.chat.completions.create(
                model=self.model_name,
                messages=messages,
            )
        except Exception as e:
            logger.error(f"OpenRouter API Error (Chat): {e}")
            raise

        content = response.choices[0].message.content
        if not content:
            raise ProviderResponseError("Empty chat response from OpenRouter")
        return content
