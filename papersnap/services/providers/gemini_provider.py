"""
Gemini AI Provider.

Provides multimodal extraction, flashcards and chat using Google's
Gemini API through the google-genai SDK with native JSON schema output.
"""
from typing import Any, Dict, List

from google import genai
from google.genai import types

from ...core.config import GEMINI_API_KEY, GEMINI_MODEL
from ...core.logging_config import get_logger
from ...domain.value_objects import ScanMode
from ..prompts import FLASHCARD_SCHEMA
from .base import AIProvider, ProviderResponseError, parse_json_response

logger = get_logger(__name__)


class GeminiProvider(AIProvider):
    """AI Provider using the Gemini API directly."""

    def __init__(self, api_key: str = None, model_name: str = GEMINI_MODEL):
        """Initialize Gemini provider with API key."""
        self.api_key = api_key or GEMINI_API_KEY
        self.model_name = model_name
        if self.api_key:
            self.client = genai.Client(api_key=self.api_key)
        else:
            self.client = None

    def _require_client(self):
        if not self.client:
            raise ValueError("Gemini API key not configured")
        return self.client

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
            response = client.models.generate_content(
                model=self.model_name,
                contents=[
                    types.Part.from_bytes(data=file_bytes, mime_type=mime_type),
                    instructions,
                ],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                    temperature=0.1,  # low temperature for factual extraction
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API Error (Extraction): {e}")
            raise

        result = parse_json_response(response.text or "")
        if not isinstance(result, dict):
            raise ProviderResponseError(f"Expected a JSON object, got {type(result).__name__}")
        return result

    def generate_flashcards(self, prompt: str) -> List[Dict[str, Any]]:
        client = self._require_client()
        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=FLASHCARD_SCHEMA,
                    temperature=0.4,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API Error (Flashcards): {e}")
            raise

        if not response.text:
            return []
        result = parse_json_response(response.text)
        if not isinstance(result, list):
            raise ProviderResponseError(f"Expected a JSON array, got {type(result).__name__}")
        return result

    def chat(self, system_instruction: str, history: List[Dict[str, str]], message: str) -> str:
        client = self._require_client()
        contents = [
            types.Content(
                role="model" if turn["role"] == "assistant" else "user",
                parts=[types.Part.from_text(text=turn["text"])],
            )
            for turn in history
        ]
        contents.append(types.Content(role="user", parts=[types.Part.from_text(text=message)]))

        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=types.GenerateContentConfig(system_instruction=system_instruction),
            )
        except Exception as e:
            logger.error(f"Gemini API Error (Chat): {e}")
            raise

        if not response.text:
            raise ProviderResponseError("Empty chat response from Gemini")
        return response.text
