"""
Base AI Provider Interface.

All AI providers must inherit from this base class and implement
all abstract methods. Providers raise on failure; the extraction and
assistant services decide what a failure turns into.
"""
import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ...domain.value_objects import ScanMode


class ProviderResponseError(ValueError):
    """Raised when a model answers with something that is not the requested JSON."""
    pass


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Each provider wraps one vendor SDK and exposes the three calls the
    application needs: multimodal extraction, flashcard generation and chat.
    """

    @abstractmethod
    def extract_document(
        self,
        file_bytes: bytes,
        mime_type: str,
        scan_mode: ScanMode,
        instructions: str,
        schema: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Read an uploaded file and return the extraction JSON object.

        Args:
            file_bytes: Raw file content (image, PDF or text)
            mime_type: MIME type of the upload
            scan_mode: How the document should be read
            instructions: Mode-specific prompt text
            schema: Response schema (Gemini schema dialect)

        Returns:
            Dictionary in the extraction shape (type, vendor, date, amount, ...)
        """
        pass

    @abstractmethod
    def generate_flashcards(self, prompt: str) -> List[Dict[str, Any]]:
        """
        Generate question/answer pairs.

        Returns:
            List of {"front": ..., "back": ...} dictionaries
        """
        pass

    @abstractmethod
    def chat(self, system_instruction: str, history: List[Dict[str, str]], message: str) -> str:
        """
        Answer one user turn.

        Args:
            system_instruction: Persona, rules and document context
            history: Previous turns as {"role": "user"|"assistant", "text": ...}
            message: The new user message

        Returns:
            The assistant's reply text
        """
        pass


_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def parse_json_response(text: str) -> Any:
    """
    Parse a model reply that should be JSON.

    Handles replies wrapped in code fences or with a sentence before/after
    the JSON by falling back to the outermost object or array.

    Raises:
        ProviderResponseError: If no JSON can be recovered
    """
    if not text or not text.strip():
        raise ProviderResponseError("Empty response from model")

    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    for opener, closer in (("{", "}"), ("[", "]")):
        start_idx = cleaned.find(opener)
        end_idx = cleaned.rfind(closer) + 1
        if start_idx >= 0 and end_idx > start_idx:
            try:
                return json.loads(cleaned[start_idx:end_idx])
            except json.JSONDecodeError:
                continue

    raise ProviderResponseError(f"Could not parse JSON from model response: {text[:200]!r}")
