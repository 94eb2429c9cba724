"""
Prompt templates and response schemas shared by all AI providers.
"""
import copy
import json
from datetime import date
from typing import Any, Dict, List, Optional

from ..domain.value_objects import DEFAULT_CATEGORIES, DocType, ScanMode

FLASHCARD_CONTEXT_LIMIT = 10000

SCAN_MODE_INSTRUCTIONS = {
    ScanMode.TEXT: """
Perform OCR on this document.
- Extract all visible text.
- Set 'type' to 'TEXT'.
- Set 'vendor' to the Main Title or First Line of the text.
- IMPORTANT: In the 'summary' field, provide the extracted text formatted in clear MARKDOWN. Use headers (#), bullet points (-), and bolding (**) to preserve structure and readability.
- Set 'amount' and 'tax' to 0.
- Set 'category' to 'Uncategorized'.
""",
    ScanMode.DOCUMENT: """
Analyze this general document (contract, letter, etc).
- Extract the 'vendor' as the sender or main party.
- Set 'amount' to 0 if not financial.
- Summarize the content in 'summary'.
""",
    ScanMode.FINANCE: """
Analyze this document. Extract the key financial details.
- If some fields are missing (like tax), make a best guess or set to 0.
- Format the date strictly as YYYY-MM-DD.
""",
}

# Gemini-style response schema; the other providers receive it as JSON text
_EXTRACTION_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "type": {
            "type": "STRING",
            "enum": [kind.value for kind in DocType],
            "description": "The type of the document.",
        },
        "vendor": {
            "type": "STRING",
            "description": "The name of the vendor, issuer, or the title/first line of the text.",
        },
        "date": {
            "type": "STRING",
            "description": "The date of the document in YYYY-MM-DD format. If not found, use today's date.",
        },
        "amount": {
            "type": "NUMBER",
            "description": "The total gross amount. Set to 0 if not applicable or text only.",
        },
        "currency": {
            "type": "STRING",
            "description": "The 3-letter currency code (e.g., USD, EUR, PLN).",
        },
        "tax": {
            "type": "NUMBER",
            "description": "The total tax or VAT amount. 0 if not applicable.",
        },
        "invoiceNumber": {
            "type": "STRING",
            "description": "The invoice or document reference number.",
        },
        "category": {
            "type": "STRING",
            "enum": list(DEFAULT_CATEGORIES),
            "description": "The cost category.",
        },
        "summary": {
            "type": "STRING",
            "description": "A summary of the content, or the FULL extracted text if type is TEXT.",
        },
    },
    "required": ["type", "vendor", "date", "amount", "currency", "category", "summary"],
}


def extraction_schema(categories: Optional[List[str]] = None) -> Dict[str, Any]:
    """Extraction schema with the category enum set to the user's current categories."""
    schema = copy.deepcopy(_EXTRACTION_SCHEMA)
    if categories:
        schema["properties"]["category"]["enum"] = list(categories)
    return schema


FLASHCARD_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "front": {"type": "STRING", "description": "The question or concept on the front of the card."},
            "back": {"type": "STRING", "description": "The answer or definition on the back."},
        },
        "required": ["front", "back"],
    },
}

JSON_ONLY_SUFFIX = (
    "\n\nReturn ONLY a valid JSON value matching this schema. "
    "Do not include any explanation or preamble.\n"
)


def extraction_instructions(scan_mode: ScanMode, categories: Optional[List[str]] = None) -> str:
    """Prompt text for one scan mode, naming the categories the user currently has."""
    text = SCAN_MODE_INSTRUCTIONS[scan_mode].strip()
    if categories and scan_mode != ScanMode.TEXT:
        text += f"\n- Choose 'category' from: {', '.join(categories)}."
    return text


def json_schema_hint(schema: Dict[str, Any]) -> str:
    """Schema appended to prompts for providers without native structured output."""
    return JSON_ONLY_SUFFIX + json.dumps(schema, indent=2)


def flashcard_prompt(text_context: str) -> str:
    return f"""Create a set of 5-10 high-quality flashcards (Question & Answer) based on the following text.
Focus on key concepts, definitions, and important facts useful for a student studying this material.

Text:
{text_context[:FLASHCARD_CONTEXT_LIMIT]}"""


def chat_system_instruction(context_docs: List[Dict[str, Any]], today: Optional[date] = None) -> str:
    """System prompt that makes the user's documents the assistant's only knowledge source."""
    today = today or date.today()
    return f"""You are PaperSnap AI, a helpful document assistant.
You have access to the user's uploaded documents in JSON format.

Current Date: {today.isoformat()}

User Documents:
{json.dumps(context_docs, ensure_ascii=False)}

Rules:
1. Answer based ONLY on the provided documents.
2. If the user asks for a total, calculate it precisely.
3. Be concise and friendly.
4. Format money values with their currency code (e.g., USD 150.00).
5. If asked about specific dates (e.g., "last month"), filter the data accordingly."""
