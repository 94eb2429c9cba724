import pytest

from papersnap.domain.value_objects import DocType, ScanMode
from papersnap.services.prompts import extraction_schema
from papersnap.services.providers import (
    AnthropicProvider,
    GeminiProvider,
    MockProvider,
    OpenRouterProvider,
    ProviderResponseError,
    factory,
    parse_json_response,
)


def test_parse_plain_json():
    assert parse_json_response('{"vendor": "Shell"}') == {"vendor": "Shell"}


def test_parse_fenced_json():
    assert parse_json_response('```json\n[{"front": "Q", "back": "A"}]\n```') == [{"front": "Q", "back": "A"}]


def test_parse_json_with_surrounding_prose():
    assert parse_json_response('Here you go: {"amount": 12} Hope it helps!') == {"amount": 12}


@pytest.mark.parametrize("text", ["", "   ", "no json here"])
def test_parse_failure_raises(text):
    with pytest.raises(ProviderResponseError):
        parse_json_response(text)


def test_factory_falls_back_to_mock_without_keys(monkeypatch):
    monkeypatch.setattr(factory, "_FALLBACK_ORDER", (
        ("gemini", None, GeminiProvider),
        ("openrouter", None, OpenRouterProvider),
        ("anthropic", None, AnthropicProvider),
    ))
    assert isinstance(factory.AIProviderFactory.get_provider("gemini"), MockProvider)
    assert isinstance(factory.AIProviderFactory.get_provider("unknown"), MockProvider)


def test_factory_uses_another_configured_provider(monkeypatch):
    monkeypatch.setattr(factory, "_FALLBACK_ORDER", (
        ("gemini", None, GeminiProvider),
        ("openrouter", None, OpenRouterProvider),
        ("anthropic", "sk-test", AnthropicProvider),
    ))
    assert isinstance(factory.AIProviderFactory.get_provider("gemini"), AnthropicProvider)


def test_factory_mock_is_explicit():
    assert isinstance(factory.AIProviderFactory.get_provider("mock"), MockProvider)


def test_provider_without_key_refuses_to_call():
    provider = GeminiProvider(api_key="")
    provider.api_key = None
    provider.client = None
    with pytest.raises(ValueError):
        provider.chat("system", [], "hello")


def test_anthropic_file_blocks():
    image = AnthropicProvider._file_block(b"png", "image/png")
    pdf = AnthropicProvider._file_block(b"%PDF", "application/pdf")
    text = AnthropicProvider._file_block("zażółć".encode("utf-8"), "text/plain")

    assert image["type"] == "image" and image["source"]["media_type"] == "image/png"
    assert pdf["type"] == "document"
    assert text == {"type": "text", "text": "zażółć"}
    with pytest.raises(ValueError):
        AnthropicProvider._file_block(b"x", "application/zip")


def test_openrouter_file_parts():
    image = OpenRouterProvider._file_part(b"png", "image/png")
    pdf = OpenRouterProvider._file_part(b"%PDF", "application/pdf")

    assert image["image_url"]["url"].startswith("data:image/png;base64,")
    assert pdf["type"] == "file"
    assert pdf["file"]["file_data"].startswith("data:application/pdf;base64,")


def test_mock_provider_text_mode():
    result = MockProvider().extract_document(
        b"Meeting notes\n- item", "text/plain", ScanMode.TEXT, "", extraction_schema()
    )
    assert result["type"] == DocType.TEXT.value
    assert result["vendor"] == "Meeting notes"
    assert result["amount"] == 0


def test_mock_provider_is_deterministic():
    provider = MockProvider()
    first = provider.extract_document(b"Receipt total", "text/plain", ScanMode.FINANCE, "", extraction_schema())
    second = provider.extract_document(b"Receipt total", "text/plain", ScanMode.FINANCE, "", extraction_schema())
    assert first == second
    assert first["type"] == DocType.RECEIPT.value
