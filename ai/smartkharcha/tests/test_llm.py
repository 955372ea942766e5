"""Tests for LLM providers and document analysis."""

import json
from types import SimpleNamespace

import httpx
import pytest

from smartkharcha.core.config import settings
from smartkharcha.generation.documents import DocumentAnalysisError, analyze_document
from smartkharcha.generation.llm import (
    LLMProvider,
    OllamaLLMProvider,
    OpenAILLMProvider,
    get_llm_provider,
)

IMAGE_URI = "data:image/png;base64,iVBORw0KGgo="


class StubProvider(LLMProvider):
    def __init__(self, response=None, error=None):
        super().__init__()
        self.response = response
        self.error = error
        self.kwargs = None

    def generate(self, prompt, system_prompt=None, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.response


def test_base_provider_not_implemented():
    with pytest.raises(NotImplementedError):
        LLMProvider().generate("hi")


def test_openai_provider_requires_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "openai")
    monkeypatch.setattr(settings, "openai_api_key", "")

    with pytest.raises(ValueError):
        get_llm_provider()


def test_factory_builds_ollama(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "ollama")

    assert isinstance(get_llm_provider(), OllamaLLMProvider)


def test_openai_provider_request(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    provider = OpenAILLMProvider()
    captured = {}

    def create(**kwargs):
        captured.update(kwargs)
        message = SimpleNamespace(content='  {"reply": "ok"}  ')
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    text = provider.generate("question", system_prompt="system", json_mode=True, max_tokens=50)

    assert text == '{"reply": "ok"}'
    assert captured["messages"][0] == {"role": "system", "content": "system"}
    assert captured["messages"][1] == {"role": "user", "content": "question"}
    assert captured["response_format"] == {"type": "json_object"}
    assert captured["max_tokens"] == 50


def test_openai_provider_images(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    provider = OpenAILLMProvider()
    captured = {}

    def create(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    assert provider.generate("describe", images=[IMAGE_URI]) == ""
    content = captured["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": "describe"}
    assert content[1] == {"type": "image_url", "image_url": {"url": IMAGE_URI}}
    assert captured["model"] == settings.openai_vision_model


def test_openai_provider_propagates_errors(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    provider = OpenAILLMProvider()

    def create(**kwargs):
        raise RuntimeError("rate limited")

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    with pytest.raises(RuntimeError):
        provider.generate("question")


def test_ollama_provider_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": " {\"a\": 1} "})

    provider = OllamaLLMProvider()
    provider.client = httpx.Client(base_url="http://ollama.test", transport=httpx.MockTransport(handler))

    text = provider.generate("prompt", system_prompt="sys", json_mode=True, images=[IMAGE_URI])

    assert text == '{"a": 1}'
    assert captured["path"] == "/api/generate"
    assert captured["body"]["prompt"] == "sys\n\nprompt"
    assert captured["body"]["format"] == "json"
    assert captured["body"]["images"] == ["iVBORw0KGgo="]
    assert captured["body"]["stream"] is False


def test_ollama_provider_http_error():
    provider = OllamaLLMProvider()
    provider.client = httpx.Client(
        base_url="http://ollama.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )

    with pytest.raises(httpx.HTTPStatusError):
        provider.generate("prompt")


def test_analyze_document_success():
    provider = StubProvider(
        response=json.dumps(
            {
                "document_type": "Invoice",
                "extracted_data": {"Total Amount": "4,500"},
                "summary": "Electricity bill for March.",
            }
        )
    )

    analysis = analyze_document(provider, IMAGE_URI)

    assert analysis.document_type == "Invoice"
    assert analysis.extracted_data["Total Amount"] == "4,500"
    assert provider.kwargs["images"] == [IMAGE_URI]
    assert provider.kwargs["json_mode"] is True


def test_analyze_document_provider_error():
    with pytest.raises(DocumentAnalysisError):
        analyze_document(StubProvider(error=RuntimeError("down")), IMAGE_URI)


def test_analyze_document_bad_payload():
    with pytest.raises(DocumentAnalysisError):
        analyze_document(StubProvider(response='{"summary": "missing type"}'), IMAGE_URI)
