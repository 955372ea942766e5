"""LLM provider abstraction."""

import logging
from typing import Any, Optional

import httpx
from openai import OpenAI

from smartkharcha.core.config import settings

logger = logging.getLogger(__name__)


class LLMProvider:
    """Abstract LLM provider."""

    def __init__(self):
        self.model_name = ""

    def generate(self, prompt: str, system_prompt: Optional[str] = None, **kwargs: Any) -> str:
        """Generate text from prompt.

        Supported kwargs: ``temperature``, ``max_tokens``, ``json_mode`` (ask for a
        JSON object) and ``images`` (list of base64 data URIs).
        """
        raise NotImplementedError


class OpenAILLMProvider(LLMProvider):
    """OpenAI (or OpenAI-compatible, e.g. Groq) LLM provider."""

    def __init__(self):
        super().__init__()
        self.client = OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url or None,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )
        self.model_name = settings.openai_chat_model
        self.vision_model_name = settings.openai_vision_model

    def generate(self, prompt: str, system_prompt: Optional[str] = None, **kwargs: Any) -> str:
        """Generate text using the chat completions API."""
        try:
            messages = []
            if system_prompt:
                messages.append({"role": "system", "content": system_prompt})

            images = kwargs.get("images") or []
            if images:
                content: Any = [{"type": "text", "text": prompt}]
                content.extend({"type": "image_url", "image_url": {"url": uri}} for uri in images)
            else:
                content = prompt
            messages.append({"role": "user", "content": content})

            request: dict[str, Any] = {
                "model": self.vision_model_name if images else self.model_name,
                "messages": messages,
                "temperature": kwargs.get("temperature", settings.llm_temperature),
                "max_tokens": kwargs.get("max_tokens", settings.llm_max_tokens),
            }
            if kwargs.get("json_mode"):
                request["response_format"] = {"type": "json_object"}

            response = self.client.chat.completions.create(**request)

            return (response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.error(f"Error generating with OpenAI: {e}")
            raise


class OllamaLLMProvider(LLMProvider):
    """Ollama LLM provider."""

    def __init__(self):
        super().__init__()
        self.client = httpx.Client(base_url=settings.ollama_host, timeout=settings.llm_timeout_seconds)
        self.model_name = settings.ollama_model

    def generate(self, prompt: str, system_prompt: Optional[str] = None, **kwargs: Any) -> str:
        """Generate text using Ollama API."""
        try:
            full_prompt = prompt
            if system_prompt:
                full_prompt = f"{system_prompt}\n\n{prompt}"

            payload: dict[str, Any] = {
                "model": self.model_name,
                "prompt": full_prompt,
                "stream": False,
                "options": {
                    "temperature": kwargs.get("temperature", settings.llm_temperature),
                    "num_predict": kwargs.get("max_tokens", settings.llm_max_tokens),
                },
            }
            if kwargs.get("json_mode"):
                payload["format"] = "json"
            images = kwargs.get("images") or []
            if images:
                # Ollama wants raw base64 without the data URI prefix
                payload["images"] = [uri.split(",", 1)[-1] for uri in images]

            response = self.client.post("/api/generate", json=payload)
            response.raise_for_status()

            result = response.json()
            return result.get("response", "").strip()
        except Exception as e:
            logger.error(f"Error generating with Ollama: {e}")
            raise


def get_llm_provider() -> LLMProvider:
    """Get configured LLM provider."""
    if settings.llm_provider == "openai":
        if not settings.openai_api_key:
            raise ValueError("OpenAI API key not set")
        return OpenAILLMProvider()
    elif settings.llm_provider == "ollama":
        return OllamaLLMProvider()
    else:
        raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")
