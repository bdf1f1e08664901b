"""ChatGPT translation backend."""

import asyncio
import logging
import aiohttp
from typing import Dict, List

from .base import AbstractTranslationBackend
from ..errors import TranslationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional translator. Translate the following text to {language}. "
    "Return ONLY the translation."
)


class ChatGPTTranslator(AbstractTranslationBackend):
    """Translates text with a two-message prompt to the chat completions endpoint."""

    service_name = "ChatGPT"

    def __init__(self,
                 api_key: str,
                 model: str = "gpt-4o-mini",
                 temperature: float = 0.2,
                 base_url: str = "https://api.openai.com/v1",
                 timeout_seconds: float = 60.0):
        """Initialize ChatGPT translator.

        Args:
            api_key: OpenAI API key
            model: ChatGPT model to use for translation
            temperature: Sampling temperature; kept low for stable output
            base_url: API root, without trailing slash
            timeout_seconds: Total time allowed for one request
        """
        if not api_key:
            raise ValueError("OpenAI API key is required")
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.url = f"{base_url.rstrip('/')}/chat/completions"
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

        logger.info(f"ChatGPTTranslator initialized with model: {model}")

    @staticmethod
    def build_messages(text: str, target_language: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT.format(language=target_language)},
            {"role": "user", "content": text},
        ]

    async def translate(self, text: str, target_language: str) -> str:
        if not text:
            return ""

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        data = {
            "model": self.model,
            "messages": self.build_messages(text, target_language),
            "temperature": self.temperature,
        }

        logger.debug(f"Translating {len(text)} chars to {target_language}")

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.url, headers=headers, json=data) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise TranslationError(f"ChatGPT API error: {response.status} - {error_text}")
                    result = await response.json()
        except aiohttp.ClientError as e:
            raise TranslationError(f"Translation request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TranslationError("Translation request timed out") from e
        except ValueError as e:
            raise TranslationError(f"ChatGPT API returned invalid JSON: {e}") from e

        choices = result.get("choices") if isinstance(result, dict) else None
        if not choices:
            logger.warning("ChatGPT response contained no choices")
            return ""

        try:
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Malformed ChatGPT response: {e}") from e

        return (content or "").strip()
