"""
Translation backends used to fill missing dictionary values
"""

import asyncio
import logging
from typing import Callable, Optional

import aiohttp
import openai
from openai import AsyncOpenAI

from locale_sync.config.settings import Settings, TranslatorSettings
from locale_sync.models.entry import Entry
from locale_sync.utils.retry import retry_async

logger = logging.getLogger(__name__)

MarkerLookup = Callable[[str], str]


class BaseTranslator:
    """Async ``translate(text, source_lang, target_lang) -> str`` capability"""

    def __init__(self, placeholder_for: MarkerLookup):
        self.placeholder_for = placeholder_for

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        raise NotImplementedError

    def placeholder(self, text: str, source_lang: str, target_lang: str) -> str:
        """Echo ``text`` tagged with the target language's marker"""
        logger.warning(
            f'NEEDS_TRANSLATION: [{target_lang.upper()}] From {source_lang.upper()}: "{text}"'
        )
        return Entry.placeholder(text, self.placeholder_for(target_lang)).raw

    async def close(self):
        """Release backend resources"""


class PlaceholderTranslator(BaseTranslator):
    """Reference stub: never translates, only tags text for human follow-up"""

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        return self.placeholder(text, source_lang, target_lang)


class OpenAITranslator(BaseTranslator):
    """Chat-completion based translation"""

    def __init__(self, settings: TranslatorSettings, placeholder_for: MarkerLookup):
        super().__init__(placeholder_for)
        self.settings = settings
        self.client = AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url
        )

    def _build_prompt(self, text: str, source_lang: str, target_lang: str) -> str:
        return (
            f"Translate the following user interface string from '{source_lang}' to '{target_lang}'. "
            "Keep placeholders such as {{name}} or {count} unchanged. "
            "Reply with the translation only, without quotes or explanations.\n\n"
            f"{text}"
        )

    @retry_async(max_attempts=3, delay=1.0, exceptions=(openai.APIConnectionError, openai.RateLimitError))
    async def _complete(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.settings.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0
        )
        return (response.choices[0].message.content or '').strip()

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        try:
            result = await self._complete(self._build_prompt(text, source_lang, target_lang))
        except openai.OpenAIError as e:
            logger.error(f"OpenAI translation {source_lang}->{target_lang} failed: {e}")
            return self.placeholder(text, source_lang, target_lang)

        if not result:
            logger.warning(f"OpenAI returned an empty translation for: {text!r}")
            return self.placeholder(text, source_lang, target_lang)
        return result

    async def close(self):
        await self.client.close()


class LibreTranslateTranslator(BaseTranslator):
    """Client for a LibreTranslate compatible ``/translate`` endpoint"""

    def __init__(self, settings: TranslatorSettings, placeholder_for: MarkerLookup):
        super().__init__(placeholder_for)
        self.settings = settings
        self.base_url = settings.libretranslate_url
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session"""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                timeout = aiohttp.ClientTimeout(total=30, connect=10)
                self._session = aiohttp.ClientSession(timeout=timeout)
            return self._session

    async def close(self):
        """Close HTTP session"""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
                self._session = None

    @retry_async(max_attempts=3, delay=2.0, exceptions=(aiohttp.ClientError, asyncio.TimeoutError))
    async def _request(self, payload: dict) -> dict:
        session = await self._get_session()
        async with session.post(f'{self.base_url}/translate', json=payload) as response:
            if response.status != 200:
                body = await response.text()
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=body[:500]
                )
            return await response.json()

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        payload = {'q': text, 'source': source_lang, 'target': target_lang, 'format': 'text'}
        if self.settings.libretranslate_api_key:
            payload['api_key'] = self.settings.libretranslate_api_key

        try:
            data = await self._request(payload)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"LibreTranslate {source_lang}->{target_lang} failed: {e}")
            return self.placeholder(text, source_lang, target_lang)

        result = (data.get('translatedText') or '').strip() if isinstance(data, dict) else ''
        if not result:
            logger.warning(f"LibreTranslate returned no translation for: {text!r}")
            return self.placeholder(text, source_lang, target_lang)
        return result


def create_translator(settings: Settings) -> BaseTranslator:
    """Build the translator selected in settings"""
    backend = settings.translator.backend
    placeholder_for = settings.sync.placeholder_for

    if backend == 'openai':
        logger.info(f"Using OpenAI translator (model {settings.translator.model})")
        return OpenAITranslator(settings.translator, placeholder_for)
    if backend == 'libretranslate':
        logger.info(f"Using LibreTranslate at {settings.translator.libretranslate_url}")
        return LibreTranslateTranslator(settings.translator, placeholder_for)

    return PlaceholderTranslator(placeholder_for)
