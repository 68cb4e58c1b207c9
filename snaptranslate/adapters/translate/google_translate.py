"""
Google Translate (v2) adapter.

Query-parameterized POST: key, q, target, source.
Response: {"data": {"translations": [{"translatedText": "..."}]}}
"""
import html

import httpx

from snaptranslate.adapters.translate.base import Translator
from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.contracts import LanguagePair, TranslationResult
from snaptranslate.services.config import TRANSLATE_API_URL


def parse_translation(data: dict) -> str:
    try:
        text = data["data"]["translations"][0]["translatedText"]
    except (KeyError, IndexError, TypeError) as e:
        raise errors.TranslationError("malformed response: no translatedText", cause=e) from e
    if not isinstance(text, str):
        raise errors.TranslationError("malformed response: translatedText is not a string")
    # v2 returns HTML-escaped text by default
    return html.unescape(text)


class GoogleTranslator(Translator):
    def __init__(self, status_store, api_key: str | None, url: str = TRANSLATE_API_URL,
                 timeout: float = 15.0, client: httpx.AsyncClient | None = None):
        self.status = status_store
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._client = client
        if not api_key:
            self.status.log("google_translate: GOOGLE_CLOUD_API_KEY not set")

    async def _post(self, params: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.url, params=params, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, params=params)

    async def translate(self, label: str, pair: LanguagePair) -> TranslationResult:
        if not label or not label.strip():
            raise ValueError("translate() requires a non-empty label")

        params = {"q": label, "target": pair.target_code, "source": pair.source_code}
        if self.api_key:
            params = {"key": self.api_key, **params}
        self.status.log(f"google_translate: {pair.source_code}→{pair.target_code} q='{label}'")
        try:
            resp = await self._post(params)
        except httpx.TimeoutException as e:
            raise errors.TranslationError(f"timeout after {self.timeout}s", cause=e) from e
        except httpx.HTTPError as e:
            raise errors.TranslationError(f"transport error: {e}", cause=e) from e

        if not resp.is_success:
            self.status.log(f"google_translate: HTTP {resp.status_code} — {resp.text[:300]}")
            raise errors.TranslationError(f"HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise errors.TranslationError("response is not JSON", cause=e) from e

        text = parse_translation(data)
        self.status.log(f"google_translate: → {text}")
        return TranslationResult(text=text)
