"""
Direct HTTP client for ZhipuAI chat-completion translations.

The client only moves bytes: it posts the request, hands every received text
chunk to a FrameDecoder and the resulting frames to a DeltaAccumulator, and
reports the HTTP outcome. Retries and TLS settings are left to httpx defaults.
"""

from __future__ import annotations

import httpx

from ..logging_utils import log_operation, operation_context
from .models import PROVIDER_NAME, ChatRequest, TranslationConfig
from .streaming.models import TranslationSnapshot
from .streaming.parser import (
    DEFAULT_PLACEHOLDER,
    DeltaAccumulator,
    FrameDecoder,
    RefreshCallback,
)


class ZhipuAIClient:
    """
    Translation client for the ZhipuAI chat-completions endpoint.

    Whether a request is streamed or answered with one document is decided
    by ``config.stream``; the matching decoding path is chosen per request.
    """

    def __init__(
        self,
        config: TranslationConfig,
        api_key: str,
        *,
        placeholder: str = DEFAULT_PLACEHOLDER,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.api_key = api_key
        self.placeholder = placeholder
        self._client = httpx.AsyncClient(timeout=config.timeout, transport=transport)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    @log_operation("translate", context={"provider": PROVIDER_NAME})
    async def translate(
        self,
        prompt: str,
        on_refresh: RefreshCallback | None = None,
    ) -> TranslationSnapshot:
        """
        Send one translation request and return its final snapshot.

        ``on_refresh`` receives a TranslationSnapshot after every change to
        the result or status.

        Raises:
            TransportError: If the endpoint answers with a non-2xx status.
            DocumentParseError: If a non-streaming response is malformed.
        """
        request = ChatRequest.from_config(self.config, prompt)
        accumulator = DeltaAccumulator(
            on_refresh,
            self.placeholder,
            provider=PROVIDER_NAME,
            model=self.config.model,
        )

        async with self._client.stream(
            "POST",
            self.config.endpoint,
            json=request.to_payload(),
            headers=self._headers(),
        ) as response:
            if not response.is_success:
                accumulator.fail_transport(response.status_code)

            async with operation_context(
                "receive_response",
                context={"model": self.config.model, "stream": self.config.stream},
            ):
                if self.config.stream:
                    await self._consume_stream(response, accumulator)
                else:
                    accumulator.apply_document(await response.aread())

        return accumulator.snapshot()

    async def _consume_stream(
        self, response: httpx.Response, accumulator: DeltaAccumulator
    ) -> None:
        decoder = FrameDecoder(context={"model": self.config.model})

        async for text in response.aiter_text():
            accumulator.apply_frames(decoder.feed(text))

        accumulator.apply_frames(decoder.finalize())
        accumulator.complete()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> ZhipuAIClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
