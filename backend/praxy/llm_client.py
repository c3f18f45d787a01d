from __future__ import annotations
import httpx
from typing import Any, Dict, Optional
from .settings import ScoringConfig


class OpenRouterClient:
	def __init__(
		self,
		config: ScoringConfig,
		*,
		title: str = "Praxy Scorer",
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		if not config.api_key:
			raise ValueError("OPENROUTER_API_KEY is not configured")
		self.config = config
		self.base_url = config.base_url
		self._headers = {
			"Authorization": f"Bearer {config.api_key}",
			"Content-Type": "application/json",
			"HTTP-Referer": config.referer,
			"X-Title": title,
		}
		self._client = httpx.AsyncClient(timeout=config.timeout_seconds, transport=transport)

	async def complete(self, prompt: str) -> str:
		"""Send a single user message and return the completion text.

		Raises httpx.HTTPStatusError on non-2xx responses, httpx.RequestError on
		transport failures (including timeouts) and RuntimeError when the body
		does not carry a completion.
		"""
		payload: Dict[str, Any] = {
			"model": self.config.model,
			"messages": [{"role": "user", "content": prompt}],
			"max_tokens": self.config.max_tokens,
			"temperature": self.config.temperature,
		}
		r = await self._client.post(self.base_url, headers=self._headers, json=payload)
		r.raise_for_status()
		try:
			data = r.json()
			content = data["choices"][0]["message"]["content"]
		except Exception:
			raise RuntimeError(f"Unexpected OpenRouter response: {r.text[:500]}")
		if not isinstance(content, str):
			raise RuntimeError("OpenRouter completion content is not text")
		return content

	async def aclose(self) -> None:
		await self._client.aclose()
