"""AI-first scoring with a guaranteed deterministic baseline.

A single attempt is made against the chat-completion endpoint. Missing
credentials, non-2xx responses, transport errors, unparsable text and
results that do not fit the rubric all resolve to the domain's fallback
scorer, so callers always receive a well-formed result.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..llm_client import OpenRouterClient
from ..settings import ScoringConfig

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
ResultT = TypeVar("ResultT", bound=BaseModel)

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_ANY = re.compile(r"```\n?")


@dataclass(frozen=True)
class ScoringStrategy(Generic[InputT, ResultT]):
	name: str
	build_prompt: Callable[[InputT], str]
	fallback: Callable[[InputT], ResultT]
	result_model: Type[ResultT]
	title: str


def strip_code_fences(text: str) -> str:
	return _FENCE_ANY.sub("", _FENCE_OPEN.sub("", text)).strip()


def parse_result(text: str, result_model: Type[ResultT]) -> ResultT:
	"""Parse completion text into the result model.

	Raises json.JSONDecodeError or pydantic.ValidationError.
	"""
	payload: Any = json.loads(strip_code_fences(text))
	return result_model.model_validate(payload)


async def score_with_ai(
	strategy: ScoringStrategy[InputT, ResultT],
	data: InputT,
	config: ScoringConfig,
	*,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ResultT:
	if not config.api_key:
		return strategy.fallback(data)

	prompt = strategy.build_prompt(data)
	client = OpenRouterClient(config, title=strategy.title, transport=transport)
	try:
		text = await client.complete(prompt)
		return parse_result(text, strategy.result_model)
	except httpx.HTTPStatusError as e:
		logger.warning("%s scoring: OpenRouter returned HTTP %s, using fallback", strategy.name, e.response.status_code)
	except httpx.TimeoutException:
		logger.warning("%s scoring: OpenRouter timed out after %ss, using fallback", strategy.name, config.timeout_seconds)
	except json.JSONDecodeError as e:
		logger.warning("%s scoring: model output is not valid JSON (%s), using fallback", strategy.name, e)
	except ValidationError as e:
		logger.warning(
			"%s scoring: model output does not match the rubric (%d errors), using fallback",
			strategy.name,
			e.error_count(),
		)
	except Exception as e:
		logger.warning("%s scoring failed: %s, using fallback", strategy.name, e)
	finally:
		await client.aclose()
	return strategy.fallback(data)
