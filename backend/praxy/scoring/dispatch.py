from __future__ import annotations

from typing import Optional

import httpx

from ..settings import ScoringConfig
from .fallback import score_call_fallback, score_rca_fallback
from .prompts import build_call_prompt, build_rca_prompt
from .schemas import CallScoringInput, CallScoringResult, RCAScoringInput, RCAScoringResult
from .strategy import ScoringStrategy, score_with_ai


CALL_SCORING: ScoringStrategy[CallScoringInput, CallScoringResult] = ScoringStrategy(
	name="call",
	build_prompt=build_call_prompt,
	fallback=score_call_fallback,
	result_model=CallScoringResult,
	title="Praxy Cold Call Scorer",
)

RCA_SCORING: ScoringStrategy[RCAScoringInput, RCAScoringResult] = ScoringStrategy(
	name="rca",
	build_prompt=build_rca_prompt,
	fallback=score_rca_fallback,
	result_model=RCAScoringResult,
	title="Praxy RCA Scorer",
)


async def score_call(
	data: CallScoringInput,
	config: ScoringConfig,
	*,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CallScoringResult:
	return await score_with_ai(CALL_SCORING, data, config, transport=transport)


async def score_rca(
	data: RCAScoringInput,
	config: ScoringConfig,
	*,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RCAScoringResult:
	return await score_with_ai(RCA_SCORING, data, config, transport=transport)
