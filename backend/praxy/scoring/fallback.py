"""Deterministic scorers used whenever the AI provider is unavailable.

Both functions are pure: same input, same result, no I/O. They never raise
for a well-typed input.
"""

from __future__ import annotations

import math
from typing import List

from .schemas import (
	CALL_RUBRIC,
	RCA_RUBRIC,
	CallFeedback,
	CallScoringInput,
	CallScoringResult,
	DimensionScore,
	RCAFeedback,
	RCAScoringInput,
	RCAScoringResult,
)


OUTCOME_BASE_SCORES = {"success": 75, "partial": 50, "failure": 30}
DURATION_BONUS = 10
OPTIMAL_DURATION_SECONDS = (120, 300)

GOOD_ATTEMPT_THRESHOLD = 60


def round_half_up(value: float) -> int:
	# Python's round() is banker's rounding; scores round .5 up
	return int(math.floor(value + 0.5))


def _weighted(total: int, ceiling: int) -> int:
	return round_half_up(total * (ceiling / 100))


def score_call_fallback(data: CallScoringInput) -> CallScoringResult:
	base = OUTCOME_BASE_SCORES[data.outcome]
	low, high = OPTIMAL_DURATION_SECONDS
	bonus = DURATION_BONUS if low <= data.duration_seconds <= high else 0
	total = min(100, base + bonus)

	# Independent rounding per dimension; the parts may not add up to total.
	parts = {name: _weighted(total, ceiling) for name, ceiling in CALL_RUBRIC.items()}

	success = data.outcome == "success"
	failure = data.outcome == "failure"

	feedback = CallFeedback(
		opening=DimensionScore(
			score=parts["opening"],
			comment="Good opening - you got their attention"
			if success
			else "Your opening could be stronger - try leading with value",
		),
		value_proposition=DimensionScore(
			score=parts["value_proposition"],
			comment="You communicated value effectively"
			if success
			else "Focus more on specific benefits and outcomes",
		),
		objection_handling=DimensionScore(
			score=parts["objection_handling"],
			comment="Practice handling objections with empathy and questions"
			if failure
			else "You handled pushback reasonably well",
		),
		professionalism=DimensionScore(
			score=parts["professionalism"],
			comment="Your tone was professional throughout",
		),
		outcome=DimensionScore(
			score=parts["outcome"],
			comment="You achieved the objective!"
			if success
			else "You didn't fully achieve the objective, but that's part of learning",
		),
		overall=(
			f"Good work! You scored {total}/100. You're developing solid cold calling skills."
			if success
			else f"You scored {total}/100. Cold calling is tough - the key is to keep practicing and learning from each call."
		),
		praxy_message=(
			"Nice job! Every successful call builds your confidence. Ready to level up?"
			if success
			else "Hey, even experienced reps get hung up on. What matters is learning from it. "
			"Let's review what happened and try again!"
		),
		top_tip=(
			"Try to identify the prospect's pain point earlier in the call"
			if failure
			else "Great call! Next time, try to uncover even more about their specific challenges"
		),
	)
	return CallScoringResult(score=total, feedback=feedback)


def key_terms(reference: str) -> List[str]:
	"""Words longer than four characters from the reference answer."""
	return [word for word in reference.lower().split() if len(word) > 4]


def match_ratio(submitted: str, reference: str) -> float:
	terms = key_terms(reference)
	if not terms:
		return 0.0
	haystack = submitted.lower()
	matched = sum(1 for term in terms if term in haystack)
	return matched / len(terms)


def score_rca_fallback(data: RCAScoringInput) -> RCAScoringResult:
	whys = data.answered_whys()

	root_cause_score = round_half_up(
		match_ratio(data.submitted_root_cause, data.correct_root_cause) * RCA_RUBRIC["root_cause_accuracy"]
	)
	reasoning_score = 20 if len(data.submitted_reasoning) > 50 else 10
	methodology_score = (10 if whys > 2 else 5) + (10 if data.fishbone is not None else 0)
	clarity_score = 8 if len(data.submitted_root_cause) > 20 else 5

	total = root_cause_score + reasoning_score + methodology_score + clarity_score
	good = total >= GOOD_ATTEMPT_THRESHOLD

	feedback = RCAFeedback(
		root_cause_accuracy=DimensionScore(
			score=root_cause_score,
			comment="You identified key elements of the root cause!"
			if good
			else "The root cause wasn't quite right, but you were investigating in the right direction.",
		),
		reasoning_quality=DimensionScore(
			score=reasoning_score,
			comment="Good detailed reasoning!"
			if len(data.submitted_reasoning) > 100
			else "Try to explain your thinking in more detail next time.",
		),
		methodology=DimensionScore(
			score=methodology_score,
			comment="Good use of the 5 Whys technique!"
			if whys > 2
			else "Try to dig deeper with more 'why' questions.",
		),
		clarity=DimensionScore(
			score=clarity_score,
			comment="Your explanation was clear enough to understand.",
		),
		overall=(
			f"Good detective work! You scored {total}/100. You're developing solid RCA skills."
			if good
			else f"You scored {total}/100. RCA is tricky - the key is to keep asking 'why' until you hit the real root cause."
		),
		praxy_message=(
			"Nice work! You're getting the hang of this. Every case you crack makes you sharper. Ready for another one?"
			if good
			else "Hey, this stuff is hard - that's why we practice! I've seen the best analysts miss obvious things. "
			"Let's review what happened and try another case. You've got this!"
		),
	)
	return RCAScoringResult(score=total, feedback=feedback)
