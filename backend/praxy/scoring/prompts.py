from __future__ import annotations

import json

from ..scenarios import get_scenario
from .schemas import CallScoringInput, RCAScoringInput


def _scenario_context(scenario_id: str) -> str:
	scenario = get_scenario(scenario_id)
	if scenario is None:
		return f"SCENARIO: {scenario_id}"
	return (
		f"SCENARIO: {scenario.id} - {scenario.title} ({scenario.difficulty})\n"
		f"PROSPECT: {scenario.prospect.name}, {scenario.prospect.role} at {scenario.company}\n"
		f"OBJECTIVE: {scenario.objective}"
	)


def build_call_prompt(data: CallScoringInput) -> str:
	transcript = json.dumps([turn.model_dump(exclude_none=True) for turn in data.transcript], indent=2)
	return (
		"You are Praxy, scoring a cold call simulation for sales training.\n\n"
		f"{_scenario_context(data.scenario_id)}\n"
		f"OUTCOME: {data.outcome} (success/partial/failure)\n"
		f"DURATION: {data.duration_seconds} seconds\n\n"
		f"TRANSCRIPT:\n{transcript}\n\n"
		"Score this call from 0-100 based on:\n"
		"1. Opening (20 pts): Was the introduction clear and professional?\n"
		"2. Value Proposition (25 pts): Did they lead with value, not features?\n"
		"3. Objection Handling (25 pts): How well did they handle resistance?\n"
		"4. Professionalism (15 pts): Tone, pacing, respect for prospect's time\n"
		"5. Outcome Achievement (15 pts): Did they achieve the objective?\n\n"
		"Respond ONLY with valid JSON (no prose, no markdown code blocks):\n"
		"{\n"
		'  "score": <0-100>,\n'
		'  "feedback": {\n'
		'    "opening": { "score": <0-20>, "comment": "<feedback>" },\n'
		'    "value_proposition": { "score": <0-25>, "comment": "<feedback>" },\n'
		'    "objection_handling": { "score": <0-25>, "comment": "<feedback>" },\n'
		'    "professionalism": { "score": <0-15>, "comment": "<feedback>" },\n'
		'    "outcome": { "score": <0-15>, "comment": "<feedback>" },\n'
		'    "overall": "<2-3 sentence summary>",\n'
		'    "praxy_message": "<warm, encouraging message>",\n'
		'    "top_tip": "<one specific thing to improve next time>"\n'
		"  }\n"
		"}"
	)


def build_rca_prompt(data: RCAScoringInput) -> str:
	return (
		"You are Praxy, a warm and encouraging AI scoring an RCA (Root Cause Analysis) exercise.\n\n"
		"CORRECT ANSWER:\n"
		f"Root Cause: {data.correct_root_cause}\n"
		f"Reasoning: {data.correct_reasoning}\n\n"
		"STUDENT SUBMISSION:\n"
		f"Root Cause: {data.submitted_root_cause}\n"
		f"Reasoning: {data.submitted_reasoning}\n"
		f"Five Whys Used: {json.dumps(data.five_whys)}\n"
		f"Fishbone Categories: {json.dumps(data.fishbone if data.fishbone is not None else {})}\n\n"
		"Score the submission from 0-100 based on:\n"
		"1. Root Cause Accuracy (40 points): Did they identify the correct root cause or something close?\n"
		"2. Reasoning Quality (30 points): Is their logic sound? Did they connect the dots?\n"
		"3. Methodology (20 points): Did they use 5 Whys and Fishbone effectively?\n"
		"4. Clarity (10 points): Is the explanation clear and concise?\n\n"
		"IMPORTANT: Be encouraging but honest. Even if they got it wrong, highlight what they did well.\n\n"
		"Respond ONLY with valid JSON (no prose, no markdown, no code blocks):\n"
		"{\n"
		'  "score": <0-100>,\n'
		'  "feedback": {\n'
		'    "root_cause_accuracy": { "score": <0-40>, "comment": "<specific feedback>" },\n'
		'    "reasoning_quality": { "score": <0-30>, "comment": "<specific feedback>" },\n'
		'    "methodology": { "score": <0-20>, "comment": "<specific feedback>" },\n'
		'    "clarity": { "score": <0-10>, "comment": "<specific feedback>" },\n'
		'    "overall": "<2-3 sentence summary of their performance>",\n'
		'    "praxy_message": "<warm, encouraging message in first person, like a supportive friend>"\n'
		"  }\n"
		"}"
	)
