from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


Outcome = Literal["success", "partial", "failure"]

# Dimension -> point ceiling. Each map sums to 100.
CALL_RUBRIC: Dict[str, int] = {
	"opening": 20,
	"value_proposition": 25,
	"objection_handling": 25,
	"professionalism": 15,
	"outcome": 15,
}

RCA_RUBRIC: Dict[str, int] = {
	"root_cause_accuracy": 40,
	"reasoning_quality": 30,
	"methodology": 20,
	"clarity": 10,
}


class TranscriptTurn(BaseModel):
	role: str
	content: str = Field(default="", validation_alias=AliasChoices("content", "text"))
	timestamp: Optional[float] = None


class CallScoringInput(BaseModel):
	scenario_id: str
	transcript: List[TranscriptTurn] = Field(default_factory=list)
	outcome: Outcome
	duration_seconds: int = Field(ge=0)


class RCAScoringInput(BaseModel):
	submitted_root_cause: str = ""
	submitted_reasoning: str = ""
	correct_root_cause: str = ""
	correct_reasoning: str = ""
	five_whys: List[str] = Field(default_factory=list, max_length=5)
	fishbone: Optional[Any] = None

	@field_validator(
		"submitted_root_cause",
		"submitted_reasoning",
		"correct_root_cause",
		"correct_reasoning",
		mode="before",
	)
	@classmethod
	def _none_to_empty(cls, v: Any) -> Any:
		return "" if v is None else v

	@field_validator("five_whys", mode="before")
	@classmethod
	def _drop_null_whys(cls, v: Any) -> Any:
		if v is None:
			return []
		if isinstance(v, list):
			return ["" if w is None else w for w in v]
		return v

	def answered_whys(self) -> int:
		return sum(1 for w in self.five_whys if w.strip())


class DimensionScore(BaseModel):
	score: int = Field(ge=0)
	comment: str = ""


def _check_ceilings(feedback: BaseModel, rubric: Dict[str, int]) -> None:
	for name, ceiling in rubric.items():
		dim: DimensionScore = getattr(feedback, name)
		if dim.score > ceiling:
			raise ValueError(f"{name} score {dim.score} exceeds its ceiling of {ceiling}")


class CallFeedback(BaseModel):
	opening: DimensionScore
	value_proposition: DimensionScore
	objection_handling: DimensionScore
	professionalism: DimensionScore
	outcome: DimensionScore
	overall: str
	praxy_message: str
	top_tip: str = ""

	@model_validator(mode="after")
	def _within_ceilings(self) -> "CallFeedback":
		_check_ceilings(self, CALL_RUBRIC)
		return self


class RCAFeedback(BaseModel):
	root_cause_accuracy: DimensionScore
	reasoning_quality: DimensionScore
	methodology: DimensionScore
	clarity: DimensionScore
	overall: str
	praxy_message: str

	@model_validator(mode="after")
	def _within_ceilings(self) -> "RCAFeedback":
		_check_ceilings(self, RCA_RUBRIC)
		return self


class CallScoringResult(BaseModel):
	score: int = Field(ge=0, le=100)
	feedback: CallFeedback


class RCAScoringResult(BaseModel):
	score: int = Field(ge=0, le=100)
	feedback: RCAFeedback
