from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import PracticeSession
from ..scenarios import RCACase, get_case, list_cases
from ..scoring.dispatch import score_rca
from ..scoring.fallback import GOOD_ATTEMPT_THRESHOLD, round_half_up
from ..scoring.schemas import RCAScoringInput
from ..settings import ScoringConfig, get_scoring_config
from .progress import award_xp, get_or_create_user, session_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rca", tags=["rca"])

SIMULATOR = "rca"


def xp_for_case(case: RCACase, score: int) -> int:
	return round_half_up(case.xp_reward * score / 100)


@router.get("/cases")
def cases():
	return {"success": True, "cases": [c.public_view() for c in list_cases()]}


@router.get("/cases/{case_id}")
def case(case_id: str):
	found = get_case(case_id)
	if found is None:
		raise HTTPException(status_code=404, detail="Case not found")
	return {"success": True, "case": found.model_dump()}


class SubmitRequest(BaseModel):
	clerk_id: str
	case_id: str
	root_cause: str = ""
	reasoning: str = ""
	five_whys: List[Optional[str]] = Field(default_factory=list, max_length=5)
	fishbone: Optional[Dict[str, Any]] = None
	time_seconds: Optional[int] = Field(default=None, ge=0)


@router.post("/submit")
async def submit(
	req: SubmitRequest,
	db: Session = Depends(get_db),
	config: ScoringConfig = Depends(get_scoring_config),
):
	clerk_id = (req.clerk_id or "").strip()
	if not clerk_id:
		raise HTTPException(status_code=400, detail="clerk_id is required")
	found = get_case(req.case_id)
	if found is None:
		raise HTTPException(status_code=404, detail="Case not found")

	result = await score_rca(
		RCAScoringInput(
			submitted_root_cause=req.root_cause,
			submitted_reasoning=req.reasoning,
			correct_root_cause=found.root_cause,
			correct_reasoning=found.correct_reasoning,
			five_whys=req.five_whys,
			fishbone=req.fishbone,
		),
		config,
	)
	xp = xp_for_case(found, result.score)
	try:
		get_or_create_user(db, clerk_id)
		row = PracticeSession(
			user_id=clerk_id,
			simulator_type=SIMULATOR,
			level=found.level_number,
			scenario_id=found.id,
			score=result.score,
			total_questions=None,
			xp_earned=xp,
			time_seconds=req.time_seconds,
			feedback_json=result.model_dump_json(),
		)
		db.add(row)
		award_xp(db, clerk_id, xp)
		db.commit()
	except Exception:
		db.rollback()
		logger.exception("Failed to save RCA session for %s", clerk_id)
		raise HTTPException(status_code=500, detail="Failed to save RCA session")
	return {
		"success": True,
		"session": {"id": row.id},
		"score": result.score,
		"xp_earned": xp,
		"feedback": result.feedback.model_dump(),
		"correct_root_cause": found.root_cause,
		"correct_fix": found.correct_fix,
	}


@router.get("/progress")
def progress(clerk_id: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
	if not clerk_id:
		raise HTTPException(status_code=400, detail="clerk_id is required")
	rows = (
		db.query(PracticeSession.scenario_id)
		.filter(
			PracticeSession.user_id == clerk_id,
			PracticeSession.simulator_type == SIMULATOR,
			PracticeSession.score >= GOOD_ATTEMPT_THRESHOLD,
		)
		.distinct()
		.all()
	)
	return {"success": True, "completed_cases": sorted(r[0] for r in rows if r[0])}


@router.get("/sessions/{session_id}")
def session(session_id: str, db: Session = Depends(get_db)):
	row = db.get(PracticeSession, session_id)
	if row is None or row.simulator_type != SIMULATOR:
		raise HTTPException(status_code=404, detail="Session not found")
	return {"success": True, "session": session_payload(row)}
