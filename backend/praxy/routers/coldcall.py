from __future__ import annotations
import json
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import PracticeSession
from ..scenarios import ScenarioMeta, get_agent_id, get_scenario, list_scenarios
from ..scoring.dispatch import score_call
from ..scoring.schemas import CallScoringInput, CallScoringResult, Outcome, TranscriptTurn
from ..settings import ScoringConfig, Settings, get_scoring_config, get_settings
from .progress import award_xp, get_or_create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coldcall", tags=["coldcall"])

SIMULATOR = "cold-call"


def xp_for_call(score: int) -> int:
	return score // 2


@router.get("/scenarios", response_model=List[ScenarioMeta])
def scenarios(s: Settings = Depends(get_settings)):
	return list_scenarios(s)


@router.get("/scenarios/{scenario_id}", response_model=ScenarioMeta)
def scenario(scenario_id: str, s: Settings = Depends(get_settings)):
	found = get_scenario(scenario_id, s)
	if found is None:
		raise HTTPException(status_code=404, detail="Scenario not found")
	return found


@router.get("/agents/{level}")
def agent(level: int, s: Settings = Depends(get_settings)):
	return {"level": level, "agent_id": get_agent_id(level, s)}


@router.post("/score", response_model=CallScoringResult)
async def score(req: CallScoringInput, config: ScoringConfig = Depends(get_scoring_config)):
	return await score_call(req, config)


class StartCallRequest(BaseModel):
	clerk_id: str
	scenario_id: str


@router.post("/start")
def start_call(req: StartCallRequest, db: Session = Depends(get_db), s: Settings = Depends(get_settings)):
	clerk_id = (req.clerk_id or "").strip()
	if not clerk_id:
		raise HTTPException(status_code=400, detail="clerk_id is required")
	meta = get_scenario(req.scenario_id, s)
	if meta is None:
		raise HTTPException(status_code=404, detail="Scenario not found")
	try:
		get_or_create_user(db, clerk_id)
		# Unscored until the call ends
		row = PracticeSession(
			user_id=clerk_id,
			simulator_type=SIMULATOR,
			level=meta.level,
			scenario_id=meta.id,
			score=None,
			total_questions=None,
			xp_earned=0,
		)
		db.add(row)
		db.commit()
	except Exception:
		db.rollback()
		logger.exception("Failed to start cold call session for %s", clerk_id)
		raise HTTPException(status_code=500, detail="Failed to start call session")
	return {"success": True, "session_id": row.id, "agent_id": meta.agent_id, "scenario": meta.model_dump()}


class EndCallRequest(BaseModel):
	clerk_id: str
	scenario_id: str
	session_id: Optional[str] = None
	transcript: List[TranscriptTurn] = Field(default_factory=list)
	duration_seconds: int = Field(ge=0)
	outcome: Outcome


@router.post("/end")
async def end_call(
	req: EndCallRequest,
	db: Session = Depends(get_db),
	config: ScoringConfig = Depends(get_scoring_config),
	s: Settings = Depends(get_settings),
):
	clerk_id = (req.clerk_id or "").strip()
	if not clerk_id:
		raise HTTPException(status_code=400, detail="clerk_id is required")
	meta = get_scenario(req.scenario_id, s)
	if meta is None:
		raise HTTPException(status_code=404, detail="Scenario not found")

	row = db.get(PracticeSession, req.session_id) if req.session_id else None
	if row is not None and (row.user_id != clerk_id or row.simulator_type != SIMULATOR):
		raise HTTPException(status_code=404, detail="Session not found")
	if row is not None and row.score is not None and row.feedback_json:
		# Already ended: report the stored result, XP is not awarded again
		stored = CallScoringResult.model_validate_json(row.feedback_json)
		return {"success": True, "score": stored.score, "xp_earned": row.xp_earned, "feedback": stored.feedback.model_dump()}

	result = await score_call(
		CallScoringInput(
			scenario_id=req.scenario_id,
			transcript=req.transcript,
			outcome=req.outcome,
			duration_seconds=req.duration_seconds,
		),
		config,
	)
	xp = xp_for_call(result.score)
	try:
		get_or_create_user(db, clerk_id)
		if row is None:
			row = PracticeSession(user_id=clerk_id, simulator_type=SIMULATOR)
			if req.session_id:
				row.id = req.session_id
			db.add(row)
		row.level = meta.level
		row.scenario_id = meta.id
		row.score = result.score
		row.total_questions = None
		row.xp_earned = xp
		row.time_seconds = req.duration_seconds
		row.feedback_json = result.model_dump_json()
		row.completed_at = datetime.utcnow()
		award_xp(db, clerk_id, xp)
		db.commit()
	except Exception:
		db.rollback()
		logger.exception("Failed to save cold call session for %s", clerk_id)
		raise HTTPException(status_code=500, detail="Failed to save call session")
	return {"success": True, "score": result.score, "xp_earned": xp, "feedback": result.feedback.model_dump()}


@router.get("/progress")
def progress(clerk_id: Optional[str] = Query(default=None), limit: int = Query(default=10, ge=1, le=100), db: Session = Depends(get_db)):
	if not clerk_id:
		raise HTTPException(status_code=400, detail="clerk_id is required")
	base = db.query(PracticeSession).filter(
		PracticeSession.user_id == clerk_id,
		PracticeSession.simulator_type == SIMULATOR,
		PracticeSession.score.isnot(None),
	)
	rows = base.order_by(PracticeSession.completed_at.desc()).all()
	return {
		"success": True,
		"progress": {
			"total_sessions": len(rows),
			"best_score": max((r.score for r in rows), default=0),
			"completed_scenarios": sorted({r.scenario_id for r in rows if r.scenario_id}),
		},
		"recent_sessions": [
			{
				"id": r.id,
				"level": r.level,
				"score": r.score,
				"time_seconds": r.time_seconds,
				"feedback": json.loads(r.feedback_json) if r.feedback_json else None,
				"completed_at": r.completed_at.isoformat() if r.completed_at else None,
			}
			for r in rows[:limit]
		],
	}
