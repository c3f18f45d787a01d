from __future__ import annotations
import json
import uuid
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import PracticeSession, Progress, User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["progress"])

MAX_LEVEL = 10


def _today() -> str:
	return datetime.utcnow().date().isoformat()


def _user_payload(user: User) -> Dict[str, Any]:
	return {
		"id": user.id,
		"name": user.name or "Learner",
		"total_xp": user.total_xp or 0,
		"streak_days": user.streak_days or 0,
		"last_active_date": user.last_active_date,
	}


def session_payload(row: PracticeSession) -> Dict[str, Any]:
	return {
		"id": row.id,
		"simulator_type": row.simulator_type,
		"level": row.level,
		"scenario_id": row.scenario_id,
		"score": row.score,
		"total_questions": row.total_questions,
		"xp_earned": row.xp_earned,
		"time_seconds": row.time_seconds,
		"feedback": json.loads(row.feedback_json) if row.feedback_json else None,
		"completed_at": row.completed_at.isoformat() if row.completed_at else None,
	}


def get_or_create_user(db: Session, user_id: str) -> tuple[User, bool]:
	user = db.get(User, user_id)
	if user is not None:
		return user, False
	user = User(id=user_id, name="Learner", total_xp=0, streak_days=1, last_active_date=_today())
	db.add(user)
	db.add(Progress(user_id=user_id, simulator_type="balance-sheet"))
	db.flush()
	return user, True


def award_xp(db: Session, user_id: str, xp: int) -> None:
	user, _ = get_or_create_user(db, user_id)
	user.total_xp = (user.total_xp or 0) + xp
	db.add(user)


def _touch_streak(db: Session, user: User) -> None:
	today = _today()
	if user.last_active_date == today:
		return
	yesterday = (datetime.fromisoformat(today) - timedelta(days=1)).date().isoformat()
	user.streak_days = (user.streak_days or 0) + 1 if user.last_active_date == yesterday else 1
	user.last_active_date = today
	db.add(user)
	db.commit()


def _get_progress(db: Session, user_id: str, simulator_type: str) -> Progress:
	row = (
		db.query(Progress)
		.filter(Progress.user_id == user_id, Progress.simulator_type == simulator_type)
		.first()
	)
	if row is None:
		row = Progress(user_id=user_id, simulator_type=simulator_type, current_level=1, completed_levels="[]", badges="[]")
		db.add(row)
		db.commit()
	return row


def _progress_payload(row: Progress) -> Dict[str, Any]:
	return {
		"current_level": row.current_level or 1,
		"completed_levels": json.loads(row.completed_levels or "[]"),
		"badges": json.loads(row.badges or "[]"),
	}


def _require(user_id: Optional[str]) -> str:
	user_id = (user_id or "").strip()
	if not user_id:
		raise HTTPException(status_code=400, detail="user_id is required")
	return user_id


@router.get("/user")
def get_user(user_id: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
	if not user_id:
		user, is_new = get_or_create_user(db, str(uuid.uuid4()))
	else:
		user, is_new = get_or_create_user(db, user_id)
	if not is_new:
		_touch_streak(db, user)
	db.commit()
	return {"success": True, "user": _user_payload(user), "is_new": is_new}


@router.get("/progress")
def get_progress(
	user_id: Optional[str] = Query(default=None),
	simulator_type: str = Query(default="balance-sheet"),
	db: Session = Depends(get_db),
):
	row = _get_progress(db, _require(user_id), simulator_type)
	return {"success": True, "progress": _progress_payload(row)}


class ProgressUpdate(BaseModel):
	user_id: str
	level: int = Field(ge=1)
	passed: bool
	badge: Optional[str] = None
	simulator_type: str = "balance-sheet"


@router.post("/progress")
def update_progress(req: ProgressUpdate, db: Session = Depends(get_db)):
	row = _get_progress(db, _require(req.user_id), req.simulator_type)
	completed: List[int] = json.loads(row.completed_levels or "[]")
	badges: List[str] = json.loads(row.badges or "[]")
	if req.passed and req.level not in completed:
		completed.append(req.level)
	if req.badge and req.badge not in badges:
		badges.append(req.badge)
	current = row.current_level or 1
	if req.passed:
		current = max(current, req.level + 1)
	row.current_level = min(current, MAX_LEVEL)
	row.completed_levels = json.dumps(completed)
	row.badges = json.dumps(badges)
	db.add(row)
	db.commit()
	return {"success": True, "progress": _progress_payload(row)}


class SessionCreate(BaseModel):
	user_id: str
	level: int = Field(ge=1)
	score: int = Field(ge=0)
	total_questions: int = 5
	xp_earned: int = Field(ge=0)
	time_seconds: Optional[int] = Field(default=None, ge=0)
	simulator_type: str = "balance-sheet"


@router.post("/sessions")
def save_session(req: SessionCreate, db: Session = Depends(get_db)):
	user_id = _require(req.user_id)
	row = PracticeSession(
		user_id=user_id,
		simulator_type=req.simulator_type,
		level=req.level,
		score=req.score,
		total_questions=req.total_questions,
		xp_earned=req.xp_earned,
		time_seconds=req.time_seconds,
	)
	db.add(row)
	user = db.get(User, user_id)
	if user is not None:
		user.total_xp = (user.total_xp or 0) + req.xp_earned
		db.add(user)
	db.commit()
	return {"success": True, "session": session_payload(row)}


@router.get("/sessions")
def list_sessions(user_id: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
	rows = (
		db.query(PracticeSession)
		.filter(PracticeSession.user_id == _require(user_id))
		.order_by(PracticeSession.completed_at.desc())
		.all()
	)
	return {"success": True, "sessions": [session_payload(r) for r in rows]}


@router.get("/stats")
def stats(user_id: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
	user_id = _require(user_id)
	user = db.get(User, user_id)
	row = db.query(Progress).filter(Progress.user_id == user_id).first()
	session_count = (
		db.query(PracticeSession)
		.filter(PracticeSession.user_id == user_id, PracticeSession.score.isnot(None))
		.count()
	)
	payload = _progress_payload(row) if row is not None else {"current_level": 1, "completed_levels": [], "badges": []}
	return {
		"success": True,
		"stats": {
			"total_xp": user.total_xp if user else 0,
			"streak_days": user.streak_days if user else 0,
			"current_level": payload["current_level"],
			"completed_levels": payload["completed_levels"],
			"badge_count": len(payload["badges"]),
			"session_count": session_count,
		},
	}
