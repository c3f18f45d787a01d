from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Text
from .db import Base


def _uuid() -> str:
	return str(uuid.uuid4())


class User(Base):
	__tablename__ = "users"
	# Identity comes from the external provider (clerk id)
	id = Column(String(128), primary_key=True, default=_uuid)
	email = Column(String(256), nullable=True)
	name = Column(String(128), default="Learner", nullable=False)
	total_xp = Column(Integer, default=0, nullable=False)
	streak_days = Column(Integer, default=0, nullable=False)
	last_active_date = Column(String(10), nullable=True)  # YYYY-MM-DD
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Progress(Base):
	__tablename__ = "progress"
	id = Column(String(36), primary_key=True, default=_uuid)
	user_id = Column(String(128), nullable=False, index=True)
	simulator_type = Column(String(32), default="balance-sheet", nullable=False)
	current_level = Column(Integer, default=1, nullable=False)
	completed_levels = Column(Text, default="[]", nullable=False)  # JSON array
	badges = Column(Text, default="[]", nullable=False)  # JSON array
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class PracticeSession(Base):
	__tablename__ = "sessions"
	id = Column(String(36), primary_key=True, default=_uuid)
	user_id = Column(String(128), nullable=False, index=True)
	simulator_type = Column(String(32), default="balance-sheet", nullable=False)
	level = Column(Integer, nullable=False)
	scenario_id = Column(String(64), nullable=True)  # cold-call scenario or RCA case id
	score = Column(Integer, nullable=True)  # NULL while a cold call is in progress
	total_questions = Column(Integer, default=5, nullable=True)
	xp_earned = Column(Integer, default=0, nullable=False)
	time_seconds = Column(Integer, nullable=True)
	feedback_json = Column(Text, nullable=True)  # JSON string snapshot of the scoring result
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
