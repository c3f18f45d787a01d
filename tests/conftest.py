"""
Shared fixtures: scoring inputs, agent settings and an API client on in-memory SQLite.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from praxy.db import Base, get_db
from praxy.main import app
from praxy.settings import ScoringConfig, Settings, get_scoring_config, get_settings
from praxy.scoring.schemas import CallScoringInput, RCAScoringInput


@pytest.fixture
def call_input():
	return CallScoringInput(
		scenario_id="cc-2",
		transcript=[
			{"role": "user", "content": "Hi Michael, this is Dana from Acme. Do you have a minute?"},
			{"role": "agent", "content": "I'm busy. What is it?"},
		],
		outcome="success",
		duration_seconds=180,
	)


@pytest.fixture
def rca_input():
	return RCAScoringInput(
		submitted_root_cause="the database connection failed under load",
		submitted_reasoning="Latency only spikes at peak hours and the connection count is pinned at the limit.",
		correct_root_cause="Database connection pool exhausted under load",
		correct_reasoning="Connections are held by the export job.",
		five_whys=["Why slow?", "Why waiting?", "Why no connections?", "", ""],
		fishbone={"technology": ["pool size"]},
	)


@pytest.fixture
def test_settings():
	return Settings(
		elevenlabs_agent_gatekeeper="agent-gatekeeper",
		elevenlabs_agent_decision_maker="agent-decision",
		elevenlabs_agent_skeptic="agent-skeptic",
		elevenlabs_agent_budget="agent-budget",
		elevenlabs_agent_hostile="agent-hostile",
	)


@pytest.fixture
def client(test_settings):
	engine = create_engine(
		"sqlite://",
		connect_args={"check_same_thread": False},
		poolclass=StaticPool,
		future=True,
	)
	TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
	Base.metadata.create_all(bind=engine)

	def _get_db():
		db = TestingSession()
		try:
			yield db
		finally:
			db.close()

	app.dependency_overrides[get_db] = _get_db
	app.dependency_overrides[get_settings] = lambda: test_settings
	app.dependency_overrides[get_scoring_config] = lambda: ScoringConfig(api_key=None)
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()
		engine.dispose()
