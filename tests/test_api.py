"""
HTTP round trips through the FastAPI app with AI scoring disabled.
"""

from praxy.routers import coldcall
from praxy.scoring.fallback import score_call_fallback
from praxy.scoring.schemas import CallScoringInput


END_CALL = {
	"clerk_id": "user_abc",
	"scenario_id": "cc-1",
	"transcript": [
		{"role": "user", "content": "Hi Sarah, could you put me through to your head of payments?"},
		{"role": "agent", "content": "Sure, one moment."},
	],
	"duration_seconds": 150,
	"outcome": "success",
}


class TestColdCall:
	def test_list_scenarios(self, client):
		r = client.get("/api/coldcall/scenarios")
		assert r.status_code == 200
		body = r.json()
		assert len(body) == 5
		assert body[0]["agent_id"] == "agent-gatekeeper"

	def test_unknown_scenario_is_404(self, client):
		assert client.get("/api/coldcall/scenarios/cc-42").status_code == 404

	def test_agent_lookup_falls_back(self, client):
		r = client.get("/api/coldcall/agents/99")
		assert r.json() == {"level": 99, "agent_id": "agent-gatekeeper"}

	def test_score_only(self, client):
		r = client.post("/api/coldcall/score", json=END_CALL)
		assert r.status_code == 200
		expected = score_call_fallback(CallScoringInput(**END_CALL))
		assert r.json() == expected.model_dump()

	def test_invalid_outcome_is_rejected(self, client):
		r = client.post("/api/coldcall/score", json=dict(END_CALL, outcome="great"))
		assert r.status_code == 422

	def test_negative_duration_is_rejected(self, client):
		r = client.post("/api/coldcall/end", json=dict(END_CALL, duration_seconds=-5))
		assert r.status_code == 422

	def test_end_call_persists_and_awards_xp(self, client):
		r = client.post("/api/coldcall/end", json=END_CALL)
		assert r.status_code == 200
		body = r.json()
		assert body["success"] is True
		assert body["score"] == 85
		assert body["xp_earned"] == 42
		assert body["feedback"]["outcome"]["comment"] == "You achieved the objective!"

		progress = client.get("/api/coldcall/progress", params={"clerk_id": "user_abc"}).json()
		assert progress["progress"]["total_sessions"] == 1
		assert progress["progress"]["best_score"] == 85
		assert progress["progress"]["completed_scenarios"] == ["cc-1"]
		assert progress["recent_sessions"][0]["feedback"]["score"] == 85

		stats = client.get("/api/stats", params={"user_id": "user_abc"}).json()
		assert stats["stats"]["total_xp"] == 42
		assert stats["stats"]["session_count"] == 1

	def test_end_call_unknown_scenario(self, client):
		r = client.post("/api/coldcall/end", json=dict(END_CALL, scenario_id="cc-9"))
		assert r.status_code == 404

	def test_start_call_issues_session(self, client):
		r = client.post("/api/coldcall/start", json={"clerk_id": "user_abc", "scenario_id": "cc-1"})
		assert r.status_code == 200
		body = r.json()
		assert body["success"] is True
		assert body["agent_id"] == "agent-gatekeeper"
		assert body["scenario"]["id"] == "cc-1"
		session_id = body["session_id"]

		# an unfinished call is not counted yet
		progress = client.get("/api/coldcall/progress", params={"clerk_id": "user_abc"}).json()
		assert progress["progress"]["total_sessions"] == 0

		r = client.post("/api/coldcall/end", json=dict(END_CALL, session_id=session_id))
		assert r.json()["xp_earned"] == 42
		progress = client.get("/api/coldcall/progress", params={"clerk_id": "user_abc"}).json()
		assert progress["progress"]["total_sessions"] == 1
		assert progress["recent_sessions"][0]["id"] == session_id

	def test_start_call_validation(self, client):
		assert client.post("/api/coldcall/start", json={"clerk_id": " ", "scenario_id": "cc-1"}).status_code == 400
		assert client.post("/api/coldcall/start", json={"clerk_id": "user_abc", "scenario_id": "cc-9"}).status_code == 404

	def test_ending_call_twice_awards_xp_once(self, client):
		first = client.post("/api/coldcall/end", json=dict(END_CALL, session_id="sess-1"))
		second = client.post("/api/coldcall/end", json=dict(END_CALL, session_id="sess-1", outcome="failure"))
		assert first.status_code == 200
		assert second.status_code == 200
		assert second.json()["score"] == 85
		assert second.json()["xp_earned"] == 42

		stats = client.get("/api/stats", params={"user_id": "user_abc"}).json()["stats"]
		assert stats["session_count"] == 1
		assert stats["total_xp"] == 42

	def test_cannot_end_another_users_call(self, client):
		session_id = client.post("/api/coldcall/start", json={"clerk_id": "someone_else", "scenario_id": "cc-1"}).json()["session_id"]
		r = client.post("/api/coldcall/end", json=dict(END_CALL, session_id=session_id))
		assert r.status_code == 404

	def test_failed_save_leaves_no_user_behind(self, client, monkeypatch):
		def broken_award(db, user_id, xp):
			raise RuntimeError("disk full")

		monkeypatch.setattr(coldcall, "award_xp", broken_award)
		r = client.post("/api/coldcall/end", json=END_CALL)
		assert r.status_code == 500
		assert client.get("/api/user", params={"user_id": "user_abc"}).json()["is_new"] is True


class TestRca:
	def test_cases_hide_answers(self, client):
		cases = client.get("/api/rca/cases").json()["cases"]
		assert len(cases) == 5
		assert all("root_cause" not in c for c in cases)

	def test_case_detail(self, client):
		body = client.get("/api/rca/cases/rca-3").json()
		assert body["case"]["level_number"] == 3
		assert body["case"]["available_data"]

	def test_unknown_case_is_404(self, client):
		assert client.get("/api/rca/cases/rca-0").status_code == 404

	def test_submit_scores_against_case_answer(self, client):
		r = client.post(
			"/api/rca/submit",
			json={
				"clerk_id": "user_rca",
				"case_id": "rca-3",
				"root_cause": "the database connection failed under load",
				"reasoning": "Connections sit at the limit only during business hours while CPU is fine.",
				"five_whys": ["Why slow?", "Why queued?", "Why no free connections?", None],
				"fishbone": {"technology": ["pool size"]},
			},
		)
		assert r.status_code == 200
		body = r.json()
		# terms: database, connection, exhausted, under, hourly, export -> 3 of 6 matched
		assert body["feedback"]["root_cause_accuracy"]["score"] == 20
		assert body["score"] == 20 + 20 + 20 + 8
		assert body["xp_earned"] == 102
		assert body["correct_fix"]

		done = client.get("/api/rca/progress", params={"clerk_id": "user_rca"}).json()
		assert done["completed_cases"] == ["rca-3"]

	def test_failed_attempt_is_not_completed(self, client):
		client.post("/api/rca/submit", json={"clerk_id": "user_low", "case_id": "rca-1", "root_cause": "bad"})
		done = client.get("/api/rca/progress", params={"clerk_id": "user_low"}).json()
		assert done["completed_cases"] == []

	def test_progress_requires_clerk_id(self, client):
		assert client.get("/api/rca/progress").status_code == 400

	def test_fetch_stored_session(self, client):
		submitted = client.post(
			"/api/rca/submit",
			json={"clerk_id": "user_rca", "case_id": "rca-1", "root_cause": "bad", "time_seconds": 240},
		).json()
		r = client.get(f"/api/rca/sessions/{submitted['session']['id']}")
		assert r.status_code == 200
		session = r.json()["session"]
		assert session["scenario_id"] == "rca-1"
		assert session["time_seconds"] == 240
		assert session["feedback"]["score"] == submitted["score"]
		assert session["feedback"]["feedback"]["clarity"]["score"] == 5

	def test_unknown_session_is_404(self, client):
		assert client.get("/api/rca/sessions/nope").status_code == 404
		call_id = client.post("/api/coldcall/start", json={"clerk_id": "user_abc", "scenario_id": "cc-1"}).json()["session_id"]
		assert client.get(f"/api/rca/sessions/{call_id}").status_code == 404


class TestProgress:
	def test_new_user_is_created(self, client):
		body = client.get("/api/user").json()
		assert body["is_new"] is True
		assert body["user"]["streak_days"] == 1
		again = client.get("/api/user", params={"user_id": body["user"]["id"]}).json()
		assert again["is_new"] is False

	def test_progress_levels_and_badges(self, client):
		client.get("/api/user", params={"user_id": "learner"})
		r = client.post("/api/progress", json={"user_id": "learner", "level": 1, "passed": True, "badge": "survivor"})
		assert r.json()["progress"] == {"current_level": 2, "completed_levels": [1], "badges": ["survivor"]}

		r = client.post("/api/progress", json={"user_id": "learner", "level": 1, "passed": True, "badge": "survivor"})
		assert r.json()["progress"]["badges"] == ["survivor"]

		r = client.post("/api/progress", json={"user_id": "learner", "level": 10, "passed": True})
		assert r.json()["progress"]["current_level"] == 10

		r = client.post("/api/progress", json={"user_id": "learner", "level": 3, "passed": False})
		assert r.json()["progress"]["completed_levels"] == [1, 10]

	def test_quiz_sessions(self, client):
		client.get("/api/user", params={"user_id": "quizzer"})
		r = client.post("/api/sessions", json={"user_id": "quizzer", "level": 1, "score": 4, "xp_earned": 40, "time_seconds": 95})
		assert r.status_code == 200
		sessions = client.get("/api/sessions", params={"user_id": "quizzer"}).json()["sessions"]
		assert len(sessions) == 1
		assert sessions[0]["score"] == 4
		assert client.get("/api/stats", params={"user_id": "quizzer"}).json()["stats"]["total_xp"] == 40

	def test_sessions_require_user(self, client):
		assert client.get("/api/sessions").status_code == 400


def test_health(client):
	assert client.get("/api/health").json() == {"status": "ok", "ai_scoring_configured": False}
