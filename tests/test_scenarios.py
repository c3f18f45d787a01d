from praxy.scenarios import get_agent_id, get_case, get_scenario, list_cases, list_scenarios
from praxy.settings import Settings


def test_five_scenarios_in_level_order(test_settings):
	scenarios = list_scenarios(test_settings)
	assert [s.level for s in scenarios] == [1, 2, 3, 4, 5]
	assert [s.id for s in scenarios] == ["cc-1", "cc-2", "cc-3", "cc-4", "cc-5"]
	assert {s.difficulty for s in scenarios} == {"beginner", "intermediate", "advanced"}
	assert all(s.tips for s in scenarios)


def test_get_scenario_by_id_or_level(test_settings):
	by_id = get_scenario("cc-3", test_settings)
	by_level = get_scenario(3, test_settings)
	assert by_id == by_level
	assert by_id.prospect.name == "Priya Sharma"
	assert by_id.agent_id == "agent-skeptic"


def test_unknown_scenario():
	assert get_scenario("cc-99") is None
	assert get_scenario(0) is None


def test_agent_id_for_each_level(test_settings):
	assert get_agent_id(2, test_settings) == "agent-decision"
	assert get_agent_id(5, test_settings) == "agent-hostile"


def test_unmapped_level_uses_level_one_agent(test_settings):
	assert get_agent_id(99, test_settings) == get_agent_id(1, test_settings) == "agent-gatekeeper"


def test_missing_agent_falls_back_to_gatekeeper():
	s = Settings(elevenlabs_agent_gatekeeper="agent-gatekeeper", elevenlabs_agent_budget=None)
	assert get_agent_id(4, s) == "agent-gatekeeper"


def test_cases_registry():
	cases = list_cases()
	assert [c.level_number for c in cases] == [1, 2, 3, 4, 5]
	assert get_case("rca-3") == get_case(3)
	assert get_case("rca-3").root_cause.startswith("Database connection pool exhausted under load")
	assert get_case("nope") is None


def test_public_view_hides_answer():
	view = get_case(1).public_view()
	assert "root_cause" not in view
	assert "correct_fix" not in view
	assert "available_data" not in view
	assert view["xp_reward"] == 100
