"""Static practice content: cold-call scenarios and RCA investigation cases.

Both registries are read-only tables keyed by level number (1-5) or by id.
The voice-AI agent for each cold-call level is resolved from settings at
lookup time so that tests and deployments can supply their own agents.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel

from .settings import Settings, settings as default_settings


Difficulty = Literal["beginner", "intermediate", "advanced"]


class Prospect(BaseModel):
	name: str
	role: str


class ScenarioMeta(BaseModel):
	id: str
	level: int
	title: str
	company: str
	prospect: Prospect
	difficulty: Difficulty
	objective: str
	tips: List[str]
	agent_id: Optional[str] = None


class DataSource(BaseModel):
	id: str
	name: str
	data: Dict[str, Any]


class RCACase(BaseModel):
	id: str
	level_number: int
	title: str
	initial_problem: str
	metric_name: str
	metric_drop: str
	time_period: Optional[str] = None
	available_data: List[DataSource]
	root_cause: str
	correct_reasoning: str
	correct_fix: str
	difficulty: Difficulty
	xp_reward: int

	def public_view(self) -> Dict[str, Any]:
		"""Listing view without the data sources or the answer."""
		return self.model_dump(exclude={"available_data", "root_cause", "correct_reasoning", "correct_fix"})


_SCENARIOS: List[Dict[str, Any]] = [
	{
		"id": "cc-1",
		"level": 1,
		"title": "The Friendly Gatekeeper",
		"company": "Stripe",
		"prospect": {"name": "Sarah", "role": "Receptionist"},
		"difficulty": "beginner",
		"objective": "Get transferred to the decision maker",
		"tips": [
			"Be polite and professional",
			"Have a clear reason for calling",
			"Ask for the person by name if possible",
		],
	},
	{
		"id": "cc-2",
		"level": 2,
		"title": "The Busy Decision Maker",
		"company": "Shopify",
		"prospect": {"name": "Michael Chen", "role": "VP of Operations"},
		"difficulty": "intermediate",
		"objective": "Earn a 15-minute meeting",
		"tips": [
			"Lead with value, not features",
			"Mention a relevant pain point",
			"Respect their time",
		],
	},
	{
		"id": "cc-3",
		"level": 3,
		"title": "The Skeptic",
		"company": "Razorpay",
		"prospect": {"name": "Priya Sharma", "role": "CFO"},
		"difficulty": "intermediate",
		"objective": 'Overcome the "we already have a solution" objection',
		"tips": [
			"Acknowledge their current solution",
			"Ask about gaps or pain points",
			"Offer a comparison, not replacement",
		],
	},
	{
		"id": "cc-4",
		"level": 4,
		"title": "The Budget Blocker",
		"company": "Freshworks",
		"prospect": {"name": "Arjun Reddy", "role": "Head of Procurement"},
		"difficulty": "advanced",
		"objective": 'Navigate past "it\'s too expensive"',
		"tips": [
			"Reframe price as investment",
			"Uncover the real concern",
			"Offer flexible options",
		],
	},
	{
		"id": "cc-5",
		"level": 5,
		"title": "The Hostile Executive",
		"company": "Zerodha",
		"prospect": {"name": "Vikram Mehta", "role": "CEO"},
		"difficulty": "advanced",
		"objective": "Stay professional and find an opening",
		"tips": [
			"Stay calm no matter what",
			"Acknowledge their frustration",
			"Know when to gracefully exit",
		],
	},
]


def _agent_map(s: Settings) -> Dict[int, Optional[str]]:
	return {
		1: s.elevenlabs_agent_gatekeeper,
		2: s.elevenlabs_agent_decision_maker,
		3: s.elevenlabs_agent_skeptic,
		4: s.elevenlabs_agent_budget,
		5: s.elevenlabs_agent_hostile,
	}


def get_agent_id(level: int, s: Optional[Settings] = None) -> Optional[str]:
	"""Voice-AI agent for a level; unmapped levels get the level-1 agent."""
	agents = _agent_map(s or default_settings)
	return agents.get(level) or agents[1]


def list_scenarios(s: Optional[Settings] = None) -> List[ScenarioMeta]:
	s = s or default_settings
	return [ScenarioMeta(**row, agent_id=get_agent_id(row["level"], s)) for row in _SCENARIOS]


def get_scenario(key: Union[str, int], s: Optional[Settings] = None) -> Optional[ScenarioMeta]:
	for scenario in list_scenarios(s):
		if scenario.id == key or (isinstance(key, int) and scenario.level == key):
			return scenario
	return None


_CASES: List[Dict[str, Any]] = [
	{
		"id": "rca-1",
		"level_number": 1,
		"title": "The Checkout Cliff",
		"initial_problem": "Online orders at a D2C coffee brand fell sharply overnight while site traffic stayed flat.",
		"metric_name": "Daily orders",
		"metric_drop": "-38%",
		"time_period": "Week-over-week",
		"available_data": [
			{"id": "traffic", "name": "Traffic by channel", "data": {"organic": "flat", "paid": "flat", "email": "+2%"}},
			{"id": "funnel", "name": "Checkout funnel", "data": {"cart_views": "flat", "payment_page": "flat", "payment_success": "-41%"}},
			{"id": "releases", "name": "Release log", "data": {"tuesday": "Payment gateway SDK upgraded to v4"}},
		],
		"root_cause": "Payment gateway upgrade broke card payments on mobile browsers",
		"correct_reasoning": "Traffic and cart views held steady while payment success collapsed right after the gateway SDK upgrade, and the failures are concentrated on mobile browsers.",
		"correct_fix": "Roll back the payment SDK and add mobile checkout to the release test suite",
		"difficulty": "beginner",
		"xp_reward": 100,
	},
	{
		"id": "rca-2",
		"level_number": 2,
		"title": "The Silent Signups",
		"initial_problem": "New account signups for a SaaS product dropped even though marketing spend increased.",
		"metric_name": "Weekly signups",
		"metric_drop": "-27%",
		"time_period": "Month-over-month",
		"available_data": [
			{"id": "spend", "name": "Marketing spend", "data": {"search": "+20%", "social": "+15%"}},
			{"id": "email", "name": "Email delivery", "data": {"verification_sent": "flat", "verification_delivered": "-60%"}},
			{"id": "dns", "name": "DNS change log", "data": {"sender_domain": "SPF record replaced during migration"}},
		],
		"root_cause": "Verification emails landing in spam after sender domain migration",
		"correct_reasoning": "Signup starts are up with spend, but verification emails stopped being delivered after the SPF record was replaced, so users never complete registration.",
		"correct_fix": "Restore SPF and DKIM records for the sender domain and resend pending verifications",
		"difficulty": "beginner",
		"xp_reward": 120,
	},
	{
		"id": "rca-3",
		"level_number": 3,
		"title": "The Slow Dashboard",
		"initial_problem": "Enterprise customers report that the analytics dashboard times out during business hours.",
		"metric_name": "Dashboard p95 latency",
		"metric_drop": "+450%",
		"time_period": "Since last sprint",
		"available_data": [
			{"id": "latency", "name": "Latency by hour", "data": {"night": "normal", "business_hours": "timeouts"}},
			{"id": "db", "name": "Database metrics", "data": {"active_connections": "at limit", "cpu": "40%"}},
			{"id": "deploys", "name": "Deploy notes", "data": {"sprint_42": "Report export job moved to run hourly"}},
		],
		"root_cause": "Database connection pool exhausted under load by the hourly export job",
		"correct_reasoning": "Latency spikes only at peak hours while database CPU is moderate and connections sit at the pool limit; the newly hourly export job holds connections, starving dashboard queries.",
		"correct_fix": "Give the export job its own connection pool and schedule it off-peak",
		"difficulty": "intermediate",
		"xp_reward": 150,
	},
	{
		"id": "rca-4",
		"level_number": 4,
		"title": "The Vanishing Repeat Buyers",
		"initial_problem": "Repeat purchase rate at a grocery delivery app declined across all cities.",
		"metric_name": "30-day repeat rate",
		"metric_drop": "-18%",
		"time_period": "Quarter-over-quarter",
		"available_data": [
			{"id": "ratings", "name": "Order ratings", "data": {"delivery_time": "flat", "item_quality": "-1.2 stars"}},
			{"id": "substitutions", "name": "Substitutions", "data": {"rate": "3x increase", "driver": "new inventory sync"}},
			{"id": "support", "name": "Support tickets", "data": {"top_reason": "wrong items substituted"}},
		],
		"root_cause": "Inventory sync errors causing excessive product substitutions",
		"correct_reasoning": "Delivery times are unchanged but substitution rates tripled after the new inventory sync, quality ratings fell and support tickets cite wrong substitutions, which drives customers away.",
		"correct_fix": "Fix the inventory sync lag and let customers approve substitutions",
		"difficulty": "advanced",
		"xp_reward": 200,
	},
	{
		"id": "rca-5",
		"level_number": 5,
		"title": "The Margin Mystery",
		"initial_problem": "Gross margin of a marketplace fell while revenue hit a record high.",
		"metric_name": "Gross margin",
		"metric_drop": "-9 pts",
		"time_period": "Year-over-year",
		"available_data": [
			{"id": "revenue", "name": "Revenue mix", "data": {"promoted_categories": "+65%", "core": "+5%"}},
			{"id": "discounts", "name": "Discount ledger", "data": {"stacked_coupons": "allowed since pricing change"}},
			{"id": "cogs", "name": "Cost of goods", "data": {"unit_costs": "flat"}},
		],
		"root_cause": "Coupon stacking allowed by pricing change eroding margins on promoted categories",
		"correct_reasoning": "Unit costs are flat and growth is concentrated in promoted categories where a pricing change lets customers stack coupons, so revenue grows while each sale earns less.",
		"correct_fix": "Cap discounts per order and block coupon stacking on promoted categories",
		"difficulty": "advanced",
		"xp_reward": 250,
	},
]


def list_cases() -> List[RCACase]:
	return [RCACase(**row) for row in _CASES]


def get_case(key: Union[str, int]) -> Optional[RCACase]:
	for case in list_cases():
		if case.id == key or (isinstance(key, int) and case.level_number == key):
			return case
	return None
