from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# OpenRouter chat-completion configuration used for AI scoring (optional)
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="anthropic/claude-3.5-haiku", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="https://praxy.runable.com", validation_alias="OPENROUTER_HTTP_REFERER")
	scoring_max_tokens: int = Field(default=1024, validation_alias="SCORING_MAX_TOKENS")
	scoring_temperature: float = Field(default=0.3, validation_alias="SCORING_TEMPERATURE")
	# Upper bound on a single scoring request; on expiry the fallback scorer is used
	scoring_timeout_seconds: float = Field(default=10.0, validation_alias="SCORING_TIMEOUT_SECONDS")

	# Voice-AI agents, one per cold-call level
	elevenlabs_agent_gatekeeper: str | None = Field(default=None, validation_alias="ELEVENLABS_AGENT_GATEKEEPER")
	elevenlabs_agent_decision_maker: str | None = Field(default=None, validation_alias="ELEVENLABS_AGENT_DECISION_MAKER")
	elevenlabs_agent_skeptic: str | None = Field(default=None, validation_alias="ELEVENLABS_AGENT_SKEPTIC")
	elevenlabs_agent_budget: str | None = Field(default=None, validation_alias="ELEVENLABS_AGENT_BUDGET")
	elevenlabs_agent_hostile: str | None = Field(default=None, validation_alias="ELEVENLABS_AGENT_HOSTILE")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Logging
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


class ScoringConfig(BaseModel):
	"""The only options the scoring pipeline reads."""

	model_config = ConfigDict(frozen=True)

	api_key: Optional[str] = None
	model: str = "anthropic/claude-3.5-haiku"
	max_tokens: int = 1024
	temperature: float = 0.3
	timeout_seconds: float = 10.0
	base_url: str = "https://openrouter.ai/api/v1/chat/completions"
	referer: str = "https://praxy.runable.com"

	@classmethod
	def from_settings(cls, s: Settings) -> "ScoringConfig":
		return cls(
			api_key=s.openrouter_api_key or None,
			model=s.openrouter_model,
			max_tokens=s.scoring_max_tokens,
			temperature=s.scoring_temperature,
			timeout_seconds=s.scoring_timeout_seconds,
			base_url=s.openrouter_base_url,
			referer=s.openrouter_referer,
		)


settings = Settings()


def get_settings() -> Settings:
	return settings


def get_scoring_config() -> ScoringConfig:
	return ScoringConfig.from_settings(settings)
