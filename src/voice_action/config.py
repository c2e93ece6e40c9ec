"""Runtime configuration for VoiceAction."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="VOICE_ACTION_", env_file=".env", extra="ignore")

    app_name: str = "voice-action"
    log_level: str = "WARNING"
    agent_id: str = Field(
        default="69a280bb96ed232cfb0c7c82",
        description="Identifier of the remote agent that classifies and fulfills commands.",
    )
    agent_endpoint: str | None = Field(
        default=None,
        description="HTTP endpoint of the agent service. When unset, the offline echo agent is used.",
    )
    agent_api_key: str | None = None
    agent_timeout_seconds: float = 60.0
    history_path: str = Field(
        default="~/.voice-action/history.json",
        description="JSON file backing the durable key-value store for command history.",
    )
    history_key: str = "voiceaction-history"
    speech_language: str = "en-US"
    phrase_time_limit: float = 15.0


settings = Settings()
