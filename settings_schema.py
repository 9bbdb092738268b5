from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models import Provider


class SettingsSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: Provider = Provider.OFFLINE
    claude_model: str = "claude-sonnet-4-20250514"
    claude_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    openai_model: str = "gpt-4o-mini"
    openai_url: str = "https://api.openai.com/v1/chat/completions"
    request_timeout: float = Field(default=90.0, ge=60.0)
    plan_timeout: float = Field(default=180.0, ge=60.0)
    max_tokens: int = Field(default=4096, gt=0)
    plan_max_tokens: int = Field(default=16384, gt=0)
    bar_weight: float = Field(default=20.0, gt=0)
    baseline_weight: float = Field(default=20.0, gt=0)
    weight_increment: float = Field(default=2.5, gt=0)
    minutes_per_set: int = Field(default=3, gt=0)


def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
