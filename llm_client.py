from __future__ import annotations
import json
import logging
from typing import Optional
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, ValidationError

import prompts
from llm_errors import (
    BackendError,
    InvalidEndpoint,
    InvalidResponseEnvelope,
    NoContent,
    TransportError,
)
from llm_parsing import decode_response
from models import (
    CoachModel,
    CustomWorkout,
    CustomWorkoutRequest,
    Insight,
    MultiWeekPlan,
    MultiWeekPlanRequest,
    PlanRequestContext,
    Provider,
    SessionPlan,
    SessionSummary,
    StallContext,
    StallReport,
    WeeklyReview,
    WeeklyReviewContext,
)

logger = logging.getLogger(__name__)


# --- response envelopes ---


class ClaudeContentBlock(BaseModel):
    type: str
    text: Optional[str] = None


class ClaudeEnvelope(BaseModel):
    content: list[ClaudeContentBlock]

    def text(self) -> str:
        for block in self.content:
            if block.type == "text" and block.text:
                return block.text
        raise NoContent()


class OpenAIMessage(BaseModel):
    role: str = "assistant"
    content: Optional[str] = None


class OpenAIChoice(BaseModel):
    message: OpenAIMessage


class OpenAIEnvelope(BaseModel):
    choices: list[OpenAIChoice]

    def text(self) -> str:
        if not self.choices or not self.choices[0].message.content:
            raise NoContent()
        return self.choices[0].message.content


def serialize(value: CoachModel | list | dict) -> str:
    """Stable JSON text: identical input always yields identical bytes."""
    if isinstance(value, CoachModel):
        value = value.to_payload()
    elif isinstance(value, list):
        value = [v.to_payload() if isinstance(v, CoachModel) else v for v in value]
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


class ReasoningClient:
    """One remote coaching backend.

    Every operation makes exactly one HTTP call and either returns a
    validated response model or raises a ``RemoteFailure`` subclass.
    Subclasses supply the request shape and unwrap their envelope.
    """

    provider: Provider
    envelope: type[BaseModel]

    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        timeout: float = 90.0,
        plan_timeout: float = 180.0,
        max_tokens: int = 4096,
        plan_max_tokens: int = 16384,
        session: Optional[requests.Session] = None,
    ) -> None:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidEndpoint(url)
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.plan_timeout = plan_timeout
        self.max_tokens = max_tokens
        self.plan_max_tokens = plan_max_tokens
        self.http = session if session is not None else requests

    # --- operations ---

    def generate_session_plan(self, context: PlanRequestContext) -> SessionPlan:
        message = f"Context:\n{serialize(context)}\n\n{prompts.PLAN_PROMPT}"
        return decode_response(self.send(message), SessionPlan)

    def generate_insight(self, session: SessionSummary) -> Insight:
        message = f"Workout Summary:\n{serialize(session)}\n\n{prompts.INSIGHT_PROMPT}"
        return decode_response(self.send(message), Insight)

    def analyze_stall(self, context: StallContext) -> StallReport:
        message = f"Stall Analysis Context:\n{serialize(context)}\n\n{prompts.STALL_PROMPT}"
        return decode_response(self.send(message), StallReport)

    def generate_weekly_review(self, context: WeeklyReviewContext) -> WeeklyReview:
        message = f"Weekly Training Data:\n{serialize(context)}\n\n{prompts.WEEKLY_REVIEW_PROMPT}"
        return decode_response(self.send(message), WeeklyReview)

    def generate_custom_workout(self, request: CustomWorkoutRequest) -> CustomWorkout:
        history = "\n".join(
            f"{name}: {e1rm}kg" for name, e1rm in sorted(request.recent_exercise_history.items())
        )
        message = (
            f'User Request: "{request.user_prompt}"\n\n'
            f"Time Available: {request.time_available_minutes} minutes\n"
            f"Location: {request.location.value}\n"
            f"User Goal: {request.goal.value}\n"
            f"Equipment Available: {', '.join(request.equipment_available)}\n\n"
            f"Available Exercises:\n{serialize(list(request.available_exercises))}\n\n"
            f"Recent Exercise History (name: lastE1RM):\n{history or 'None'}\n\n"
            f"{prompts.CUSTOM_WORKOUT_PROMPT}"
        )
        return decode_response(self.send(message), CustomWorkout)

    def generate_multi_week_plan(self, request: MultiWeekPlanRequest) -> MultiWeekPlan:
        deloads = "Yes (recommend every 4th week)" if request.include_deloads else "No"
        message = (
            f"Generate a complete {request.duration_weeks}-week workout plan.\n\n"
            "User Specifications:\n"
            f"- Goal: {request.goal.value}\n"
            f"- Duration: {request.duration_weeks} weeks\n"
            f"- Training Days per Week: {request.days_per_week}\n"
            f"- Preferred Split: {request.split}\n"
            f"- Available Equipment: {', '.join(request.equipment)}\n"
            f"- Include Deload Weeks: {deloads}\n"
            f"- Focus Areas: {', '.join(request.focus_areas) or 'None specified'}\n\n"
            f"{prompts.MULTI_WEEK_PLAN_PROMPT}"
        )
        raw = self.send(message, max_tokens=self.plan_max_tokens, timeout=self.plan_timeout)
        return decode_response(raw, MultiWeekPlan)

    # --- transport ---

    def headers(self) -> dict[str, str]:
        raise NotImplementedError()

    def body(self, message: str, max_tokens: int) -> dict:
        raise NotImplementedError()

    def send(
        self, message: str, max_tokens: Optional[int] = None, timeout: Optional[float] = None
    ) -> str:
        """POST one prompt and return the raw text answer."""
        body = self.body(message, max_tokens or self.max_tokens)
        logger.debug("%s request: %d prompt chars", self.provider.value, len(message))
        try:
            resp = self.http.post(
                self.url,
                headers=self.headers(),
                json=body,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{self.provider.value} request failed: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise BackendError(resp.status_code, resp.text)
        try:
            envelope = self.envelope.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise InvalidResponseEnvelope(f"Invalid response from API: {e}") from e
        return envelope.text()


class ClaudeClient(ReasoningClient):
    """Anthropic messages API; the answer sits in typed content blocks."""

    provider = Provider.CLAUDE
    envelope = ClaudeEnvelope

    def __init__(
        self,
        api_key: str,
        url: str = "https://api.anthropic.com/v1/messages",
        model: str = "claude-sonnet-4-20250514",
        anthropic_version: str = "2023-06-01",
        **kwargs,
    ) -> None:
        super().__init__(api_key, url, model, **kwargs)
        self.anthropic_version = anthropic_version

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.anthropic_version,
        }

    def body(self, message: str, max_tokens: int) -> dict:
        return {
            "model": self.model,
            "max_tokens": max_tokens,
            "system": prompts.SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": message}],
        }


class OpenAIClient(ReasoningClient):
    """OpenAI chat completions; the answer sits in ``choices[0].message``."""

    provider = Provider.OPENAI
    envelope = OpenAIEnvelope

    def __init__(
        self,
        api_key: str,
        url: str = "https://api.openai.com/v1/chat/completions",
        model: str = "gpt-4o-mini",
        **kwargs,
    ) -> None:
        super().__init__(api_key, url, model, **kwargs)

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def body(self, message: str, max_tokens: int) -> dict:
        return {
            "model": self.model,
            "max_completion_tokens": max_tokens,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": prompts.SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
        }
