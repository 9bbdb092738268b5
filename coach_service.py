from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Generic, Mapping, Optional, TypeVar

from llm_client import ClaudeClient, OpenAIClient, ReasoningClient
from llm_errors import NoOfflineEquivalent, RemoteFailure
from models import (
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
from offline_engine import OfflineDecisionEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

OFFLINE_ADVISORY = "Remote coach unavailable, using offline mode"


@dataclass(frozen=True)
class CoachResult(Generic[T]):
    """Answer of one coaching call and where it came from."""

    result: T
    source: Provider
    advisory: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.advisory is not None


class CoachService:
    """Route coaching requests to a remote backend with offline fallback."""

    def __init__(
        self,
        clients: Optional[Mapping[Provider, ReasoningClient]] = None,
        engine: Optional[OfflineDecisionEngine] = None,
        default_provider: Provider = Provider.OFFLINE,
    ) -> None:
        self.engine = engine or OfflineDecisionEngine()
        self.default_provider = default_provider
        self._lock = threading.Lock()
        self._clients: dict[Provider, ReasoningClient] = {}
        self.configure(clients or {})

    @classmethod
    def from_settings(
        cls,
        settings,
        claude_api_key: Optional[str] = None,
        openai_api_key: Optional[str] = None,
    ) -> "CoachService":
        """Build clients for every non-empty key; bad URLs fail here."""
        common = dict(
            timeout=settings.request_timeout,
            plan_timeout=settings.plan_timeout,
            max_tokens=settings.max_tokens,
            plan_max_tokens=settings.plan_max_tokens,
        )
        clients: dict[Provider, ReasoningClient] = {}
        if claude_api_key:
            clients[Provider.CLAUDE] = ClaudeClient(
                claude_api_key,
                url=settings.claude_url,
                model=settings.claude_model,
                anthropic_version=settings.anthropic_version,
                **common,
            )
        if openai_api_key:
            clients[Provider.OPENAI] = OpenAIClient(
                openai_api_key,
                url=settings.openai_url,
                model=settings.openai_model,
                **common,
            )
        return cls(
            clients,
            engine=OfflineDecisionEngine.from_settings(settings),
            default_provider=settings.provider,
        )

    def configure(self, clients: Mapping[Provider, ReasoningClient]) -> None:
        """Replace the whole client set, e.g. after a settings change."""
        if Provider.OFFLINE in clients:
            raise ValueError("offline mode cannot have a remote client")
        with self._lock:
            self._clients = dict(clients)

    def client_for(self, provider: Optional[Provider]) -> Optional[ReasoningClient]:
        provider = provider or self.default_provider
        if provider is Provider.OFFLINE:
            return None
        return self._clients.get(provider)

    def _with_fallback(
        self,
        provider: Optional[Provider],
        remote: Callable[[ReasoningClient], T],
        offline: Callable[[], T],
    ) -> CoachResult[T]:
        client = self.client_for(provider)
        advisory = None
        if client is not None:
            try:
                return CoachResult(remote(client), client.provider)
            except RemoteFailure as e:
                advisory = f"{OFFLINE_ADVISORY}: {e}"
                logger.warning("%s failed, falling back to offline engine: %s", client.provider.value, e)
        return CoachResult(offline(), Provider.OFFLINE, advisory)

    def _remote_only(
        self,
        provider: Optional[Provider],
        remote: Callable[[ReasoningClient], T],
        what: str,
    ) -> CoachResult[T]:
        client = self.client_for(provider)
        if client is None:
            raise NoOfflineEquivalent(
                f"{what} requires an AI provider. Configure Claude or OpenAI in settings."
            )
        try:
            return CoachResult(remote(client), client.provider)
        except RemoteFailure as e:
            logger.warning("%s failed for %s: %s", client.provider.value, what.lower(), e)
            raise

    def generate_session_plan(
        self, context: PlanRequestContext, provider: Optional[Provider] = None
    ) -> CoachResult[SessionPlan]:
        return self._with_fallback(
            provider,
            lambda c: c.generate_session_plan(context),
            lambda: self.engine.generate_session_plan(context),
        )

    def generate_insight(
        self, session: SessionSummary, provider: Optional[Provider] = None
    ) -> CoachResult[Insight]:
        return self._with_fallback(
            provider,
            lambda c: c.generate_insight(session),
            lambda: self.engine.generate_insight(session),
        )

    def analyze_stall(
        self, context: StallContext, provider: Optional[Provider] = None
    ) -> CoachResult[StallReport]:
        return self._with_fallback(
            provider,
            lambda c: c.analyze_stall(context),
            lambda: self.engine.analyze_stall(context),
        )

    def generate_weekly_review(
        self, context: WeeklyReviewContext, provider: Optional[Provider] = None
    ) -> CoachResult[WeeklyReview]:
        return self._with_fallback(
            provider,
            lambda c: c.generate_weekly_review(context),
            lambda: self.engine.generate_weekly_review(context),
        )

    def generate_custom_workout(
        self, request: CustomWorkoutRequest, provider: Optional[Provider] = None
    ) -> CoachResult[CustomWorkout]:
        return self._remote_only(
            provider, lambda c: c.generate_custom_workout(request), "Custom workout generation"
        )

    def generate_multi_week_plan(
        self, request: MultiWeekPlanRequest, provider: Optional[Provider] = None
    ) -> CoachResult[MultiWeekPlan]:
        return self._remote_only(
            provider, lambda c: c.generate_multi_week_plan(request), "Plan generation"
        )
