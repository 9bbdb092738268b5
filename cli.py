import argparse
import json
import logging
import os
import sys

from coach_service import CoachService
from config import APP_VERSION, load_settings
from llm_errors import CoachError
from models import (
    CustomWorkoutRequest,
    MultiWeekPlanRequest,
    PlanRequestContext,
    Provider,
    SessionSummary,
    StallContext,
    WeeklyReviewContext,
)

# subcommand -> (request model, CoachService method)
COMMANDS = {
    "plan": (PlanRequestContext, "generate_session_plan"),
    "insight": (SessionSummary, "generate_insight"),
    "stall": (StallContext, "analyze_stall"),
    "review": (WeeklyReviewContext, "generate_weekly_review"),
    "custom": (CustomWorkoutRequest, "generate_custom_workout"),
    "program": (MultiWeekPlanRequest, "generate_multi_week_plan"),
}


def load_request(path: str, model):
    with open(path, "r", encoding="utf-8") as f:
        return model.model_validate(json.load(f))


def build_service(settings_path: str) -> CoachService:
    settings = load_settings(settings_path)
    return CoachService.from_settings(
        settings,
        claude_api_key=os.environ.get("ANTHROPIC_API_KEY"),
        openai_api_key=os.environ.get("OPENAI_API_KEY"),
    )


def run(cmd: str, context_path: str, settings_path: str, provider=None) -> dict:
    """Execute one coaching command and return the JSON-ready output."""
    model, method = COMMANDS[cmd]
    request = load_request(context_path, model)
    service = build_service(settings_path)
    outcome = getattr(service, method)(request, provider)
    return {
        "source": outcome.source.value,
        "advisory": outcome.advisory,
        "result": outcome.result.to_payload(),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Strength coach commands")
    parser.add_argument("--settings", default="settings.yaml")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = parser.add_subparsers(dest="cmd", required=True)
    for name in COMMANDS:
        p = sub.add_parser(name)
        p.add_argument("--context", required=True, help="JSON request file")
        p.add_argument(
            "--provider",
            choices=[prov.value for prov in Provider],
            default=None,
            help="override the provider from settings",
        )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    provider = Provider(args.provider) if args.provider else None
    try:
        output = run(args.cmd, args.context, args.settings, provider)
    except (CoachError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    if output["advisory"]:
        print(output["advisory"], file=sys.stderr)
    print(json.dumps(output["result"], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
