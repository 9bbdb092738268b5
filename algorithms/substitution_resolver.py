from __future__ import annotations
import logging
from typing import Iterable, Optional

from exercise_catalog import DEFAULT_CATALOG, ExerciseCatalog
from models import PainFlag

logger = logging.getLogger(__name__)


class SubstitutionResolver:
    """Swap exercises that load a painful body part for pain-free ones."""

    # painful part -> body parts to draw substitutes from
    ANTAGONISTS: dict[str, tuple[str, ...]] = {
        "chest": ("legs", "core"),
        "shoulders": ("legs", "core"),
        "arms": ("legs", "core"),
        "back": ("legs", "core"),
        "legs": ("back", "chest"),
        "core": ("legs", "arms"),
    }
    PREFERRED_COMPOUNDS: frozenset[str] = frozenset(
        {
            "Barbell Squat",
            "Deadlift",
            "Romanian Deadlift",
            "Barbell Row",
            "Pull-ups",
            "Lat Pulldown",
            "Leg Press",
            "Bulgarian Split Squat",
        }
    )

    def __init__(self, catalog: ExerciseCatalog | None = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def resolve(
        self, exercise_name: str, pain_flags: Iterable[PainFlag]
    ) -> Optional[tuple[str, str]]:
        """Return ``(substitute, reason)`` or ``None`` to keep the exercise.

        Exercises missing from the catalog are never substituted. Only the
        first flag that hits one of the exercise's body parts is considered.
        """
        descriptor = self.catalog.get(exercise_name)
        if descriptor is None:
            return None
        for flag in pain_flags:
            part = flag.body_part.strip().lower()
            if part not in descriptor.targeted_body_parts:
                continue
            candidates = self.alternatives(part)
            if not candidates:
                logger.info(
                    "no pain-free alternative for %s (%s pain); keeping it",
                    exercise_name,
                    part,
                )
                return None
            reason = f"Pain flag: {flag.severity.value} {part} pain"
            return candidates[0], reason
        return None

    def alternatives(self, painful_part: str) -> list[str]:
        """Ordered substitutes that do not target ``painful_part``."""
        safe = [
            d for d in self.catalog.descriptors() if painful_part not in d.targeted_body_parts
        ]
        preferred = set(self.ANTAGONISTS.get(painful_part, ()))
        pool = [d.name for d in safe if d.targeted_body_parts & preferred]
        if not pool:
            pool = [d.name for d in safe]
        compounds = [name for name in pool if name in self.PREFERRED_COMPOUNDS]
        return sorted(compounds or pool)
