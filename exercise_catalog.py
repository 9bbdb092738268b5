from __future__ import annotations
from typing import Iterable, Optional

from models import ExerciseDescriptor

BODY_PARTS = ("chest", "shoulders", "arms", "back", "legs", "core")

# name, targeted body parts, movement pattern, compound
_CATALOG_ROWS: list[tuple[str, tuple[str, ...], str, bool]] = [
    # horizontal push
    ("Bench Press", ("chest", "shoulders", "arms"), "horizontalPush", True),
    ("Incline Bench Press", ("chest", "shoulders", "arms"), "horizontalPush", True),
    ("Dumbbell Bench Press", ("chest", "shoulders", "arms"), "horizontalPush", True),
    ("Floor Press", ("chest", "arms"), "horizontalPush", True),
    ("Push-ups", ("chest", "shoulders", "arms"), "horizontalPush", True),
    ("Dips", ("chest", "shoulders", "arms"), "horizontalPush", True),
    ("Machine Chest Press", ("chest", "shoulders", "arms"), "horizontalPush", True),
    # vertical push
    ("Overhead Press", ("shoulders", "arms"), "verticalPush", True),
    ("Dumbbell Shoulder Press", ("shoulders", "arms"), "verticalPush", True),
    # vertical pull
    ("Pull-ups", ("back", "arms"), "verticalPull", True),
    ("Chin-ups", ("back", "arms"), "verticalPull", True),
    ("Lat Pulldown", ("back", "arms"), "verticalPull", True),
    ("Banded Pull-ups", ("back", "arms"), "verticalPull", True),
    # horizontal pull
    ("Barbell Row", ("back", "arms"), "horizontalPull", True),
    ("Dumbbell Row", ("back", "arms"), "horizontalPull", True),
    ("Chest Supported Row", ("back", "arms"), "horizontalPull", True),
    ("Cable Row", ("back", "arms"), "horizontalPull", True),
    ("Inverted Row", ("back", "arms"), "horizontalPull", True),
    # squat
    ("Barbell Squat", ("legs",), "squat", True),
    ("Front Squat", ("legs", "core"), "squat", True),
    ("Goblet Squat", ("legs",), "squat", True),
    ("Leg Press", ("legs",), "squat", True),
    ("Hack Squat", ("legs",), "squat", True),
    # hinge
    ("Deadlift", ("back", "legs"), "hinge", True),
    ("Romanian Deadlift", ("back", "legs"), "hinge", True),
    ("Dumbbell Romanian Deadlift", ("back", "legs"), "hinge", True),
    # lunge
    ("Bulgarian Split Squat", ("legs",), "lunge", True),
    ("Walking Lunges", ("legs",), "lunge", True),
    # arms
    ("Barbell Curl", ("arms",), "isolation", False),
    ("Dumbbell Curl", ("arms",), "isolation", False),
    ("Cable Curl", ("arms",), "isolation", False),
    ("Band Curl", ("arms",), "isolation", False),
    ("Tricep Pushdown", ("arms",), "isolation", False),
    ("Overhead Tricep Extension", ("arms",), "isolation", False),
    ("Close Grip Bench Press", ("chest", "arms"), "horizontalPush", True),
    ("Diamond Push-ups", ("chest", "arms"), "horizontalPush", True),
    # shoulders
    ("Lateral Raise", ("shoulders",), "isolation", False),
    ("Face Pull", ("shoulders", "back"), "isolation", False),
    ("Rear Delt Fly", ("shoulders", "back"), "isolation", False),
    # leg isolation
    ("Leg Extension", ("legs",), "isolation", False),
    ("Leg Curl", ("legs",), "isolation", False),
    # core
    ("Cable Crunch", ("core",), "isolation", False),
    ("Plank", ("core",), "isolation", False),
]


class ExerciseCatalog:
    """Static lookup of exercise name to targeted body parts."""

    def __init__(self, rows: Optional[Iterable[tuple[str, tuple[str, ...], str, bool]]] = None) -> None:
        self._by_name: dict[str, ExerciseDescriptor] = {}
        for name, parts, pattern, compound in rows if rows is not None else _CATALOG_ROWS:
            unknown = set(parts) - set(BODY_PARTS)
            if unknown:
                raise ValueError(f"unknown body part(s) for {name}: {sorted(unknown)}")
            if name in self._by_name:
                raise ValueError(f"duplicate catalog entry: {name}")
            self._by_name[name] = ExerciseDescriptor(
                name=name,
                targeted_body_parts=frozenset(parts),
                movement_pattern=pattern,
                is_compound=compound,
            )

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def get(self, name: str) -> Optional[ExerciseDescriptor]:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def descriptors(self) -> list[ExerciseDescriptor]:
        """All descriptors ordered by name."""
        return [self._by_name[n] for n in self.names()]

    def by_movement_pattern(self, pattern: str) -> list[str]:
        return [d.name for d in self.descriptors() if d.movement_pattern == pattern]


DEFAULT_CATALOG = ExerciseCatalog()
