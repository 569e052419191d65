from liftoff.services.guard import EntityKind, OwnershipGuard
from liftoff.services.progress import ProgressAggregator, ProgressEntry
from liftoff.services.session_engine import SessionEngine
from liftoff.services.workout_store import WorkoutStore

__all__ = [
    "EntityKind",
    "OwnershipGuard",
    "ProgressAggregator",
    "ProgressEntry",
    "SessionEngine",
    "WorkoutStore",
]
