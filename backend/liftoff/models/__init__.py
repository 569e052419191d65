from liftoff.models.user import User
from liftoff.models.workout import Exercise, Workout, WorkoutType
from liftoff.models.session import ExerciseSnapshot, SessionExercise, WorkoutSession
from liftoff.models.exercise_set import ExerciseSet

__all__ = [
    "User",
    "Workout",
    "WorkoutType",
    "Exercise",
    "WorkoutSession",
    "SessionExercise",
    "ExerciseSnapshot",
    "ExerciseSet",
]
