from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from liftoff.schemas.exercise_set import SetRead

class SessionCreate(BaseModel):
    workout_id: str

class SessionExerciseCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    exercise_id: str = Field(alias="exerciseId")

class ExerciseSnapshotRead(BaseModel):
    id: str | None = None
    name: str
    sets: int
    reps: int
    weight: float

    model_config = {"from_attributes": True}

class SessionExerciseRead(BaseModel):
    id: str
    session_id: str
    exercise_id: str | None = None
    exercise: ExerciseSnapshotRead
    sets: list[SetRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class SessionRead(BaseModel):
    id: str
    user_id: str
    workout_id: str | None = None
    workout_name: str
    started_at: datetime
    ended_at: datetime | None = None
    is_active: bool
    exercises: list[SessionExerciseRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
