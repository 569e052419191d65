from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field

from liftoff.models import WorkoutType

# Upper bounds keep a single session start from fanning out without limit
NameStr = Annotated[str, Field(max_length=255)]
SetCount = Annotated[int, Field(ge=1, le=50)]
RepCount = Annotated[int, Field(ge=1, le=1000)]
WeightNum = Annotated[float, Field(ge=0, le=10000)]

class WorkoutCreate(BaseModel):
    name: NameStr
    type: WorkoutType = WorkoutType.strength

class WorkoutRename(BaseModel):
    name: NameStr

class ExerciseCreate(BaseModel):
    name: NameStr
    sets: SetCount
    reps: RepCount
    weight: WeightNum = 0
    workout_id: str

class ExerciseUpdate(BaseModel):
    name: NameStr
    sets: SetCount
    reps: RepCount
    weight: WeightNum = 0

class ExerciseRead(BaseModel):
    id: str
    workout_id: str
    name: str
    sets: int
    reps: int
    weight: float
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: str
    user_id: str
    name: str
    type: str
    exercises: list[ExerciseRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
