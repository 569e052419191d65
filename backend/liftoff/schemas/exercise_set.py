from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

PosInt = Annotated[int, Field(ge=1, le=1000)]
NonNegFloat = Annotated[float, Field(ge=0, le=10000)]
# Notes: trimmed, up to 500 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class SetCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_exercise_id: str = Field(alias="sessionExerciseId")
    reps: PosInt
    weight: NonNegFloat = 0

class SetLog(BaseModel):
    reps: PosInt
    weight: NonNegFloat
    notes: NotesStr | None = None

class SetComplete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    set_index: int = Field(alias="setIndex")

class SetRead(BaseModel):
    id: str
    session_exercise_id: str
    reps: int
    weight: float
    completed: bool
    notes: str | None = None
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
