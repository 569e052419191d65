import datetime as dt
from pydantic import BaseModel, ConfigDict, Field

class ProgressRead(BaseModel):
    """Serialised with the camelCase keys the client charts read."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    exercise_name: str = Field(serialization_alias="exerciseName")
    date: dt.date
    max_weight: float = Field(serialization_alias="maxWeight")
    total_volume: float = Field(serialization_alias="totalVolume")
