from fastapi import Depends
from sqlalchemy.orm import Session

from liftoff.db import Database, get_database, get_db
from liftoff.services import ProgressAggregator, SessionEngine, WorkoutStore

def get_workout_store(db: Session = Depends(get_db), database: Database = Depends(get_database)) -> WorkoutStore:
    return WorkoutStore(db, database.backend)

def get_session_engine(db: Session = Depends(get_db), database: Database = Depends(get_database)) -> SessionEngine:
    return SessionEngine(db, database.backend)

def get_progress_aggregator(
    db: Session = Depends(get_db), database: Database = Depends(get_database)
) -> ProgressAggregator:
    return ProgressAggregator(db, database.backend)
