from fastapi import APIRouter, Depends
from liftoff.deps.auth import get_current_user
from liftoff.deps.services import get_progress_aggregator
from liftoff.models import User
from liftoff.schemas.progress import ProgressRead
from liftoff.services import ProgressAggregator

router = APIRouter(prefix="/progress", tags=["progress"])

@router.get("", response_model=list[ProgressRead])
def get_progress(aggregator: ProgressAggregator = Depends(get_progress_aggregator),
                 current: User = Depends(get_current_user)):
    return aggregator.get_progress(current.id)
