# backend/slotbook/tasks/lock_cleanup.py
"""
Celery task that sweeps expired checkout holds.

Safe to run while shoppers are taking holds: it only deletes rows whose
expires_at has already passed, and those rows never block a new holder.
"""

import logging
from typing import Any, Callable, Dict, TypeVar, cast

from celery import shared_task
from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


TaskCallable = TypeVar("TaskCallable", bound=Callable[..., Any])


def typed_shared_task(
    *task_args: Any, **task_kwargs: Any
) -> Callable[[TaskCallable], TaskCallable]:
    return cast(Callable[[TaskCallable], TaskCallable], shared_task(*task_args, **task_kwargs))


@typed_shared_task(
    name="slotbook.tasks.lock_cleanup.cleanup_expired_slot_locks",
    bind=True,
    autoretry_for=(Exception,),
    retry_kwargs={"max_retries": 3, "countdown": 60},
)
def cleanup_expired_slot_locks(self: Any) -> Dict[str, Any]:
    """Delete every expired slot lock and report how many were removed."""
    db: Session = SessionLocal()
    try:
        service = AvailabilityService(db)
        removed = service.cleanup_expired_locks()
        logger.info(f"Expired slot lock sweep removed {removed} rows")
        return {"status": "success", "removed": removed}
    except Exception as e:
        logger.error(f"Error in expired slot lock sweep: {str(e)}")
        raise
    finally:
        db.close()
