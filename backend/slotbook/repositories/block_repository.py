# backend/slotbook/repositories/block_repository.py
"""
Block Repository

Read access to owner-declared closures, plus the create/delete calls used by
the business configuration screens.
"""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.availability import AvailabilityBlock
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BlockRepository(BaseRepository[AvailabilityBlock]):
    def __init__(self, db: Session):
        super().__init__(db, AvailabilityBlock)

    def get_blocks_in_range(
        self, business_id: str, start_date: date, end_date: date
    ) -> List[AvailabilityBlock]:
        """Blocks whose block_date falls within [start_date, end_date]."""
        query = self._build_query().filter(
            AvailabilityBlock.business_id == business_id,
            AvailabilityBlock.block_date >= start_date,
            AvailabilityBlock.block_date <= end_date,
        )
        return self._execute_query(query)

    def list_blocks(
        self,
        business_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AvailabilityBlock]:
        """Blocks for a business, newest date first, optionally bounded by a range."""
        query = self._build_query().filter(AvailabilityBlock.business_id == business_id)
        if start_date is not None and end_date is not None:
            query = query.filter(
                AvailabilityBlock.block_date >= start_date,
                AvailabilityBlock.block_date <= end_date,
            )
        query = query.order_by(AvailabilityBlock.block_date.desc())
        return self._execute_query(query)

    def get_for_business(self, block_id: str, business_id: str) -> Optional[AvailabilityBlock]:
        return self.find_one_by(id=block_id, business_id=business_id)
