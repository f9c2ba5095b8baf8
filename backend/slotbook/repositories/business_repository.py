# backend/slotbook/repositories/business_repository.py
"""Business Repository - same-day pickup policy lookups."""

from sqlalchemy.orm import Session

from ..models.business import Business
from .base_repository import BaseRepository


class BusinessRepository(BaseRepository[Business]):
    def __init__(self, db: Session):
        super().__init__(db, Business)
