# src/schemas/dental_image_schemas.py
from typing import List, Optional
from .base_schemas import BaseSchema, IDMixin, TimestampMixin
from .family_member_schemas import FamilyMemberBrief


class DentalImagePublic(IDMixin, TimestampMixin):
    user_id: int
    relative_id: Optional[int] = None
    image_urls: List[str]
    description: Optional[str] = None
    image_type: str
    is_active: bool


class DentalImageDetail(DentalImagePublic):
    """Listing/detail shape; the family member must be eagerly loaded"""

    family_member: Optional[FamilyMemberBrief] = None
