# src/schemas/base_schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Any, Dict
from datetime import datetime


class BaseSchema(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        use_enum_values=True,
    )


class TimestampMixin(BaseSchema):
    """Mixin for timestamps"""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IDMixin(BaseSchema):
    """Mixin for ID field"""

    id: int


class PaginationMeta(BaseSchema):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class ApiEnvelope(BaseModel):
    """Documented shape of every response body"""

    status: str
    code: int
    message: str
    data: Optional[Any] = None


def partial_update_data(obj_in: BaseModel) -> Dict[str, Any]:
    """Fields the client actually sent, keyed by attribute name"""
    return obj_in.model_dump(exclude_unset=True)
