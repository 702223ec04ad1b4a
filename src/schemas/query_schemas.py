# src/schemas/query_schemas.py
from pydantic import EmailStr, Field
from typing import Optional
from models.query import QueryRole
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


class QueryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    message: str = Field(..., min_length=1)


class QueryEdit(BaseSchema):
    message: str = Field(..., min_length=1)


class QueryPublic(IDMixin, TimestampMixin):
    user_id: Optional[int] = None
    name: str
    email: str
    phone: str
    message: str
    role: QueryRole
