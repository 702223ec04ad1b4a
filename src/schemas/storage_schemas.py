# src/schemas/storage_schemas.py
from .base_schemas import BaseSchema


class UploadedFile(BaseSchema):
    """A file stored in the Appwrite bucket"""

    file_id: str
    file_url: str
    file_name: str
    file_size: int
    file_type: str
