# src/services/storage_service.py
"""
Appwrite bucket gateway.

Uploads go straight to the Appwrite REST API; nothing is ever deleted from
the bucket. A failure after earlier uploads of the same request leaves those
objects orphaned, which is logged and accepted.
"""
import uuid
from typing import Iterable, List, Optional, Sequence
import httpx
from fastapi import UploadFile
from core.config import settings
from schemas.storage_schemas import UploadedFile
from utils.exceptions import (
    BadRequestException,
    StorageRejectedException,
    StorageUnavailableException,
)
from utils.logger import setup_logger

logger = setup_logger("STORAGE")

DEFAULT_CONTENT_TYPE = "application/octet-stream"

DOCUMENT_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "image/jpeg",
        "image/png",
        "image/gif",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


def ensure_image(upload: UploadFile) -> None:
    if not (upload.content_type or "").startswith("image/"):
        raise BadRequestException("Only image files are allowed")


def ensure_document(upload: UploadFile) -> None:
    if upload.content_type not in DOCUMENT_CONTENT_TYPES:
        raise BadRequestException(
            "Only PDF, Word documents, and image files are allowed"
        )


class AppwriteStorageGateway:
    def __init__(
        self,
        endpoint: Optional[str] = None,
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        bucket_id: Optional[str] = None,
        max_upload_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = (endpoint or settings.APPWRITE_ENDPOINT).rstrip("/")
        self.project_id = project_id if project_id is not None else settings.APPWRITE_PROJECT_ID
        self.api_key = api_key if api_key is not None else settings.APPWRITE_API_KEY
        self.bucket_id = bucket_id if bucket_id is not None else settings.APPWRITE_BUCKET_ID
        self.max_upload_size = max_upload_size or settings.MAX_UPLOAD_SIZE
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def files_url(self) -> str:
        return f"{self.endpoint}/storage/buckets/{self.bucket_id}/files"

    @property
    def client(self) -> httpx.AsyncClient:
        # Created on first use so it binds to the running event loop
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                headers={
                    "X-Appwrite-Project": self.project_id,
                    "X-Appwrite-Key": self.api_key,
                },
            )
        return self._client

    def view_url(self, file_id: str) -> str:
        return f"{self.files_url}/{file_id}/view?project={self.project_id}"

    async def upload(
        self, content: bytes, filename: str, content_type: Optional[str] = None
    ) -> UploadedFile:
        """
        Store one object in the bucket

        Args:
            content: Raw file bytes
            filename: Original client file name
            content_type: MIME type reported by the client

        Returns:
            UploadedFile with the public view URL

        Raises:
            BadRequestException: empty or oversized content
            StorageUnavailableException: the store could not be reached
            StorageRejectedException: non-2xx answer or no ``$id`` in the body
        """
        if not content:
            raise BadRequestException(f"File '{filename}' is empty")
        if len(content) > self.max_upload_size:
            raise BadRequestException(
                f"File '{filename}' exceeds the maximum size of "
                f"{self.max_upload_size} bytes"
            )

        content_type = content_type or DEFAULT_CONTENT_TYPE
        file_id = str(uuid.uuid4())

        try:
            response = await self.client.post(
                self.files_url,
                data={"fileId": file_id},
                files={"file": (filename, content, content_type)},
            )
        except httpx.RequestError as e:
            logger.error(f"Storage unreachable while uploading '{filename}': {e}")
            raise StorageUnavailableException()

        if not response.is_success:
            logger.error(
                f"Storage rejected '{filename}' with {response.status_code}: "
                f"{response.text}"
            )
            raise StorageRejectedException()

        try:
            stored_id = response.json().get("$id")
        except (ValueError, AttributeError):
            stored_id = None
        if not stored_id:
            logger.error(f"Storage response without $id for '{filename}': {response.text}")
            raise StorageRejectedException()

        logger.info(f"Uploaded '{filename}' as {stored_id} ({len(content)} bytes)")
        return UploadedFile(
            file_id=stored_id,
            file_url=self.view_url(stored_id),
            file_name=filename,
            file_size=len(content),
            file_type=content_type,
        )

    async def validate_upload(self, upload: UploadFile) -> None:
        """Reject empty or oversized parts before anything reaches the bucket"""
        name = upload.filename or "upload"
        size = getattr(upload, "size", None)
        if size is None:
            size = len(await upload.read())
            await upload.seek(0)
        if size == 0:
            raise BadRequestException(f"File '{name}' is empty")
        if size > self.max_upload_size:
            raise BadRequestException(
                f"File '{name}' exceeds the maximum size of "
                f"{self.max_upload_size} bytes"
            )

    async def upload_file(self, upload: UploadFile) -> UploadedFile:
        await self.validate_upload(upload)
        content = await upload.read()
        return await self.upload(
            content, upload.filename or "upload", upload.content_type
        )

    async def upload_many(self, uploads: Sequence[UploadFile]) -> List[UploadedFile]:
        """Validate every part, then upload in order; the first failure aborts the rest"""
        for upload in uploads:
            await self.validate_upload(upload)
        stored: List[UploadedFile] = []
        for upload in uploads:
            try:
                stored.append(await self.upload_file(upload))
            except Exception:
                if stored:
                    log_orphans(stored)
                raise
        return stored

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


def log_orphans(stored: Iterable[UploadedFile]) -> None:
    """Record objects that no row will ever reference"""
    for item in stored:
        logger.warning(f"Orphaned storage object {item.file_id}: {item.file_url}")


storage_gateway = AppwriteStorageGateway()


def get_storage_gateway() -> AppwriteStorageGateway:
    """Dependency returning the process-wide gateway"""
    return storage_gateway
