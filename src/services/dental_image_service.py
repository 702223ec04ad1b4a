# src/services/dental_image_service.py
from typing import List, Optional, Sequence, Tuple
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from core.config import settings
from core.dependencies import Principal
from models.dental_image import DentalImage
from services.ownership_service import ownership_service
from services.storage_service import AppwriteStorageGateway, ensure_image, log_orphans
from utils.exceptions import BadRequestException
from utils.logger import setup_logger
from utils.pagination import PageParams
from .base_service import BaseService

logger = setup_logger("DENTAL_IMAGE_SERVICE")

DEFAULT_IMAGE_TYPE = "other"
NEWEST_FIRST = (DentalImage.created_at.desc(), DentalImage.id.desc())


class DentalImageService(BaseService):
    def __init__(self):
        super().__init__(DentalImage)

    def _active(self):
        return (
            select(DentalImage)
            .options(selectinload(DentalImage.family_member))
            .where(DentalImage.is_active.is_(True))
        )

    async def upload(
        self,
        db: AsyncSession,
        principal: Principal,
        storage: AppwriteStorageGateway,
        files: Sequence[UploadFile],
        relative_id: Optional[int] = None,
        description: Optional[str] = None,
        image_type: Optional[str] = None,
    ) -> DentalImage:
        """
        Upload a batch of images as one dental image record

        Args:
            files: 1..MAX_DENTAL_IMAGES image parts, stored in order
            relative_id: Family member the images belong to; falsy means the
                caller themselves
            image_type: Free-form label such as "intraoral"

        Raises:
            BadRequestException: no files, too many files, or a non-image part
            NotFoundException: relative is not one of the caller's family members
        """
        files = [f for f in files if f is not None and f.filename]
        if not files:
            raise BadRequestException("No images uploaded")
        if len(files) > settings.MAX_DENTAL_IMAGES:
            raise BadRequestException(
                f"Maximum {settings.MAX_DENTAL_IMAGES} files allowed per upload"
            )
        for upload in files:
            ensure_image(upload)

        if relative_id:
            await ownership_service.get_family_member(db, principal, relative_id)

        stored = await storage.upload_many(files)
        image = DentalImage(
            user_id=principal.user_id,
            relative_id=relative_id or None,
            image_urls=[item.file_url for item in stored],
            description=description,
            image_type=(image_type or "").strip() or DEFAULT_IMAGE_TYPE,
        )
        try:
            image = await self.save(db, image)
        except Exception:
            log_orphans(stored)
            raise
        logger.info(
            f"User {principal.user_id} uploaded {len(stored)} dental images "
            f"as record {image.id}"
        )
        return image

    async def list_for_user(
        self,
        db: AsyncSession,
        principal: Principal,
        params: PageParams,
        relative_id: Optional[int] = None,
        image_type: Optional[str] = None,
    ) -> Tuple[List[DentalImage], int]:
        query = self._active().where(DentalImage.user_id == principal.user_id)
        if relative_id:
            query = query.where(DentalImage.relative_id == relative_id)
        if image_type:
            query = query.where(DentalImage.image_type == image_type)
        return await self.paginate(db, query, params, order_by=NEWEST_FIRST)

    async def get(
        self, db: AsyncSession, principal: Principal, image_id: int
    ) -> DentalImage:
        return await ownership_service.get_dental_image(
            db, principal, image_id, query=self._active()
        )

    async def delete(
        self, db: AsyncSession, principal: Principal, image_id: int
    ) -> DentalImage:
        image = await ownership_service.get_dental_image(db, principal, image_id)
        return await self.soft_delete(db, image)

    async def list_all(
        self,
        db: AsyncSession,
        params: PageParams,
        user_id: Optional[int] = None,
        relative_id: Optional[int] = None,
        image_type: Optional[str] = None,
    ) -> Tuple[List[DentalImage], int]:
        query = self._active()
        if user_id:
            query = query.where(DentalImage.user_id == user_id)
        if relative_id:
            query = query.where(DentalImage.relative_id == relative_id)
        if image_type:
            query = query.where(DentalImage.image_type == image_type)
        return await self.paginate(db, query, params, order_by=NEWEST_FIRST)

    async def list_all_urls(
        self, db: AsyncSession, params: PageParams
    ) -> Tuple[List[str], int]:
        """Image URLs of one page of records, flattened in record order"""
        query = select(DentalImage).where(DentalImage.is_active.is_(True))
        images, total = await self.paginate(db, query, params, order_by=NEWEST_FIRST)
        urls = [url for image in images for url in (image.image_urls or [])]
        return urls, total


dental_image_service = DentalImageService()
