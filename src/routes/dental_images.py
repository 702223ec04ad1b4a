# src/routes/dental_images.py
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, List, Optional
from core.dependencies import Principal, RoleChecker, get_current_principal
from core.policy import Action
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.dental_image_schemas import DentalImageDetail, DentalImagePublic
from services.dental_image_service import dental_image_service
from services.storage_service import AppwriteStorageGateway, get_storage_gateway
from utils.forms import optional_int
from utils.pagination import PageParams, page_params, paginated
from utils.responses import api_response

router = APIRouter(prefix="/dental-images", tags=["dental-images"])


def _detail_page(images, params: PageParams, total: int) -> dict:
    return paginated(
        [DentalImageDetail.model_validate(i) for i in images], params, total, "images"
    )


@router.post(
    "",
    response_model=ApiEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Upload dental images",
    description="Multipart upload of up to 10 parts named `images` or `images[]`",
)
async def upload_dental_images(
    images: Optional[List[UploadFile]] = File(None),
    bracket_images: Optional[List[UploadFile]] = File(None, alias="images[]"),
    relative_id: Optional[str] = Form(None, alias="relativeId"),
    description: Optional[str] = Form(None),
    image_type: Optional[str] = Form(None, alias="imageType"),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    storage: AppwriteStorageGateway = Depends(get_storage_gateway),
) -> Any:
    files = list(images or []) + list(bracket_images or [])
    image = await dental_image_service.upload(
        db,
        principal,
        storage,
        files,
        relative_id=optional_int(relative_id, "relativeId"),
        description=description,
        image_type=image_type,
    )
    return api_response(
        DentalImagePublic.model_validate(image),
        "Dental images uploaded successfully",
        status.HTTP_201_CREATED,
    )


@router.get("", response_model=ApiEnvelope, summary="List my dental images")
async def list_dental_images(
    relative_id: Optional[int] = Query(None, alias="relativeId"),
    image_type: Optional[str] = Query(None, alias="imageType"),
    params: PageParams = Depends(page_params(10)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    images, total = await dental_image_service.list_for_user(
        db, principal, params, relative_id=relative_id, image_type=image_type
    )
    return api_response(
        _detail_page(images, params, total), "Dental images retrieved successfully"
    )


@router.get("/admin/all", response_model=ApiEnvelope, summary="List all dental images")
async def list_all_dental_images(
    user_id: Optional[int] = Query(None, alias="userId"),
    relative_id: Optional[int] = Query(None, alias="relativeId"),
    image_type: Optional[str] = Query(None, alias="imageType"),
    params: PageParams = Depends(page_params(20)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(RoleChecker(Action.LIST_ALL_DENTAL_IMAGES)),
) -> Any:
    images, total = await dental_image_service.list_all(
        db, params, user_id=user_id, relative_id=relative_id, image_type=image_type
    )
    return api_response(
        _detail_page(images, params, total), "All dental images retrieved successfully"
    )


@router.get(
    "/admin/urls",
    response_model=ApiEnvelope,
    summary="List all image URLs",
    description="Image URLs of one page of records, flattened",
)
async def list_all_image_urls(
    params: PageParams = Depends(page_params(50)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(RoleChecker(Action.LIST_ALL_IMAGE_URLS)),
) -> Any:
    urls, total = await dental_image_service.list_all_urls(db, params)
    payload = paginated(urls, params, total, "imageUrls")
    payload["pagination"]["totalImageUrls"] = len(urls)
    return api_response(payload, "All image URLs retrieved successfully")


@router.get("/{image_id}", response_model=ApiEnvelope, summary="Get dental image")
async def get_dental_image(
    image_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    image = await dental_image_service.get(db, principal, image_id)
    return api_response(
        DentalImageDetail.model_validate(image), "Dental image retrieved successfully"
    )


@router.delete("/{image_id}", response_model=ApiEnvelope, summary="Delete dental image")
async def delete_dental_image(
    image_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    await dental_image_service.delete(db, principal, image_id)
    return api_response(None, "Dental image deleted successfully")
