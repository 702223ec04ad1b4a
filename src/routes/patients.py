# src/routes/patients.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional
from core.dependencies import Principal, get_current_principal
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.patient_schemas import PatientProfile, PatientProfileSetup, ProfileImage
from services.patient_service import patient_service
from services.storage_service import AppwriteStorageGateway, get_storage_gateway
from utils.exceptions import BadRequestException
from utils.logger import setup_logger
from utils.responses import api_response

router = APIRouter(prefix="/patient", tags=["patient"])
logger = setup_logger("PATIENT_ROUTES")


@router.get(
    "/profile",
    response_model=ApiEnvelope,
    summary="Get patient profile",
    description="Get the caller's patient profile with name, phone and gender",
)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    patient = await patient_service.get_profile(db, principal)
    return api_response(
        PatientProfile.model_validate(patient), "Patient profile retrieved successfully"
    )


@router.post(
    "/profile",
    response_model=ApiEnvelope,
    summary="Set up patient profile",
    description="Create the caller's patient profile, or update it if it exists",
)
async def setup_profile(
    profile_in: PatientProfileSetup,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    patient, created = await patient_service.setup_profile(db, principal, profile_in)
    if created:
        return api_response(
            PatientProfile.model_validate(patient),
            "Patient profile created successfully",
            status.HTTP_201_CREATED,
        )
    return api_response(
        PatientProfile.model_validate(patient), "Patient profile updated successfully"
    )


@router.post(
    "/profile/image",
    response_model=ApiEnvelope,
    summary="Upload profile image",
    description="Store a new profile picture for the caller (multipart field `image`)",
)
async def upload_profile_image(
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    storage: AppwriteStorageGateway = Depends(get_storage_gateway),
) -> Any:
    if image is None or not image.filename:
        raise BadRequestException("No image uploaded")
    patient = await patient_service.upload_profile_image(db, principal, image, storage)
    return api_response(
        ProfileImage(profile_image=patient.profile_image),
        "Profile image uploaded successfully",
    )


@router.get(
    "/profile/image",
    response_model=ApiEnvelope,
    summary="Get profile image",
)
async def get_profile_image(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    url = await patient_service.get_profile_image(db, principal)
    return api_response(
        ProfileImage(profile_image=url), "Profile image retrieved successfully"
    )
