# src/routes/medical_history.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from core.dependencies import Principal, get_current_principal
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.medical_history_schemas import MedicalHistoryPublic, MedicalHistorySetup
from services.medical_history_service import medical_history_service
from utils.responses import api_response

router = APIRouter(prefix="/patient/medical-history", tags=["medical-history"])


@router.post(
    "",
    response_model=ApiEnvelope,
    summary="Set up medical history",
    description="Create the caller's medical history or update the existing one",
)
async def setup_medical_history(
    history_in: MedicalHistorySetup,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    history, created = await medical_history_service.setup(db, principal, history_in)
    data = MedicalHistoryPublic.model_validate(history)
    if created:
        return api_response(
            data, "Medical history created successfully", status.HTTP_201_CREATED
        )
    return api_response(data, "Medical history updated successfully")


@router.get(
    "",
    response_model=ApiEnvelope,
    summary="Get medical history",
    description="Returns `data: null` when no history has been recorded yet",
)
async def get_medical_history(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    history = await medical_history_service.get_for_caller(db, principal)
    if history is None:
        return api_response(None, "No medical history recorded")
    return api_response(
        MedicalHistoryPublic.model_validate(history),
        "Medical history retrieved successfully",
    )
