# src/routes/consultations.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from core.dependencies import Principal, get_current_principal
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.consultation_schemas import (
    ConsultationReportCreate,
    ConsultationReportPublic,
    ConsultationReportUpdate,
)
from services.consultation_service import consultation_service
from utils.responses import api_response

router = APIRouter(prefix="/patient/consultation", tags=["consultations"])


@router.post(
    "",
    response_model=ApiEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Add consultation report",
)
async def add_consultation_report(
    report_in: ConsultationReportCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    report = await consultation_service.add(db, principal, report_in)
    return api_response(
        ConsultationReportPublic.model_validate(report),
        "Consultation report added successfully",
        status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=ApiEnvelope,
    summary="List consultation reports",
    description="Newest consultation date first",
)
async def list_consultation_reports(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    reports = await consultation_service.list_for_caller(db, principal)
    return api_response(
        [ConsultationReportPublic.model_validate(r) for r in reports],
        "Consultation reports retrieved successfully",
    )


@router.get("/{report_id}", response_model=ApiEnvelope, summary="Get consultation report")
async def get_consultation_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    report = await consultation_service.get(db, principal, report_id)
    return api_response(
        ConsultationReportPublic.model_validate(report),
        "Consultation report retrieved successfully",
    )


@router.put(
    "/{report_id}", response_model=ApiEnvelope, summary="Update consultation report"
)
async def update_consultation_report(
    report_id: int,
    report_in: ConsultationReportUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    report = await consultation_service.update(db, principal, report_id, report_in)
    return api_response(
        ConsultationReportPublic.model_validate(report),
        "Consultation report updated successfully",
    )


@router.delete(
    "/{report_id}", response_model=ApiEnvelope, summary="Delete consultation report"
)
async def delete_consultation_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    await consultation_service.delete(db, principal, report_id)
    return api_response(None, "Consultation report deleted successfully")
