# src/routes/medical_reports.py
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional
from core.dependencies import Principal, RoleChecker, get_current_principal
from core.policy import Action
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.medical_report_schemas import MedicalReportPublic, MedicalReportUpdate
from services.medical_report_service import medical_report_service
from services.storage_service import AppwriteStorageGateway, get_storage_gateway
from utils.pagination import PageParams, page_params, paginated
from utils.responses import api_response

router = APIRouter(prefix="/medical-reports", tags=["medical-reports"])


def _page_payload(reports, params: PageParams, total: int) -> dict:
    return paginated(
        [MedicalReportPublic.model_validate(r) for r in reports],
        params,
        total,
        "reports",
    )


@router.post(
    "",
    response_model=ApiEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Upload medical report",
    description="Multipart upload: `file` plus patientId, title, description, reportType",
)
async def upload_medical_report(
    patient_id: int = Form(..., alias="patientId"),
    title: str = Form(...),
    description: Optional[str] = Form(None),
    report_type: Optional[str] = Form(None, alias="reportType"),
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    storage: AppwriteStorageGateway = Depends(get_storage_gateway),
) -> Any:
    report = await medical_report_service.upload(
        db,
        principal,
        storage,
        patient_id=patient_id,
        title=title,
        file=file,
        description=description,
        report_type=report_type,
    )
    return api_response(
        MedicalReportPublic.model_validate(report),
        "Medical report uploaded successfully",
        status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=ApiEnvelope,
    summary="List all medical reports",
    description="Staff view across patients, optionally filtered by patient and type",
)
async def list_all_medical_reports(
    patient_id: Optional[int] = Query(None, alias="patientId"),
    report_type: Optional[str] = Query(None, alias="reportType"),
    params: PageParams = Depends(page_params(10)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(RoleChecker(Action.LIST_ALL_MEDICAL_REPORTS)),
) -> Any:
    reports, total = await medical_report_service.list_all(
        db, params, patient_id=patient_id, report_type=report_type
    )
    return api_response(
        _page_payload(reports, params, total), "Medical reports retrieved successfully"
    )


@router.get(
    "/patient/{patient_id}",
    response_model=ApiEnvelope,
    summary="List a patient's medical reports",
)
async def list_patient_medical_reports(
    patient_id: int,
    report_type: Optional[str] = Query(None, alias="reportType"),
    params: PageParams = Depends(page_params(10)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    reports, total = await medical_report_service.list_for_patient(
        db, principal, patient_id, params, report_type=report_type
    )
    return api_response(
        _page_payload(reports, params, total), "Medical reports retrieved successfully"
    )


@router.get("/{report_id}", response_model=ApiEnvelope, summary="Get medical report")
async def get_medical_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    report = await medical_report_service.get(db, principal, report_id)
    return api_response(
        MedicalReportPublic.model_validate(report),
        "Medical report retrieved successfully",
    )


@router.get(
    "/{report_id}/download",
    response_model=ApiEnvelope,
    summary="Get download URL",
    description="Available for deleted reports as well",
)
async def download_medical_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    download = await medical_report_service.download(db, principal, report_id)
    return api_response(download, "Medical report URL retrieved successfully")


@router.put("/{report_id}", response_model=ApiEnvelope, summary="Update medical report")
async def update_medical_report(
    report_id: int,
    report_in: MedicalReportUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    report = await medical_report_service.update(db, principal, report_id, report_in)
    return api_response(
        MedicalReportPublic.model_validate(report),
        "Medical report updated successfully",
    )


@router.delete(
    "/{report_id}", response_model=ApiEnvelope, summary="Delete medical report"
)
async def delete_medical_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    await medical_report_service.delete(db, principal, report_id)
    return api_response(None, "Medical report deleted successfully")
