# src/routes/reports.py
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, List, Optional
from core.dependencies import Principal, RoleChecker, get_current_principal
from core.policy import Action
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.report_schemas import ReportPublic
from services.report_service import report_service
from services.storage_service import AppwriteStorageGateway, get_storage_gateway
from utils.forms import optional_int
from utils.pagination import PageParams, page_params, paginated
from utils.responses import api_response

router = APIRouter(prefix="/reports", tags=["reports"])


def _page_payload(reports, params: PageParams, total: int) -> dict:
    return paginated(
        [ReportPublic.model_validate(r) for r in reports], params, total, "reports"
    )


@router.post(
    "",
    response_model=ApiEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create analysis report",
    description=(
        "Multipart: boundingBoxData (JSON), relativeId (0 for the patient), "
        "relativeName, reportType, summary and optional `images` parts"
    ),
)
async def create_report(
    bounding_box_data: Optional[str] = Form(None, alias="boundingBoxData"),
    relative_id: Optional[str] = Form(None, alias="relativeId"),
    relative_name: Optional[str] = Form(None, alias="relativeName"),
    report_type: Optional[str] = Form(None, alias="reportType"),
    summary: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    bracket_images: Optional[List[UploadFile]] = File(None, alias="images[]"),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    storage: AppwriteStorageGateway = Depends(get_storage_gateway),
) -> Any:
    report = await report_service.create(
        db,
        principal,
        storage,
        bounding_box_data=bounding_box_data,
        relative_id=optional_int(relative_id, "relativeId"),
        relative_name=relative_name,
        report_type=report_type,
        summary=summary,
        images=list(images or []) + list(bracket_images or []),
    )
    return api_response(
        ReportPublic.model_validate(report),
        "Report created successfully",
        status.HTTP_201_CREATED,
    )


@router.get("", response_model=ApiEnvelope, summary="List my analysis reports")
async def list_reports(
    relative_id: Optional[int] = Query(None, alias="relativeId"),
    params: PageParams = Depends(page_params(10)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    reports, total = await report_service.list_for_caller(
        db, principal, params, relative_id=relative_id
    )
    return api_response(
        _page_payload(reports, params, total), "Reports retrieved successfully"
    )


@router.get(
    "/patient/{patient_id}",
    response_model=ApiEnvelope,
    summary="List a patient's analysis reports",
)
async def list_patient_reports(
    patient_id: int,
    relative_id: Optional[int] = Query(None, alias="relativeId"),
    params: PageParams = Depends(page_params(10)),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(RoleChecker(Action.VIEW_ANY_PATIENT_DATA)),
) -> Any:
    reports, total = await report_service.list_for_patient(
        db, principal, patient_id, params, relative_id=relative_id
    )
    return api_response(
        _page_payload(reports, params, total), "Reports retrieved successfully"
    )


@router.get("/{report_id}", response_model=ApiEnvelope, summary="Get analysis report")
async def get_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    report = await report_service.get(db, principal, report_id)
    return api_response(ReportPublic.model_validate(report), "Report retrieved successfully")


@router.delete("/{report_id}", response_model=ApiEnvelope, summary="Delete analysis report")
async def delete_report(
    report_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    await report_service.delete(db, principal, report_id)
    return api_response(None, "Report deleted successfully")
