"""Company settings endpoints — a single record printed on every document."""

from fastapi import APIRouter, Depends, HTTPException, status

from bizdesk.application.schemas import CompanySettingsResponse, CompanySettingsUpdate
from bizdesk.application.services import CompanySettingsService
from bizdesk.infrastructure.dependencies import get_company_settings_service

router = APIRouter(prefix="/company-settings", tags=["Company Settings"])


@router.get("", response_model=CompanySettingsResponse)
async def get_company_settings(
    service: CompanySettingsService = Depends(get_company_settings_service),
) -> CompanySettingsResponse:
    settings = await service.get_settings()
    if settings is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company settings have not been configured",
        )
    return CompanySettingsResponse.model_validate(settings, from_attributes=True)


@router.put("", response_model=CompanySettingsResponse)
async def save_company_settings(
    data: CompanySettingsUpdate,
    service: CompanySettingsService = Depends(get_company_settings_service),
) -> CompanySettingsResponse:
    """Create or replace the company settings."""
    settings = await service.save_settings(data)
    return CompanySettingsResponse.model_validate(settings, from_attributes=True)
