from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from roundscore.database import get_db
from roundscore.dependencies import CurrentUser, get_current_user, require_admin
from roundscore.schemas.template import (
    CompanyTemplateCreate,
    CompanyTemplateResponse,
    CompanyTemplateUpdate,
)
from roundscore.services.templates import (
    create_template,
    delete_template,
    get_active_templates,
    get_template,
    update_template,
)

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=list[CompanyTemplateResponse])
async def list_templates(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List all active company templates."""
    return get_active_templates(db)


@router.get("/{template_id}", response_model=CompanyTemplateResponse)
async def get_template_details(
    template_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    template = get_template(db, template_id, active_only=not current_user.is_admin)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.post("", response_model=CompanyTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_company_template(
    request: CompanyTemplateCreate,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return create_template(db, request)


@router.put("/{template_id}", response_model=CompanyTemplateResponse)
async def update_company_template(
    template_id: int,
    request: CompanyTemplateUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    template = get_template(db, template_id, active_only=False)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return update_template(db, template, request)


@router.delete("/{template_id}")
async def delete_company_template(
    template_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    template = get_template(db, template_id, active_only=False)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    delete_template(db, template)
    return {"success": True}
