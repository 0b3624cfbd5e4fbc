"""
Terms of service and privacy policy
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import LegalDocumentServiceDep, SuperAdminProfileDep
from app.models.enums import LegalDocumentType
from app.schemas.legal import LegalDocumentCreate, LegalDocumentUpdate


router = APIRouter()


@router.get("", summary="List legal documents")
async def list_legal_documents(
    legal_service: LegalDocumentServiceDep,
    document_type: Optional[LegalDocumentType] = Query(None, alias="type"),
    active: bool = Query(True),
) -> Dict[str, Any]:
    return await legal_service.list_documents(document_type.value if document_type else None, active_only=active)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Publish a new version")
async def create_legal_document(
    document_in: LegalDocumentCreate,
    profile: SuperAdminProfileDep,
    legal_service: LegalDocumentServiceDep,
) -> Dict[str, Any]:
    return await legal_service.create_document(profile, document_in)


@router.put("", summary="Edit a legal document")
async def update_legal_document(
    document_in: LegalDocumentUpdate,
    profile: SuperAdminProfileDep,
    legal_service: LegalDocumentServiceDep,
) -> Dict[str, Any]:
    return await legal_service.update_document(profile, document_in)
