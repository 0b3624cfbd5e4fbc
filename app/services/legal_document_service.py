"""
Legal documents: versioned terms of service and privacy policy
"""

from typing import Any, Dict, List, Optional

from app.core.exceptions import MissingTableError, NotFoundError
from app.core.logging import log
from app.core.permissions import require_super_admin
from app.models.enums import LegalDocumentType
from app.models.profile import Profile
from app.repositories.legal_document import LegalDocumentRepository
from app.schemas.legal import LegalDocumentCreate, LegalDocumentUpdate
from app.utils.timestamps import utc_now, utc_now_iso

MISSING_TABLE_NOTICE = "Legal documents table not found; showing default documents"

DEFAULT_DOCUMENTS: List[Dict[str, Any]] = [
    {
        "id": "default-terms",
        "document_type": LegalDocumentType.TERMS_OF_SERVICE.value,
        "title": "Terms of Service",
        "content": "By using OmaHub you agree to use the marketplace lawfully and to respect the brands listed on it.",
        "version": 1,
        "effective_date": "2024-01-01",
        "is_active": True,
    },
    {
        "id": "default-privacy",
        "document_type": LegalDocumentType.PRIVACY_POLICY.value,
        "title": "Privacy Policy",
        "content": "OmaHub stores the details you give us only to run your account and pass inquiries to brands.",
        "version": 1,
        "effective_date": "2024-01-01",
        "is_active": True,
    },
]


class LegalDocumentService:
    def __init__(self, client: Any):
        self.document_repo = LegalDocumentRepository(client)

    async def list_documents(self, document_type: Optional[str] = None, active_only: bool = True) -> Dict[str, Any]:
        """Documents newest first; built-in defaults when the table is missing"""
        try:
            documents = await self.document_repo.search(document_type, active_only)
        except MissingTableError:
            documents = [doc for doc in DEFAULT_DOCUMENTS if not document_type or doc["document_type"] == document_type]
            return {"documents": documents, "notice": MISSING_TABLE_NOTICE}
        return {"documents": documents}

    async def create_document(self, profile: Profile, document_in: LegalDocumentCreate) -> Dict[str, Any]:
        require_super_admin(profile)
        document_type = document_in.document_type.value
        version = await self.document_repo.latest_version(document_type) + 1
        now = utc_now_iso()

        document = await self.document_repo.create(
            {
                "document_type": document_type,
                "title": document_in.title,
                "content": document_in.content,
                "version": version,
                "effective_date": (document_in.effective_date or utc_now().date()).isoformat(),
                "is_active": True,
                "created_by": profile.id,
                "created_at": now,
                "updated_at": now,
            }
        )
        log.info("Legal document created", document_type=document_type, version=version, user_id=profile.id)
        return document

    async def update_document(self, profile: Profile, document_in: LegalDocumentUpdate) -> Dict[str, Any]:
        require_super_admin(profile)
        fields = document_in.model_dump(exclude_unset=True, exclude={"id"}, mode="json")
        fields["updated_at"] = utc_now_iso()

        document = await self.document_repo.update(id=document_in.id, obj_in=fields)
        if not document:
            raise NotFoundError("Legal document not found")
        log.info("Legal document updated", document_id=document_in.id, fields=sorted(fields), user_id=profile.id)
        return document
