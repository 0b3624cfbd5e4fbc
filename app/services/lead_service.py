"""
Lead pipeline: capture, studio listing, analytics and commission
"""

from typing import Any, Dict, List, Optional

from app.core.exceptions import BadRequestError, BaseAPIException, ForbiddenError, NotFoundError
from app.core.logging import log
from app.core.pagination import paginate
from app.core.permissions import require_studio
from app.models.enums import LeadStatus
from app.models.profile import Profile
from app.repositories.brand import BrandRepository
from app.repositories.lead import LeadInteractionRepository, LeadRepository
from app.schemas.lead import LeadCreate, LeadUpdate
from app.utils.timestamps import utc_now_iso


def conversion_rate(converted: int, total: int) -> float:
    if not total:
        return 0.0
    return round(converted / total * 100, 2)


def _lead_value(lead: Dict[str, Any]) -> float:
    return float(lead.get("estimated_value") or 0)


class LeadService:
    """Service layer for leads"""

    def __init__(self, client: Any):
        self.lead_repo = LeadRepository(client)
        self.interaction_repo = LeadInteractionRepository(client)
        self.brand_repo = BrandRepository(client)

    async def create_lead(self, lead_in: LeadCreate) -> Dict[str, Any]:
        if not await self.brand_repo.get(id=lead_in.brand_id, columns="id"):
            raise BadRequestError("Invalid brand ID")

        lead = await self.lead_repo.create(
            {
                "brand_id": lead_in.brand_id,
                "customer_name": lead_in.name,
                "customer_email": lead_in.email,
                "customer_phone": lead_in.phone,
                "source": lead_in.source,
                "lead_type": lead_in.lead_type,
                "status": LeadStatus.NEW.value,
                "priority": lead_in.priority.value,
                "estimated_value": lead_in.estimated_value,
                "notes": lead_in.notes,
                "created_at": utc_now_iso(),
            }
        )
        log.info("Lead captured", lead_id=lead.get("id"), brand_id=lead_in.brand_id, source=lead_in.source)
        return lead

    async def list_leads(
        self,
        profile: Profile,
        *,
        page: int,
        limit: int,
        offset: int,
        end: int,
        status: Optional[str] = None,
        source: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        require_studio(profile)
        scope = profile.brand_scope()
        if scope == []:
            raise ForbiddenError("No accessible brands")

        requested = {"status": status, "source": source, "priority": priority}
        filters = {field: value for field, value in requested.items() if value and value != "all"}

        leads, total = await self.lead_repo.list_page(
            offset=offset, end=end, scope=scope, filters=filters, search=search
        )
        return paginate(leads, total, page, limit)

    async def analytics(self, profile: Profile) -> Dict[str, Any]:
        """Pipeline totals for the brands in scope"""
        require_studio(profile)
        scope = profile.brand_scope()
        leads = [] if scope == [] else await self.lead_repo.for_analytics(scope)

        by_status = {status.value: 0 for status in LeadStatus}
        for lead in leads:
            status = lead.get("status")
            if status in by_status:
                by_status[status] += 1

        converted = by_status[LeadStatus.CONVERTED.value]
        return {
            "total_leads": len(leads),
            "qualified_leads": by_status[LeadStatus.QUALIFIED.value],
            "converted_leads": converted,
            "conversion_rate": conversion_rate(converted, len(leads)),
            "total_value": sum(_lead_value(lead) for lead in leads),
            "total_bookings": converted,
            "leads_by_status": by_status,
        }

    async def commission(self, profile: Profile) -> Dict[str, Any]:
        """Commission owed on converted leads at each brand's rate"""
        require_studio(profile)
        scope = profile.brand_scope()
        leads = [] if scope == [] else await self.lead_repo.converted(scope)

        brand_ids = sorted({lead["brand_id"] for lead in leads if lead.get("brand_id")})
        brands = {
            brand["id"]: brand
            for brand in await self.brand_repo.get_many(brand_ids, columns="id,name,commission_rate")
        }

        earnings: List[Dict[str, Any]] = []
        for lead in leads:
            brand = brands.get(lead.get("brand_id"), {})
            rate = float(brand.get("commission_rate") or 0)
            value = _lead_value(lead)
            earnings.append(
                {
                    "lead_id": lead["id"],
                    "brand_name": brand.get("name"),
                    "estimated_value": value,
                    "commission_rate": rate,
                    "commission_amount": value * rate / 100,
                    "converted_at": lead.get("created_at"),
                }
            )

        average_rate = sum(e["commission_rate"] for e in earnings) / len(earnings) if earnings else 0
        return {
            "earnings": earnings,
            "total_commission": sum(e["commission_amount"] for e in earnings),
            "summary": {
                "total_leads": len(earnings),
                "total_value": sum(e["estimated_value"] for e in earnings),
                "average_commission_rate": average_rate,
            },
        }

    async def _scoped_lead(self, profile: Profile, lead_id: str) -> Dict[str, Any]:
        require_studio(profile)
        lead = await self.lead_repo.get_scoped(lead_id, profile.brand_scope())
        if not lead:
            raise NotFoundError("Lead not found or access denied")
        return lead

    async def update_lead(self, profile: Profile, lead_id: str, lead_update: LeadUpdate) -> Dict[str, Any]:
        await self._scoped_lead(profile, lead_id)

        updates = lead_update.model_dump(exclude_unset=True, mode="json")
        updates["updated_at"] = utc_now_iso()

        lead = await self.lead_repo.update(id=lead_id, obj_in=updates)
        if not lead:
            raise NotFoundError("Lead not found or access denied")
        return lead

    async def delete_lead(self, profile: Profile, lead_id: str) -> None:
        lead = await self._scoped_lead(profile, lead_id)

        try:
            await self.interaction_repo.delete_for_lead(lead_id)
        except BaseAPIException as e:
            log.warning("Failed to delete lead interactions", lead_id=lead_id, error=e.detail)

        await self.lead_repo.delete(id=lead_id)
        log.info("Deleted lead", lead_id=lead_id, brand_id=lead.get("brand_id"), user_id=profile.id)
