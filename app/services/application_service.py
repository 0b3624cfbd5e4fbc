"""
Designer applications reviewed in the studio
"""

from datetime import datetime, timezone
from typing import Any, Dict

from app.core.exceptions import NotFoundError
from app.core.logging import log
from app.core.permissions import require_super_admin
from app.models.profile import Profile
from app.repositories.application import ApplicationRepository
from app.schemas.admin import ApplicationStatusUpdate
from app.utils.timestamps import parse_timestamp, utc_now_iso

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def backfill_timestamps(application: Dict[str, Any], now: str) -> Dict[str, Any]:
    """Older rows miss one or both timestamps; fill each from the other, else now"""
    created = application.get("created_at") or application.get("updated_at") or now
    updated = application.get("updated_at") or created
    return {**application, "created_at": created, "updated_at": updated}


class ApplicationService:
    def __init__(self, client: Any):
        self.application_repo = ApplicationRepository(client)

    async def list_applications(self, profile: Profile) -> Dict[str, Any]:
        require_super_admin(profile)
        now = utc_now_iso()
        applications = [backfill_timestamps(row, now) for row in await self.application_repo.list_all()]
        applications.sort(key=lambda row: parse_timestamp(row["created_at"]) or EPOCH, reverse=True)
        return {"applications": applications, "count": len(applications)}

    async def update_status(
        self, profile: Profile, application_id: str, update: ApplicationStatusUpdate
    ) -> Dict[str, Any]:
        require_super_admin(profile)
        application = await self.application_repo.update(
            id=application_id,
            obj_in={"status": update.status.value, "reviewed_by": profile.id, "updated_at": utc_now_iso()},
        )
        if not application:
            raise NotFoundError("Application not found")
        log.info("Application status changed", application_id=application_id, status=update.status.value)
        return application
