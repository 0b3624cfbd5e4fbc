"""
Repair of legacy image URLs across brands, collections, products and avatars
"""

from dataclasses import dataclass
from typing import Any, Dict, Type

from app.core.config import settings
from app.core.exceptions import BaseAPIException
from app.core.logging import log
from app.repositories.base import BaseRepository
from app.repositories.brand import BrandRepository
from app.repositories.collection import CollectionRepository
from app.repositories.product import ProductRepository
from app.repositories.profile import ProfileRepository
from app.utils.image_urls import repaired_url


@dataclass(frozen=True)
class RepairTarget:
    name: str
    repository: Type[BaseRepository]
    column: str
    bucket: str
    folder: str


def repair_targets():
    return [
        RepairTarget("brands", BrandRepository, "image", settings.BRAND_ASSETS_BUCKET, "brands"),
        RepairTarget("collections", CollectionRepository, "image", settings.BRAND_ASSETS_BUCKET, "collections"),
        RepairTarget("products", ProductRepository, "image", settings.BRAND_ASSETS_BUCKET, "products"),
        RepairTarget("profiles", ProfileRepository, "avatar_url", settings.PROFILES_BUCKET, "avatars"),
    ]


class ImageRepairService:
    """Rewrites URLs containing the legacy upload marker to storage URLs"""

    def __init__(self, client: Any):
        self.client = client

    async def _repair_table(self, target: RepairTarget, dry_run: bool) -> int:
        repo = target.repository(self.client)
        marker = settings.LEGACY_IMAGE_MARKER
        rows = await repo.find_like(target.column, f"%{marker}%", columns=f"id,{target.column}")

        fixed = 0
        for row in rows:
            new_url = repaired_url(row.get(target.column), target.bucket, target.folder, marker)
            if not new_url:
                continue
            if not dry_run:
                await repo.update(id=row["id"], obj_in={target.column: new_url})
            log.debug("Repaired image URL", table=target.name, id=row["id"], url=new_url, dry_run=dry_run)
            fixed += 1
        return fixed

    async def repair(self, dry_run: bool = False) -> Dict[str, int]:
        """
        Repair every table in turn.

        A failing table is logged and counted as zero; the others still run.
        """
        results: Dict[str, int] = {}
        for target in repair_targets():
            try:
                results[target.name] = await self._repair_table(target, dry_run)
            except BaseAPIException as e:
                log.error("Image repair failed for table", table=target.name, error=e.detail)
                results[target.name] = 0

        results["total"] = sum(results.values())
        log.info("Image repair finished", dry_run=dry_run, **results)
        return results
