"""
Operational commands run by hand with the service-role key
"""

import asyncio
from typing import Any, Awaitable, Callable

import typer
from postgrest.exceptions import APIError
from rich.console import Console
from rich.table import Table

from app.core.exceptions import BaseAPIException
from app.core.logging import setup_logging
from app.core.supabase import supabase_manager
from app.models.profile import UserRole
from app.repositories.brand import BrandRepository
from app.repositories.profile import ProfileRepository
from app.services.admin_service import AdminService, merge_brand_ids
from app.services.collection_service import CollectionService
from app.services.image_hosting_service import ImageHostingService
from app.services.image_repair_service import ImageRepairService
from app.utils.normalization import normalize_email

app = typer.Typer(help="OmaHub maintenance commands")
console = Console()

TABLES = [
    "brands",
    "products",
    "collections",
    "reviews",
    "favourites",
    "inquiries",
    "inquiry_replies",
    "notifications",
    "leads",
    "lead_interactions",
    "profiles",
    "newsletter_subscribers",
    "faqs",
    "designer_applications",
    "feedback",
    "review_replies",
    "baskets",
    "basket_items",
    "orders",
    "order_items",
    "tailored_orders",
    "legal_documents",
]


def run(job: Callable[[Any], Awaitable[Any]]) -> Any:
    """Run a coroutine against a fresh service-role client"""

    async def runner():
        client = await supabase_manager.init()
        try:
            return await job(client)
        finally:
            await supabase_manager.close()

    setup_logging()
    return asyncio.run(runner())


@app.command()
def sync_super_admins():
    """Give every super admin ownership of every brand"""
    summary = run(lambda client: AdminService(client).sync_super_admin_brands())

    table = Table(title="Super admin brand sync")
    table.add_column("Email", style="cyan")
    table.add_column("Result")
    table.add_column("Brands added", style="yellow")
    for entry in summary["details"]:
        result = "[green]ok[/green]" if entry["success"] else f"[red]{entry.get('error')}[/red]"
        table.add_row(entry.get("email") or entry["user_id"], result, str(entry["brands_added"]))
    console.print(table)

    console.print(
        f"{summary['successful']}/{summary['total_super_admins']} super admins synced, "
        f"{summary['total_brands_added']} brand assignments added across {summary['total_brands']} brands"
    )
    if summary["failed"]:
        raise typer.Exit(code=1)


@app.command()
def repair_images(dry_run: bool = typer.Option(False, "--dry-run", help="Report without writing")):
    """Rewrite legacy upload URLs to Supabase Storage URLs"""
    results = run(lambda client: ImageRepairService(client).repair(dry_run=dry_run))

    table = Table(title="Image repair" + (" (dry run)" if dry_run else ""))
    table.add_column("Table", style="cyan")
    table.add_column("URLs fixed", style="green")
    for name, count in results.items():
        table.add_row(name, str(count))
    console.print(table)


@app.command()
def check_tables():
    """Check that every table the API uses is reachable"""

    async def check_tables(client):
        rows = []
        for name in TABLES:
            try:
                response = await client.table(name).select("*", count="exact").limit(1).execute()
                rows.append((name, True, str(response.count or 0)))
            except APIError as e:
                rows.append((name, False, e.message or str(e.code)))
        return rows

    rows = run(check_tables)

    table = Table(title="Supabase tables")
    table.add_column("Table", style="cyan")
    table.add_column("Status")
    table.add_column("Rows / error")
    for name, ok, detail in rows:
        table.add_row(name, "[green]ok[/green]" if ok else "[red]missing[/red]", detail)
    console.print(table)

    if not all(ok for _, ok, _ in rows):
        raise typer.Exit(code=1)


@app.command()
def make_brand_owner(email: str, brand_id: str):
    """Make the profile with EMAIL an owner of BRAND_ID"""

    async def assign(client):
        profiles = ProfileRepository(client)
        profile = await profiles.get_by_email(normalize_email(email))
        if not profile:
            return False, f"No profile found for {email}"
        if not await BrandRepository(client).get(id=brand_id, columns="id"):
            return False, f"Brand {brand_id} not found"

        owned = merge_brand_ids(profile.get("owned_brands") or [], [brand_id])
        extra = {}
        # Admins keep their role
        if profile.get("role") not in (UserRole.SUPER_ADMIN.value, UserRole.ADMIN.value):
            extra["role"] = UserRole.BRAND_ADMIN.value
        await profiles.set_owned_brands(profile["id"], owned, **extra)
        return True, f"{email} now owns {len(owned)} brand(s), including {brand_id}"

    try:
        ok, message = run(assign)
    except BaseAPIException as e:
        ok, message = False, e.detail

    console.print(f"[green]{message}[/green]" if ok else f"[red]{message}[/red]")
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def setup_storage():
    """Create the public storage buckets"""
    results = run(lambda client: ImageHostingService(client).setup_buckets())
    for bucket, outcome in results.items():
        style = {"created": "green", "exists": "cyan"}.get(outcome, "red")
        console.print(f"{bucket}: [{style}]{outcome}[/{style}]")
    if "failed" in results.values():
        raise typer.Exit(code=1)


@app.command()
def recommendations(collection_id: str, user_id: str = typer.Option(None, help="Personalise for this user")):
    """Show the products recommended next to a collection"""
    products = run(lambda client: CollectionService(client).recommendations(collection_id, user_id))

    table = Table(title=f"Recommendations for {collection_id}")
    table.add_column("Product", style="cyan")
    table.add_column("Brand")
    table.add_column("Price", style="green")
    for product in products:
        table.add_row(product.get("title", product["id"]), str(product.get("brand_id")), str(product.get("price")))
    console.print(table)


if __name__ == "__main__":
    app()
