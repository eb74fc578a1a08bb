"""Category registry endpoints."""

from fastapi import APIRouter, Depends

from wallet_aggregator.api.deps import get_category_sync_service
from wallet_aggregator.api.schemas import CategoryListResponse, CategorySyncResponse
from wallet_aggregator.services import CategorySyncService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories(
    service: CategorySyncService = Depends(get_category_sync_service),
) -> CategoryListResponse:
    """List the category labels known to the settings document."""
    return CategoryListResponse(categories=service.known_categories())


@router.get("/sync", response_model=CategorySyncResponse)
def sync_categories(
    service: CategorySyncService = Depends(get_category_sync_service),
) -> CategorySyncResponse:
    """Add categories seen in cached transactions to the settings document."""
    result = service.sync_categories_from_cache()
    return CategorySyncResponse(
        message=f"Category sync completed. Found {len(result.new_categories)} new categories.",
        new_categories=result.new_categories,
        total_categories=result.total_categories,
        total_transactions=result.total_transactions,
    )
