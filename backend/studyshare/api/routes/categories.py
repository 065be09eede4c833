"""Category routes."""

from fastapi import APIRouter

from studyshare.api.deps import Storage
from studyshare.schemas.categories import CategoryRead

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryRead])
async def list_categories(storage: Storage) -> list[CategoryRead]:
    """List all categories in seed order."""
    return [CategoryRead.model_validate(c) for c in storage.get_categories()]
