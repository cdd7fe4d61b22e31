"""Developer API routes."""

from fastapi import APIRouter, Depends, HTTPException
import structlog

from edge.exceptions import ApiException
from edge.models import Attribute
from developers.entity import Developer
from developers.exceptions import DeveloperAlreadyExistsError
from developers.models import (
    CompanyList, DeveloperBatchDelete, DeveloperCreate, DeveloperRead,
    DeveloperStatusUpdate, DeveloperUpdate
)
from developers.storage import DeveloperStorage, get_developer_storage

logger = structlog.get_logger()

router = APIRouter()


async def _load_or_404(storage: DeveloperStorage, developer_id: str) -> Developer:
    try:
        developer = await storage.load(developer_id)
    except ApiException as e:
        logger.error("load_developer_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("load_developer_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    if developer is None:
        raise HTTPException(status_code=404, detail=f"Developer not found: {developer_id}")
    return developer


@router.get("/", response_model=list[DeveloperRead])
async def list_developers(
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """List all developers of the organization."""
    try:
        developers = await storage.load_multiple()
        logger.info("developers_listed", count=len(developers))
        return [DeveloperRead.from_developer(d) for d in developers]
    except ApiException as e:
        logger.error("list_developers_failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("list_developers_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{developer_id}", response_model=DeveloperRead)
async def get_developer(
    developer_id: str,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Get a developer by email address or developer id."""
    developer = await _load_or_404(storage, developer_id)
    logger.info("developer_retrieved", developer=developer_id)
    return DeveloperRead.from_developer(developer)


@router.get("/{developer_id}/companies", response_model=CompanyList)
async def get_developer_companies(
    developer_id: str,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Get the companies a developer belongs to."""
    developer = await _load_or_404(storage, developer_id)
    try:
        companies = await developer.get_companies()
    except Exception as e:
        logger.error("get_developer_companies_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return CompanyList(developer=developer.id, companies=companies)


@router.post("/", response_model=DeveloperRead, status_code=201)
async def create_developer(
    developer_input: DeveloperCreate,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Register a new developer on Edge."""
    developer = storage.create(developer_input.model_dump(mode="json", exclude={"attributes", "owner_id"}))
    for name, value in developer_input.attributes.items():
        developer.set_attribute(name, value)
    if developer_input.owner_id is not None:
        if storage.accounts.load(developer_input.owner_id) is None:
            raise HTTPException(status_code=404, detail=f"User not found: {developer_input.owner_id}")
        developer.set_owner_id(developer_input.owner_id)

    try:
        developer = await storage.save(developer)
    except DeveloperAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ApiException as e:
        logger.error("create_developer_failed", email=developer.email, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("create_developer_failed", email=developer.email, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return DeveloperRead.from_developer(developer)


@router.put("/{developer_id}", response_model=DeveloperRead)
async def update_developer(
    developer_id: str,
    updates: DeveloperUpdate,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Update an existing developer."""
    developer = await _load_or_404(storage, developer_id)

    update_data = updates.model_dump(exclude_unset=True, exclude_none=True)
    attributes = update_data.pop("attributes", None)
    for field, value in update_data.items():
        setattr(developer, field, value)
    if attributes is not None:
        developer.attributes = [Attribute(name=n, value=v) for n, v in attributes.items()]

    try:
        developer = await storage.save(developer)
    except ApiException as e:
        logger.error("update_developer_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("update_developer_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return DeveloperRead.from_developer(developer)


@router.post("/{developer_id}/status", response_model=DeveloperRead)
async def set_developer_status(
    developer_id: str,
    status_update: DeveloperStatusUpdate,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Activate or deactivate a developer."""
    developer = await _load_or_404(storage, developer_id)
    developer.status = status_update.status
    try:
        developer = await storage.save(developer)
    except ApiException as e:
        logger.error("set_developer_status_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("set_developer_status_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return DeveloperRead.from_developer(developer)


@router.delete("/{developer_id}", status_code=204)
async def delete_developer(
    developer_id: str,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Delete a developer."""
    developer = await _load_or_404(storage, developer_id)
    try:
        await storage.delete([developer])
    except ApiException as e:
        logger.error("delete_developer_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("delete_developer_failed", developer=developer_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return None


@router.post("/batch-delete", status_code=204)
async def delete_developers(
    request: DeveloperBatchDelete,
    storage: DeveloperStorage = Depends(get_developer_storage)
):
    """Delete several developers at once.

    An email address and a developer id of the same developer count once.
    """
    developers: list[Developer] = []
    for developer_id in dict.fromkeys(request.ids):
        developer = await _load_or_404(storage, developer_id)
        if not any(developer is d for d in developers):
            developers.append(developer)
    try:
        await storage.delete(developers)
        logger.info("developers_deleted", count=len(developers))
    except ApiException as e:
        logger.error("delete_developers_failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("delete_developers_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return None
