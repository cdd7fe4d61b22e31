"""Developer app API routes."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
import structlog

from edge.exceptions import ApiException
from developers.exceptions import DeveloperDoesNotExistError
from apps.models import DeveloperAppList, DeveloperAppRead
from apps.service import DeveloperAppService, get_developer_app_service

logger = structlog.get_logger()

router = APIRouter()


@router.get("/users/{user_id}", response_model=DeveloperAppList)
async def list_user_apps(
    user_id: int,
    service: DeveloperAppService = Depends(get_developer_app_service)
):
    """List the apps of a user's developer."""
    try:
        return await service.list_for_user(user_id)
    except ValidationError as e:
        # Malformed Edge payload; must come before the ValueError branch.
        logger.error("list_user_apps_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    except (ValueError, DeveloperDoesNotExistError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ApiException as e:
        logger.error("list_user_apps_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("list_user_apps_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/users/{user_id}/{app_name}", response_model=DeveloperAppRead)
async def get_user_app(
    user_id: int,
    app_name: str,
    service: DeveloperAppService = Depends(get_developer_app_service)
):
    """Get a single app of a user's developer."""
    try:
        return await service.get_for_user(user_id, app_name)
    except ValidationError as e:
        logger.error("get_user_app_failed", user_id=user_id, app_name=app_name, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
    except (ValueError, DeveloperDoesNotExistError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ApiException as e:
        logger.error("get_user_app_failed", user_id=user_id, app_name=app_name, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("get_user_app_failed", user_id=user_id, app_name=app_name, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
