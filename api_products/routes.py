"""API product routes."""

from fastapi import APIRouter, Depends, HTTPException
import structlog

from edge.client import EdgeClient, get_edge_client
from edge.exceptions import ApiException
from edge.models import EdgeApiProduct

logger = structlog.get_logger()

router = APIRouter()


@router.get("/", response_model=list[EdgeApiProduct])
async def list_api_products(
    edge: EdgeClient = Depends(get_edge_client)
):
    """List API products of the organization."""
    try:
        products = await edge.list_api_products()
        logger.info("api_products_listed", count=len(products))
        return products
    except ApiException as e:
        logger.error("list_api_products_failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("list_api_products_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{name}", response_model=EdgeApiProduct)
async def get_api_product(
    name: str,
    edge: EdgeClient = Depends(get_edge_client)
):
    """Get an API product by name."""
    try:
        return await edge.get_api_product(name)
    except ApiException as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail=f"API product not found: {name}")
        logger.error("get_api_product_failed", name=name, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("get_api_product_failed", name=name, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
