"""Local account API routes."""

from fastapi import APIRouter, Depends, HTTPException
import structlog

from users.models import Account, AccountCreate
from users.store import AccountStore, get_account_store

logger = structlog.get_logger()

router = APIRouter()


@router.post("/", response_model=Account, status_code=201)
async def create_account(
    account: AccountCreate,
    store: AccountStore = Depends(get_account_store)
):
    """Register a local account."""
    try:
        return store.add(account)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{uid}", response_model=Account)
async def get_account(
    uid: int,
    store: AccountStore = Depends(get_account_store)
):
    """Get a local account by id."""
    account = store.load(uid)
    if account is None:
        raise HTTPException(status_code=404, detail=f"User not found: {uid}")
    return account
