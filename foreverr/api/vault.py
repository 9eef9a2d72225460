# foreverr/api/vault.py

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import PageParams, get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas import Page, paginate
from foreverr.schemas.vault_schemas import (
    TimeCapsuleCreate,
    TimeCapsuleResponse,
    VaultItemCreate,
    VaultItemResponse
)
from foreverr.services.vault_service import vault_service

router = APIRouter(tags=["memory-vault"])

VaultItemType = Literal["document", "photo", "video", "audio", "message"]


@router.get("/memorials/{memorial_id}/vault", response_model=Page[VaultItemResponse])
async def list_vault_items(
    memorial_id: str,
    item_type: Optional[VaultItemType] = None,
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    items = await vault_service.list_items(
        session, memorial_id, current_user.id, item_type, page.offset, page.limit
    )
    return paginate(items, page.offset, page.limit)


@router.post("/memorials/{memorial_id}/vault", response_model=VaultItemResponse, status_code=201)
async def add_vault_item(
    memorial_id: str,
    request: VaultItemCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await vault_service.add_item(session, memorial_id, current_user.id, request)


@router.delete("/vault/{item_id}", status_code=204)
async def delete_vault_item(
    item_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    await vault_service.delete_item(session, item_id, current_user.id)
    return Response(status_code=204)


@router.get("/memorials/{memorial_id}/capsules", response_model=List[TimeCapsuleResponse])
async def list_capsules(
    memorial_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await vault_service.list_capsules(session, memorial_id, current_user.id)


@router.post("/memorials/{memorial_id}/capsules", response_model=TimeCapsuleResponse, status_code=201)
async def create_capsule(
    memorial_id: str,
    request: TimeCapsuleCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await vault_service.create_capsule(session, memorial_id, current_user.id, request)


@router.get("/capsules/{capsule_id}", response_model=TimeCapsuleResponse)
async def get_capsule(
    capsule_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await vault_service.get_capsule(session, capsule_id, current_user.id)
