from fastapi import APIRouter

from atom_token.dependencies import TokenManagerDep
from atom_token.models import (
    CreateRequest,
    CreatedResponse,
    ErrorResponse,
    FindRequest,
    FoundResponse,
    ListRequest,
    ListResponse,
    ListedToken,
    RemoveRequest,
    RemovedResponse,
    SetRequest,
    SetResponse,
)
from atom_token.routers.base import ErrorHandlingBaseRoute

__all__ = ("router",)


router = APIRouter(
    tags=["tokens"],
    responses={
        404: {"description": "Token not found", "model": ErrorResponse},
        500: {"description": "Token store error", "model": ErrorResponse},
    },
    route_class=ErrorHandlingBaseRoute,
)


@router.post("/create", response_model=CreatedResponse)
async def create_token(payload: CreateRequest, manager: TokenManagerDep) -> CreatedResponse:
    """Issue a new token for the user"""
    token = await manager.create(payload.user_id, payload.label)
    return CreatedResponse(token=token)


@router.post("/find", response_model=FoundResponse)
async def find_token(payload: FindRequest, manager: TokenManagerDep) -> FoundResponse:
    token = await manager.get(payload.token)
    return FoundResponse.from_token(token)


@router.post("/list", response_model=ListResponse)
async def list_tokens(payload: ListRequest, manager: TokenManagerDep) -> ListResponse:
    """User's tokens, one page at a time (pages are zero-indexed)"""
    tokens = await manager.list(payload.user_id, payload.page)
    return ListResponse(tokens=[ListedToken.from_token(token) for token in tokens])


@router.post("/set", response_model=SetResponse)
async def set_label(payload: SetRequest, manager: TokenManagerDep) -> SetResponse:
    await manager.set_label(payload.token, payload.label)
    return SetResponse()


@router.post("/remove", response_model=RemovedResponse)
async def remove_token(payload: RemoveRequest, manager: TokenManagerDep) -> RemovedResponse:
    await manager.remove(payload.token)
    return RemovedResponse()
