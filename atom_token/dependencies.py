from typing import Annotated

from fastapi import Depends, Request

from atom_token.services.tokens import TokenManager

__all__ = ["TokenManagerDep", "get_token_manager"]


def get_token_manager(request: Request) -> TokenManager:
    """Token manager created on application's startup"""
    return request.app.state.token_manager


TokenManagerDep = Annotated[TokenManager, Depends(get_token_manager)]
