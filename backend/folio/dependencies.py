"""
Dependency injection for FastAPI routes.

Provides typed service dependencies that enable IDE navigation (Ctrl+Click).
"""

from typing import Annotated
from fastapi import Request, Depends

from folio.services.store import DocumentStore
from folio.services.trash import TrashService
from folio.services.trash_sweeper import TrashSweeper


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_trash(request: Request) -> TrashService:
    return request.app.state.trash


def get_sweeper(request: Request) -> TrashSweeper:
    return request.app.state.sweeper


DocumentStoreDep = Annotated[DocumentStore, Depends(get_store)]
TrashServiceDep = Annotated[TrashService, Depends(get_trash)]
TrashSweeperDep = Annotated[TrashSweeper, Depends(get_sweeper)]
