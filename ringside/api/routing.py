"""Route builders shared by the roster routers.

Every roster resource exposes the same listing, CRUD and status-action
endpoints; only the schemas and the service dependency differ.  Annotations
in this module are evaluated eagerly because FastAPI reads the schema
classes captured by each closure.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from enum import Enum
from typing import Any, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from ringside.schemas.common import ManagerAssignment, Page, TransitionRequest
from ringside.services.roster_service import DEFAULT_PAGE_SIZE

EMPLOYMENT_ACTIONS = ("employ", "release", "retire", "unretire", "suspend", "reinstate")
INJURY_ACTIONS = ("injure", "clear-injury")
ACTIVATION_ACTIONS = ("activate", "deactivate", "retire", "unretire")

MAX_PAGE_SIZE = 200


def raise_not_found(exc: LookupError) -> NoReturn:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def add_crud_routes(
    router: APIRouter,
    *,
    get_service: Callable[..., Any],
    read_schema: type[BaseModel],
    detail_schema: type[BaseModel],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    status_enum: type[Enum] | None = None,
) -> None:
    """Register list, create, detail, update, delete and restore routes."""

    page_schema = Page[read_schema]  # type: ignore[valid-type]
    status_type: Any = status_enum if status_enum is not None else str

    @router.get("", response_model=page_schema)
    async def list_records(
        status_filter: status_type | None = Query(  # type: ignore[valid-type]
            None, alias="status", description="Only return records in this status."
        ),
        q: str | None = Query(None, max_length=255, description="Case-insensitive search."),
        include_deleted: bool = Query(False),
        limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
        offset: int = Query(0, ge=0),
        service: Any = Depends(get_service),
    ) -> Any:
        if status_enum is None and status_filter is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This resource cannot be filtered by status",
            )
        return await service.list_page(
            status=status_filter,
            search=q,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        )

    @router.post("", response_model=detail_schema, status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: create_schema,  # type: ignore[valid-type]
        service: Any = Depends(get_service),
    ) -> Any:
        try:
            entity = await service.create(payload.model_dump())
        except LookupError as exc:
            raise_not_found(exc)
        return await service.detail(entity.id)

    @router.get("/{entity_id}", response_model=detail_schema)
    async def get_record(entity_id: int, service: Any = Depends(get_service)) -> Any:
        try:
            return await service.detail(entity_id)
        except LookupError as exc:
            raise_not_found(exc)

    @router.patch("/{entity_id}", response_model=detail_schema)
    async def update_record(
        entity_id: int,
        payload: update_schema,  # type: ignore[valid-type]
        service: Any = Depends(get_service),
    ) -> Any:
        try:
            await service.update(entity_id, payload.model_dump(exclude_unset=True))
            return await service.detail(entity_id)
        except LookupError as exc:
            raise_not_found(exc)

    @router.delete(
        "/{entity_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
    )
    async def delete_record(entity_id: int, service: Any = Depends(get_service)) -> Response:
        try:
            await service.delete(entity_id)
        except LookupError as exc:
            raise_not_found(exc)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/{entity_id}/restore", response_model=detail_schema)
    async def restore_record(entity_id: int, service: Any = Depends(get_service)) -> Any:
        try:
            await service.restore(entity_id)
            return await service.detail(entity_id)
        except LookupError as exc:
            raise_not_found(exc)


def add_action_routes(
    router: APIRouter,
    actions: Sequence[str],
    *,
    get_service: Callable[..., Any],
    detail_schema: type[BaseModel],
) -> None:
    """Register ``POST /{entity_id}/{action}`` for each status action.

    ``clear-injury`` dispatches to ``service.clear_injury``.
    """

    for action in actions:
        router.add_api_route(
            f"/{{entity_id}}/{action}",
            _action_endpoint(action.replace("-", "_"), get_service),
            methods=["POST"],
            response_model=detail_schema,
            name=action.replace("-", "_"),
            summary=action.replace("-", " ").capitalize(),
        )


def add_manager_routes(
    router: APIRouter,
    *,
    get_service: Callable[..., Any],
    detail_schema: type[BaseModel],
) -> None:
    """Register hiring and firing of managers for a managed client."""

    @router.post("/{entity_id}/managers", response_model=detail_schema)
    async def hire_manager(
        entity_id: int,
        payload: ManagerAssignment,
        service: Any = Depends(get_service),
    ) -> Any:
        try:
            await service.hire_manager(entity_id, payload.manager_id, payload.date)
            return await service.detail(entity_id)
        except LookupError as exc:
            raise_not_found(exc)

    @router.delete(
        "/{entity_id}/managers/{manager_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
    )
    async def fire_manager(
        entity_id: int,
        manager_id: int,
        date: datetime | None = Query(None, description="Effective date; defaults to now."),
        service: Any = Depends(get_service),
    ) -> Response:
        try:
            await service.fire_manager(entity_id, manager_id, date)
        except LookupError as exc:
            raise_not_found(exc)
        return Response(status_code=status.HTTP_204_NO_CONTENT)


def _action_endpoint(method_name: str, get_service: Callable[..., Any]) -> Callable[..., Any]:
    async def endpoint(
        entity_id: int,
        payload: TransitionRequest | None = Body(None),
        service: Any = Depends(get_service),
    ) -> Any:
        when = payload.date if payload is not None else None
        try:
            await getattr(service, method_name)(entity_id, when)
            return await service.detail(entity_id)
        except LookupError as exc:
            raise_not_found(exc)

    endpoint.__name__ = method_name
    return endpoint


__all__ = [
    "ACTIVATION_ACTIONS",
    "EMPLOYMENT_ACTIONS",
    "INJURY_ACTIONS",
    "add_action_routes",
    "add_crud_routes",
    "add_manager_routes",
    "raise_not_found",
]
