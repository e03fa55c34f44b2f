"""
Content-management JSON API (productions and episodes).

Every route requires a valid `X-Api-Key` header. Errors are returned as
`{"error": "<message>"}` (see the exception handlers in `api/main.py`).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from catalog import schemas, service

router = APIRouter(
    prefix="/api",
    dependencies=[Depends(auth_dependencies.require_api_key)],
)


def _saved(created: bool, entity_id: int) -> JSONResponse:
    if created:
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=entity_id)
    return JSONResponse(status_code=status.HTTP_200_OK, content=True)


@router.get("/productions", response_model=list[schemas.Production])
async def list_productions() -> list[schemas.Production]:
    return await service.list_productions()


@router.get("/productions/{production_id}", response_model=schemas.Production)
async def get_production(production_id: int) -> schemas.Production:
    return await service.get_production(production_id)


@router.post("/productions")
@router.put("/productions")
async def save_production(payload: schemas.ProductionIn) -> JSONResponse:
    """
    Insert when `id` is 0 (201 + new id), update otherwise (200 + true).
    """
    created, production_id = await service.save_production(payload)
    return _saved(created, production_id)


@router.delete("/productions/{production_id}")
async def delete_production(production_id: int) -> bool:
    await service.delete_production(production_id)
    return True


@router.get("/episodes", response_model=list[schemas.Episode])
async def list_episodes() -> list[schemas.Episode]:
    return await service.list_episodes()


@router.get("/episodes/{episode_id}", response_model=schemas.Episode)
async def get_episode(episode_id: int) -> schemas.Episode:
    return await service.get_episode(episode_id)


@router.post("/episodes")
@router.put("/episodes")
async def save_episode(payload: schemas.EpisodeIn) -> JSONResponse:
    created, episode_id = await service.save_episode(payload)
    return _saved(created, episode_id)


@router.delete("/episodes/{episode_id}")
async def delete_episode(episode_id: int) -> bool:
    await service.delete_episode(episode_id)
    return True
