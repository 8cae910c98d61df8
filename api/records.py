"""Generic record CRUD — one set of routes for every record-store table.

Bodies may use camelCase or snake_case field names; responses are
camelCase entities.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from adapters.base import EntityRepository
from adapters.repositories import Repositories
from api.deps import get_repositories
from errors import NotFoundError

router = APIRouter(prefix="/api/records", tags=["records"])


def _repository(table: str, repos: Repositories) -> EntityRepository:
    repo = repos.for_table(table)
    if repo is None:
        raise HTTPException(status_code=404, detail=f"Unknown table '{table}'")
    return repo


@router.get("/{table}")
async def list_records(table: str, repos: Repositories = Depends(get_repositories)):
    return await _repository(table, repos).list()


@router.get("/{table}/{entity_id}")
async def get_record(
    table: str,
    entity_id: str,
    repos: Repositories = Depends(get_repositories),
):
    entity = await _repository(table, repos).get_by_id(entity_id)
    if entity is None:
        raise NotFoundError(table=table, entity_id=entity_id)
    return entity


@router.post("/{table}", status_code=201)
async def create_record(
    table: str,
    fields: dict[str, Any] = Body(...),
    repos: Repositories = Depends(get_repositories),
):
    return await _repository(table, repos).create(fields)


@router.patch("/{table}/{entity_id}")
async def update_record(
    table: str,
    entity_id: str,
    fields: dict[str, Any] = Body(...),
    repos: Repositories = Depends(get_repositories),
):
    return await _repository(table, repos).update(entity_id, fields)


@router.delete("/{table}/{entity_id}")
async def delete_record(
    table: str,
    entity_id: str,
    repos: Repositories = Depends(get_repositories),
):
    deleted = await _repository(table, repos).delete(entity_id)
    return {"deleted": deleted, "id": entity_id}
