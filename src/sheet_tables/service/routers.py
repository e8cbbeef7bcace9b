# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Route factories: one generic CRUD router per table, plus the surgeries router.

Handlers are plain ``def`` functions, so FastAPI runs each on its worker thread
pool; per-table write serialization happens inside the client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Request, Response
from pydantic import BaseModel, Field

from ..client import SheetsClient
from ..common.constants import TableResource
from ..core.errors import NotFoundError, SchemaError, SheetsError, UpstreamError, ValidationError


def _client(request: Request) -> SheetsClient:
    return request.app.state.client


def _translate_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=exc.to_dict())
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=exc.to_dict())
    if isinstance(exc, TypeError):
        return HTTPException(status_code=400, detail={"message": str(exc)})
    if isinstance(exc, UpstreamError):
        return HTTPException(status_code=502, detail=exc.to_dict())
    if isinstance(exc, (SchemaError, SheetsError)):
        return HTTPException(status_code=500, detail=exc.to_dict())
    return HTTPException(status_code=500, detail={"message": str(exc)})


class StatusChange(BaseModel):
    status: str = Field(..., min_length=1, description="New surgery status, e.g. 'InProgress'.")
    time: Optional[str] = Field(default=None, description="ISO-8601 stamp; defaults to now (UTC).")


def crud_router(resource: TableResource) -> APIRouter:
    """Build list/create/update/delete routes for one table."""
    router = APIRouter(prefix=f"/api/{resource.path}", tags=[resource.path])

    @router.get("")
    def list_records(request: Request) -> List[Dict[str, Any]]:
        filters = dict(request.query_params)
        try:
            records = _client(request).records.list(resource.table, filters or None)
            return [r.to_dict() for r in records]
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.post("", status_code=201)
    def create_record(request: Request, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        try:
            return _client(request).records.create(resource.table, resource.prefix, payload).to_dict()
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.put("/{record_id}")
    def update_record(request: Request, record_id: str, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        try:
            return _client(request).records.update(resource.table, record_id, payload).to_dict()
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.delete("/{record_id}", status_code=204)
    def delete_record(request: Request, record_id: str) -> Response:
        try:
            _client(request).records.delete(resource.table, record_id)
        except Exception as exc:
            raise _translate_error(exc) from exc
        return Response(status_code=204)

    return router


def surgeries_router(resource: TableResource) -> APIRouter:
    """Surgeries: enriched listing, surgeon flattening on writes, status changes."""
    router = APIRouter(prefix=f"/api/{resource.path}", tags=[resource.path])

    @router.get("")
    def list_surgeries(
        request: Request,
        date: Optional[str] = Query(default=None, description="Scheduled date, YYYY-MM-DD."),
    ) -> List[Dict[str, Any]]:
        try:
            return _client(request).surgeries.list(date=date)
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.post("", status_code=201)
    def create_surgery(request: Request, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        try:
            return _client(request).surgeries.create(payload)
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.put("/{surgery_id}")
    def update_surgery(request: Request, surgery_id: str, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        try:
            return _client(request).surgeries.update(surgery_id, payload)
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.patch("/{surgery_id}/status")
    def change_status(request: Request, surgery_id: str, payload: StatusChange) -> Dict[str, Any]:
        try:
            return _client(request).surgeries.set_status(surgery_id, payload.status, payload.time)
        except Exception as exc:
            raise _translate_error(exc) from exc

    @router.delete("/{surgery_id}", status_code=204)
    def delete_surgery(request: Request, surgery_id: str) -> Response:
        try:
            _client(request).surgeries.delete(surgery_id)
        except Exception as exc:
            raise _translate_error(exc) from exc
        return Response(status_code=204)

    return router
