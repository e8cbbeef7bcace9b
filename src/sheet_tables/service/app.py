# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""FastAPI app that exposes the scheduling tables over HTTP."""

from __future__ import annotations

import hmac
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .. import __version__
from ..client import SheetsClient
from ..common.constants import GENERIC_RESOURCES, SURGERIES, USERS
from .routers import _translate_error, crud_router, surgeries_router


@dataclass(frozen=True)
class ServiceSettings:
    """
    HTTP service settings.

    :param login_password: Shared password accepted by ``/api/login``. This is a
        placeholder check, not authentication.
    :param cors_origins: Origins allowed by CORS.
    :param host: Bind address.
    :param port: Bind port.
    """

    login_password: str = "password"
    cors_origins: Tuple[str, ...] = ("*",)
    host: str = "0.0.0.0"
    port: int = 3001

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        origins = [o.strip() for o in os.getenv("SHEETS_CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            login_password=os.getenv("SHEETS_LOGIN_PASSWORD", "password"),
            cors_origins=tuple(origins) or ("*",),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
        )


class LoginRequest(BaseModel):
    email: str
    password: str


def create_app(client: SheetsClient, settings: Optional[ServiceSettings] = None) -> FastAPI:
    """Build the FastAPI app around an existing client."""
    settings = settings or ServiceSettings()
    app = FastAPI(title="Surgery Scheduling Sheets API", version=__version__)
    app.state.client = client
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for resource in GENERIC_RESOURCES:
        app.include_router(crud_router(resource))
    app.include_router(surgeries_router(SURGERIES))

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok", "spreadsheet_id": client.spreadsheet_id}

    @app.post("/api/login")
    def login(request: Request, payload: LoginRequest) -> Dict[str, Any]:
        try:
            users = request.app.state.client.records.list(USERS.table, {"email": payload.email})
        except Exception as exc:
            raise _translate_error(exc) from exc
        password_ok = hmac.compare_digest(
            payload.password.encode("utf-8"), request.app.state.settings.login_password.encode("utf-8")
        )
        if not users or not password_ok:
            raise HTTPException(status_code=401, detail={"message": "Invalid email or password."})
        return users[0].to_dict()

    return app
