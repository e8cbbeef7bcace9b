# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""FastAPI service exposing the scheduling tables over HTTP."""

from .app import ServiceSettings, create_app

__all__ = ["ServiceSettings", "create_app"]
