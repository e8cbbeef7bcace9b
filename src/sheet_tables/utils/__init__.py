# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal helpers for sheet_tables."""

__all__ = []
