# lp_core/tariffs/errors.py
"""
Tariff engine errors.

All of them are caller-input problems (nothing here is transient), so they
subclass APIException and flow through the global API exception handler
as 4xx responses. Plain Python callers can catch them like any exception.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException

from lp_core.tariffs.constants import MAX_FILE_PAGES


class TariffError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Tariff request failed."
    default_code = "tariff_error"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class InvalidScaleError(TariffError):
    default_detail = "Scale is not valid for this court type."
    default_code = "invalid_scale"

    def __init__(self, *, court_type=None, scale=None, allowed=(), detail=None):
        self.court_type = court_type
        self.scale = scale
        self.allowed = tuple(allowed)
        if detail is None and scale is not None:
            detail = f"Scale {scale!r} is not valid for court type {court_type!r}."
            if self.allowed:
                detail += f" Allowed: {', '.join(self.allowed)}."
        super().__init__(detail=detail)


class InvalidCourtTypeError(InvalidScaleError):
    default_detail = "Unknown court type."

    def __init__(self, *, court_type=None, allowed=()):
        super().__init__(
            court_type=court_type,
            allowed=allowed,
            detail=f"Unknown court type {court_type!r}.",
        )


class InvalidPageCountError(TariffError):
    default_detail = f"File page count must be a whole number from 0 to {MAX_FILE_PAGES}."
    default_code = "invalid_page_count"

    def __init__(self, *, file_pages=None):
        self.file_pages = file_pages
        super().__init__(detail=f"File page count must be a whole number from 0 to {MAX_FILE_PAGES} (got {file_pages!r}).")


class NotFoundError(TariffError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Tariff item not found."
    default_code = "not_found"

    def __init__(self, *, item_id=None):
        self.item_id = item_id
        super().__init__(detail=f"Tariff item {item_id!r} is not in the current catalog.")


class EmptySelectionError(TariffError):
    default_detail = "Select at least one tariff item."
    default_code = "empty_selection"
