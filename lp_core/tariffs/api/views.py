# lp_core/tariffs/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from lp_core.tariffs.api.serializers import (
    CatalogRequestSerializer,
    CatalogResponseSerializer,
    QuoteRequestSerializer,
    QuoteResponseSerializer,
    sheet_payload,
)
from lp_core.tariffs.engine import TariffSheet


class TariffCatalogView(APIView):
    """
    /tariffs/catalog/
    - POST: resolve the candidate lines for a billing context (optionally filtered by q)
    """

    @extend_schema(
        tags=["Tariffs"],
        request=CatalogRequestSerializer,
        responses={200: CatalogResponseSerializer},
    )
    def post(self, request):
        ser = CatalogRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        sheet = TariffSheet.for_context(data["court"], data["scale"], data["file_pages"])
        return Response(sheet_payload(sheet, items=sheet.search(data.get("q"))), status=status.HTTP_200_OK)


class TariffQuoteView(APIView):
    """
    /tariffs/quote/
    - POST: apply selections/edits to a fresh catalog and return lines + totals
      (nothing is persisted)
    """

    @extend_schema(
        tags=["Tariffs"],
        request=QuoteRequestSerializer,
        responses={200: QuoteResponseSerializer},
    )
    def post(self, request):
        ser = QuoteRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        sheet = TariffSheet.for_context(data["court"], data["scale"], data["file_pages"])
        sheet = sheet.apply_selections(data["selections"])

        payload = {
            "context": sheet.context,
            "items": sheet.items,
            "lines": sheet.finalize(),
            "totals": sheet.totals(),
        }
        return Response(QuoteResponseSerializer(payload).data, status=status.HTTP_200_OK)
