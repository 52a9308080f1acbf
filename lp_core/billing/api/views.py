# lp_core/billing/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

from lp_core.billing.api.serializers import (
    InvoiceCreateSerializer,
    InvoiceRegenerateSerializer,
    InvoiceSerializer,
    InvoiceStatusSerializer,
)
from lp_core.billing.models import Invoice
from lp_core.billing.selectors import get_invoice, invoices_filtered, recent_invoices
from lp_core.billing.services import InvoiceService
from lp_core.common.api.pagination import paginate
from lp_core.tariffs.api.serializers import CatalogResponseSerializer, sheet_payload


def _uuid_or_none(value: str | None, field_name: str) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise DRFValidationError({field_name: "Invalid UUID"})


class InvoiceViewSet(viewsets.GenericViewSet):
    """
    Invoices:
    - list/retrieve/destroy
    - create from a tariff selection
    - regenerate (replace lines from a new selection)
    - status
    - tariff-sheet: case catalog with the saved lines re-applied
    - recent
    """
    serializer_class = InvoiceSerializer
    queryset = Invoice.objects.none()
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    @extend_schema(
        tags=["Billing"],
        responses={200: InvoiceSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="case", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = invoices_filtered(
            case_id=_uuid_or_none(request.query_params.get("case"), "case"),
            status=request.query_params.get("status"),
        )
        return paginate(request, qs, InvoiceSerializer)

    @extend_schema(tags=["Billing"], responses={200: InvoiceSerializer})
    def retrieve(self, request, pk=None):
        inv = get_invoice(invoice_id=UUID(str(pk)))
        return Response(InvoiceSerializer(inv).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing"], request=InvoiceCreateSerializer, responses={201: InvoiceSerializer})
    def create(self, request):
        ser = InvoiceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        inv = InvoiceService.create_from_selection(
            case_id=data["case"],
            selections=data["selections"],
            date=data.get("date"),
            status=data.get("status"),
            notes=data.get("notes", ""),
        )
        return Response(InvoiceSerializer(get_invoice(invoice_id=inv.id)).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Billing"], responses={204: None})
    def destroy(self, request, pk=None):
        InvoiceService.delete(invoice_id=UUID(str(pk)))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Billing"], request=InvoiceRegenerateSerializer, responses={200: InvoiceSerializer})
    @action(detail=True, methods=["post"], url_path="regenerate")
    def regenerate(self, request, pk=None):
        ser = InvoiceRegenerateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        inv = InvoiceService.update_from_selection(
            invoice_id=UUID(str(pk)),
            selections=ser.validated_data["selections"],
        )
        return Response(InvoiceSerializer(get_invoice(invoice_id=inv.id)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing"], request=InvoiceStatusSerializer, responses={200: InvoiceSerializer})
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        ser = InvoiceStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        inv = InvoiceService.set_status(invoice_id=UUID(str(pk)), status=ser.validated_data["status"])
        return Response(InvoiceSerializer(get_invoice(invoice_id=inv.id)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing", "Tariffs"], responses={200: CatalogResponseSerializer})
    @action(detail=True, methods=["get"], url_path="tariff-sheet")
    def tariff_sheet(self, request, pk=None):
        sheet = InvoiceService.selection_sheet(invoice_id=UUID(str(pk)))
        return Response(sheet_payload(sheet), status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Billing"],
        responses={200: InvoiceSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @action(detail=False, methods=["get"], url_path="recent")
    def recent(self, request):
        try:
            limit = int(request.query_params.get("limit", 5))
        except ValueError:
            raise DRFValidationError({"limit": "Must be an integer."})
        limit = min(max(limit, 1), 50)

        return Response(InvoiceSerializer(recent_invoices(limit=limit), many=True).data, status=status.HTTP_200_OK)
