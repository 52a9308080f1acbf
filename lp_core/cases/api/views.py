# lp_core/cases/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

from lp_core.cases.api.serializers import CaseCreateSerializer, CaseSerializer, CaseUpdateSerializer
from lp_core.cases.models import Case
from lp_core.cases.selectors import cases_filtered, get_case
from lp_core.cases.services import CaseService
from lp_core.common.api.pagination import paginate
from lp_core.tariffs.api.serializers import CatalogResponseSerializer, sheet_payload
from lp_core.tariffs.engine import TariffSheet


def _uuid_or_none(value: str | None, field_name: str) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise DRFValidationError({field_name: "Invalid UUID"})


class CaseViewSet(viewsets.GenericViewSet):
    """
    Cases:
    - list/retrieve/create/partial_update
    - tariff-catalog: catalog resolved from the case's billing context
    """
    serializer_class = CaseSerializer
    queryset = Case.objects.none()
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    @extend_schema(
        tags=["Cases"],
        responses={200: CaseSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="client", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = cases_filtered(
            client_id=_uuid_or_none(request.query_params.get("client"), "client"),
            status=request.query_params.get("status"),
            q=request.query_params.get("q"),
        )
        return paginate(request, qs, CaseSerializer)

    @extend_schema(tags=["Cases"], request=CaseCreateSerializer, responses={201: CaseSerializer})
    def create(self, request):
        ser = CaseCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)

        case = CaseService.create_case(client_id=data.pop("client"), **data)
        return Response(CaseSerializer(case).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Cases"], responses={200: CaseSerializer})
    def retrieve(self, request, pk=None):
        case = get_case(case_id=UUID(str(pk)))
        return Response(CaseSerializer(case).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Cases"], request=CaseUpdateSerializer, responses={200: CaseSerializer})
    def partial_update(self, request, pk=None):
        ser = CaseUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        case = CaseService.update_case(case_id=UUID(str(pk)), data=ser.validated_data)
        return Response(CaseSerializer(case).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Cases", "Tariffs"],
        responses={200: CatalogResponseSerializer},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter items by description or tariff code.",
            ),
        ],
    )
    @action(detail=True, methods=["get"], url_path="tariff-catalog")
    def tariff_catalog(self, request, pk=None):
        case = get_case(case_id=UUID(str(pk)))
        sheet = TariffSheet.from_context(case.billing_context())
        return Response(
            sheet_payload(sheet, items=sheet.search(request.query_params.get("q"))),
            status=status.HTTP_200_OK,
        )
