# lp_core/clients/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from lp_core.clients.api.serializers import ClientCreateSerializer, ClientSerializer, ClientUpdateSerializer
from lp_core.clients.models import Client
from lp_core.clients.selectors import get_client, search_clients
from lp_core.clients.services import ClientService
from lp_core.common.api.pagination import paginate


class ClientViewSet(viewsets.GenericViewSet):
    serializer_class = ClientSerializer
    queryset = Client.objects.none()
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    @extend_schema(
        tags=["Clients"],
        responses={200: ClientSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Search name / email / phone.",
            ),
        ],
    )
    def list(self, request):
        qs = search_clients(q=request.query_params.get("q"))
        return paginate(request, qs, ClientSerializer)

    @extend_schema(tags=["Clients"], request=ClientCreateSerializer, responses={201: ClientSerializer})
    def create(self, request):
        ser = ClientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        client = ClientService.create_client(**ser.validated_data)
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Clients"], responses={200: ClientSerializer})
    def retrieve(self, request, pk=None):
        client = get_client(client_id=UUID(str(pk)))
        return Response(ClientSerializer(client).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Clients"], request=ClientUpdateSerializer, responses={200: ClientSerializer})
    def partial_update(self, request, pk=None):
        ser = ClientUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        client = ClientService.update_client(client_id=UUID(str(pk)), data=ser.validated_data)
        return Response(ClientSerializer(client).data, status=status.HTTP_200_OK)
