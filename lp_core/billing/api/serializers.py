# lp_core/billing/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lp_core.billing.models import Invoice, InvoiceItem, InvoiceStatus
from lp_core.tariffs.api.serializers import SelectionSerializer


class InvoiceItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceItem
        fields = [
            "id",
            "position",
            "tariff_code",
            "description",
            "quantity",
            "unit_price",
            "total",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    items = InvoiceItemSerializer(many=True, read_only=True)
    case_number = serializers.CharField(source="case.case_number", read_only=True)
    client_name = serializers.CharField(source="case.client.name", read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "case",
            "case_number",
            "client_name",
            "invoice_number",
            "date",
            "status",
            "currency",
            "subtotal",
            "vat_rate",
            "vat_total",
            "amount",
            "notes",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class InvoiceCreateSerializer(serializers.Serializer):
    case = serializers.UUIDField()
    selections = SelectionSerializer(many=True)
    date = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False, default=InvoiceStatus.PENDING)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class InvoiceRegenerateSerializer(serializers.Serializer):
    selections = SelectionSerializer(many=True)


class InvoiceStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=InvoiceStatus.choices)
