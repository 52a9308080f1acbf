# lp_core/tariffs/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lp_core.tariffs.constants import MAX_QUANTITY


class BillingContextSerializer(serializers.Serializer):
    """
    Input contract. court/scale are free text here and normalized by the
    tariff engine so an unknown scale surfaces as invalid_scale, not as a
    generic choice error.
    """
    court = serializers.CharField(max_length=32)
    scale = serializers.CharField(max_length=32)
    # range checks are left to the engine (invalid_page_count)
    file_pages = serializers.IntegerField()


class CatalogRequestSerializer(BillingContextSerializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")


class SelectionSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(required=False, allow_null=True, max_value=MAX_QUANTITY)
    rate = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)


class QuoteRequestSerializer(BillingContextSerializer):
    selections = SelectionSerializer(many=True)


class BillingContextOutSerializer(serializers.Serializer):
    court_type = serializers.CharField()
    scale = serializers.CharField()
    file_pages = serializers.IntegerField()


class TariffItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    description = serializers.CharField()
    unit = serializers.CharField()
    rate = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    selected = serializers.BooleanField()


class InvoiceLineDraftSerializer(serializers.Serializer):
    code = serializers.CharField()
    description = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)


class InvoiceTotalsSerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    vat = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)


class CatalogResponseSerializer(serializers.Serializer):
    context = BillingContextOutSerializer()
    items = TariffItemSerializer(many=True)


class QuoteResponseSerializer(serializers.Serializer):
    context = BillingContextOutSerializer()
    items = TariffItemSerializer(many=True)
    lines = InvoiceLineDraftSerializer(many=True)
    totals = InvoiceTotalsSerializer()


def sheet_payload(sheet, *, items=None) -> dict:
    """
    {context, items} payload for a TariffSheet (items default to the whole sheet).
    """
    return CatalogResponseSerializer(
        {"context": sheet.context, "items": sheet.items if items is None else items}
    ).data
