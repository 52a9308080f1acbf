from __future__ import annotations

from django.contrib import admin

from lp_core.billing.models import Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    fields = ("position", "tariff_code", "description", "quantity", "unit_price", "total")
    readonly_fields = fields


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("invoice_number", "case", "date", "status", "subtotal", "vat_total", "amount", "created_at")
    list_filter = ("status", "date")
    search_fields = ("invoice_number", "case__case_number", "case__client__name")
    autocomplete_fields = ("case",)
    inlines = [InvoiceItemInline]
    ordering = ("-created_at",)
