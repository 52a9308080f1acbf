from django.contrib import admin

from lp_core.cases.models import Case


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("case_number", "title", "client", "court", "scale", "file_pages", "status", "created_at")
    list_filter = ("court", "status", "created_at")
    search_fields = ("case_number", "title", "client__name")
    autocomplete_fields = ("client",)
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
