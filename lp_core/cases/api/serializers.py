# lp_core/cases/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lp_core.cases.models import Case, CaseStatus


class CaseCreateSerializer(serializers.Serializer):
    """
    court/scale/file_pages are validated by the tariff engine in CaseService,
    so callers get invalid_scale / invalid_page_count codes.
    """
    client = serializers.UUIDField()
    case_number = serializers.CharField(max_length=64)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    court = serializers.CharField(max_length=32)
    scale = serializers.CharField(max_length=32)
    file_pages = serializers.IntegerField(required=False, default=0)
    file_date = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=CaseStatus.choices, required=False, default=CaseStatus.ACTIVE)


class CaseUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH).
    """
    case_number = serializers.CharField(max_length=64, required=False)
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    court = serializers.CharField(max_length=32, required=False)
    scale = serializers.CharField(max_length=32, required=False)
    file_pages = serializers.IntegerField(required=False)
    file_date = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=CaseStatus.choices, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class CaseSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source="client.name", read_only=True)

    class Meta:
        model = Case
        fields = [
            "id",
            "client",
            "client_name",
            "case_number",
            "title",
            "description",
            "court",
            "scale",
            "file_pages",
            "file_date",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
