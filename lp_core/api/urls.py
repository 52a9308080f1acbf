# lp_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from lp_core.billing.api.views import InvoiceViewSet
from lp_core.cases.api.views import CaseViewSet
from lp_core.clients.api.views import ClientViewSet
from lp_core.tariffs.api.views import TariffCatalogView, TariffQuoteView

router = DefaultRouter()

router.register(r"clients", ClientViewSet, basename="clients")
router.register(r"cases", CaseViewSet, basename="cases")
router.register(r"billing/invoices", InvoiceViewSet, basename="billing-invoices")

urlpatterns = [
    # Tariff engine (stateless, nothing persisted)
    path("tariffs/catalog/", TariffCatalogView.as_view(), name="tariff-catalog"),
    path("tariffs/quote/", TariffQuoteView.as_view(), name="tariff-quote"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
