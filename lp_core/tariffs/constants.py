# lp_core/tariffs/constants.py
from __future__ import annotations

from django.db import models


class CourtType(models.TextChoices):
    MAGISTRATE = "magistrate", "Magistrate Court"
    HIGH = "high", "High Court"


class MagistrateScale(models.TextChoices):
    A = "A", "A"
    B = "B", "B"
    C = "C", "C"
    D = "D", "D"


class HighCourtScale(models.TextChoices):
    GENERAL = "GENERAL", "General"
    ATTORNEY = "ATTORNEY", "Attorney"
    CANDIDATE = "CANDIDATE", "Candidate Attorney"


# Free-text spellings seen on case records -> canonical value
COURT_ALIASES = {
    "magistrate": CourtType.MAGISTRATE,
    "magistrates": CourtType.MAGISTRATE,
    "magistrate court": CourtType.MAGISTRATE,
    "high": CourtType.HIGH,
    "high court": CourtType.HIGH,
}

SCALE_ALIASES = {
    "CANDIDATE ATTORNEY": HighCourtScale.CANDIDATE,
}

# Quantity used by consultation/attendance lines billed in 15 minute units
ONE_HOUR_IN_15_MIN_UNITS = 4
HALF_HOUR_IN_15_MIN_UNITS = 2

# Upper bounds for caller-supplied counts; keeps line totals within the money columns
MAX_FILE_PAGES = 100_000
MAX_QUANTITY = 100_000
