# lp_core/tariffs/management/commands/tariff_catalog.py
from django.core.management.base import BaseCommand, CommandError

from lp_core.tariffs.engine import TariffSheet
from lp_core.tariffs.errors import TariffError


class Command(BaseCommand):
    help = "Print the tariff catalog for a court/scale/page count, optionally with a quote for selected items."

    def add_arguments(self, parser):
        parser.add_argument("--court", required=True, help="magistrate | high")
        parser.add_argument("--scale", required=True, help="A-D (magistrate) or General/Attorney/Candidate (high)")
        parser.add_argument("--pages", type=int, default=0, help="File page count")
        parser.add_argument("--select", nargs="*", default=[], metavar="ID", help="Catalog ids to select")

    def handle(self, *args, **options):
        try:
            sheet = TariffSheet.for_context(options["court"], options["scale"], options["pages"])
            sheet = sheet.select(*options["select"])
        except TariffError as e:
            raise CommandError(str(e))

        ctx = sheet.context
        self.stdout.write(f"court={ctx.court_type} scale={ctx.scale} file_pages={ctx.file_pages}")
        for item in sheet.items:
            mark = "x" if item.selected else " "
            self.stdout.write(
                f"[{mark}] {item.id:<16} {item.rate:>10} x {item.quantity:<4} = {item.total_amount:>10}  "
                f"{item.description} ({item.unit})"
            )

        if not options["select"]:
            return

        totals = sheet.totals()
        self.stdout.write(f"subtotal={totals.subtotal} vat={totals.vat} total={totals.total}")
        self.stdout.write(self.style.SUCCESS(f"{len(sheet.finalize())} line(s) ready for invoicing"))
