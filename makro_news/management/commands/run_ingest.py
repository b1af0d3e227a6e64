import logging

from django.core.management import BaseCommand, CommandError

from makro_news.news.ingest import SOURCE_DELAY, run_ingestion

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Fetch every active RSS source, save new items and flag duplicate URLs."

    def add_arguments(self, parser):
        parser.add_argument(
            "--delay",
            type=float,
            default=SOURCE_DELAY,
            help="Seconds to wait between sources",
        )

    def handle(self, *args, **options):
        try:
            report = run_ingestion(delay=options["delay"])
        except Exception as exc:  # noqa: BLE001
            logger.error("Ingestion failed: %s", exc, exc_info=True)
            raise CommandError(f"Ingestion failed: {exc}") from exc

        self.stdout.write(
            f"Sources: {report.sources}  saved: {report.saved}  "
            f"duplicates: {report.duplicates}  errors: {report.errors}  "
            f"duplicates marked: {report.duplicates_marked}"
        )
        if report.failed_sources:
            self.stdout.write(
                self.style.WARNING("Failed sources: " + ", ".join(report.failed_sources))
            )
        self.stdout.write(self.style.SUCCESS("Ingestion complete"))
