import logging

from django.core.management import BaseCommand

from makro_news.analytics.sentiment import analyze_sentiment
from makro_news.models import NewsItem

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


class Command(BaseCommand):
    help = "Score stored news items that have no sentiment yet (newest first)."

    def add_arguments(self, parser):
        parser.add_argument("--limit", type=int, default=1000)
        parser.add_argument(
            "--use-ai",
            action="store_true",
            help="Escalate low-confidence items to the LLM when it is configured",
        )

    def handle(self, *args, **options):
        items = list(
            NewsItem.objects.filter(sentiment__isnull=True)
            .order_by("-published_at")
            .only("id", "title", "summary", "asset_type", "source")[: options["limit"]]
        )
        self.stdout.write(f"Found {len(items)} articles without sentiment")

        updated = failed = 0
        for item in items:
            try:
                result = analyze_sentiment(
                    item.title,
                    item.summary,
                    item.asset_type,
                    source=item.source,
                    allow_ai=options["use_ai"],
                )
                NewsItem.objects.filter(pk=item.pk).update(sentiment=result.score)
            except Exception as exc:  # noqa: BLE001
                failed += 1
                logger.error("Failed to update article %s: %s", item.pk, exc)
                continue

            updated += 1
            if updated % PROGRESS_EVERY == 0:
                self.stdout.write(f"Progress: {updated}/{len(items)} articles updated")

        self.stdout.write(
            self.style.SUCCESS(
                f"Backfill complete. Updated: {updated}  failed: {failed}  total: {len(items)}"
            )
        )
