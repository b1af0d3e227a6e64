from django.core.management import BaseCommand

from makro_news.news.seed import seed_defaults


class Command(BaseCommand):
    help = "Insert the default RSS sources and reference tickers."

    def handle(self, *args, **options):
        sources, tickers = seed_defaults()
        self.stdout.write(
            self.style.SUCCESS(f"Seeded {sources} new sources and {tickers} new tickers")
        )
