from django.core.management import BaseCommand

from makro_news.news import preprocessor


class Command(BaseCommand):
    help = "Maintain the preprocessed news cache."

    def add_arguments(self, parser):
        parser.add_argument(
            "--mode",
            choices=["default", "all", "cleanup"],
            default="default",
            help="default: last 24h feed; all: warm common filters; cleanup: purge expired rows",
        )

    def handle(self, *args, **options):
        mode = options["mode"]
        if mode == "cleanup":
            cleaned = preprocessor.purge_expired_cache()
            self.stdout.write(self.style.SUCCESS(f"Cleaned {cleaned} expired entries"))
            return

        if mode == "all":
            count = preprocessor.warm_common_filters()
            self.stdout.write(f"Warmed {count} filter combinations")
        else:
            preprocessor.preprocess_news_feed({"time_range": "24h"})

        stats = preprocessor.get_cache_stats()
        self.stdout.write(
            self.style.SUCCESS(
                f"Cache: {stats['total_entries']} entries, "
                f"{round(stats['total_size_bytes'] / 1024)} KB"
            )
        )
