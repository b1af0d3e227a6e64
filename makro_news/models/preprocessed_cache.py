from django.db import models


class PreprocessedCache(models.Model):
    """One serialized {news, stats} payload per normalized filter set."""

    filter_hash = models.CharField(max_length=64, unique=True)
    data = models.TextField()
    generated_at = models.DateTimeField()
    expires_at = models.DateTimeField(db_index=True)

    class Meta:
        verbose_name = "Preprocessed cache entry"
        verbose_name_plural = "Preprocessed cache entries"

    def __str__(self):
        return f"{self.filter_hash[:8]} (expires {self.expires_at:%Y-%m-%d %H:%M})"
