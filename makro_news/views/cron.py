import secrets

from django.conf import settings


def cron_authorized(request) -> bool:
    """True when CRON_SECRET is unset or the request carries it as a Bearer token."""
    secret = getattr(settings, "CRON_SECRET", "")
    if not secret:
        return True
    header = request.headers.get("Authorization", "")
    return secrets.compare_digest(header, f"Bearer {secret}")
