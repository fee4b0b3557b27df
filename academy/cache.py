"""Memoization of AI assistant answers keyed by (question, role).

Matching is exact: case and whitespace are significant and there is no
semantic matching. Entries are append-only; the newest entry for a key wins.
"""
import logging
import threading
from concurrent.futures import Future
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from .models import AICacheEntry

logger = logging.getLogger(__name__)

VISITOR_ROLE = "visitor"


def normalize_role(role) -> str:
    return str(role) if role else VISITOR_ROLE


def lookup(question: str, role=None) -> str | None:
    qs = AICacheEntry.objects.filter(question=question, user_role=normalize_role(role))
    ttl = getattr(settings, "AI_CACHE_TTL", None)
    if ttl:
        qs = qs.filter(created_at__gte=timezone.now() - timedelta(seconds=ttl))
    entry = qs.order_by("-created_at", "-id").only("response").first()
    return entry.response if entry is not None else None


def store(question: str, role, response: str) -> AICacheEntry:
    entry = AICacheEntry.objects.create(
        question=question, user_role=normalize_role(role), response=response
    )
    max_entries = getattr(settings, "AI_CACHE_MAX_ENTRIES", None)
    if max_entries:
        _prune(max_entries)
    return entry


def _prune(max_entries: int) -> None:
    stale_ids = list(
        AICacheEntry.objects.order_by("-created_at", "-id").values_list("id", flat=True)[max_entries:]
    )
    if stale_ids:
        AICacheEntry.objects.filter(id__in=stale_ids).delete()
        logger.info("Pruned %d AI cache entries", len(stale_ids))


class InflightRegistry:
    """Lets concurrent identical requests in one process share one call.

    The first caller for a key becomes the leader and runs ``compute``; callers
    arriving before it finishes wait for the same result (or exception).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[tuple[str, str], Future] = {}

    def run(self, key: tuple[str, str], compute):
        with self._lock:
            future = self._pending.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._pending[key] = future

        if not leader:
            logger.debug("Joining in-flight AI request for role=%s", key[1])
            return future.result()

        try:
            result = compute()
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._pending.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
