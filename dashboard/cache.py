# dashboard/cache.py
"""
In-process page cache for the dashboard listings.

Rendered listing data is kept per path until a mutation marks the path stale
with `revalidate_path`; the next read recomputes it from the store.
"""

import logging
import threading
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"
CUSTOMERS_PATH = "/dashboard/customers"


class PageCache:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pages: Dict[str, Dict[Hashable, Any]] = {}
        # bumped by every revalidation of a path
        self._generations: Dict[str, int] = {}

    def get_or_render(
        self,
        path: str,
        render: Callable[[], Any],
        variant: Hashable = None,
    ) -> Any:
        """
        Return cached data for `path` (and `variant`, e.g. query parameters),
        calling `render` only on a miss.

        A render that overlaps a revalidation of `path` is returned to its
        caller but not stored, since it may have read the rows from before
        the mutation.
        """
        with self._lock:
            entries = self._pages.get(path)
            if entries is not None and variant in entries:
                return entries[variant]
            generation = self._generations.get(path, 0)

        value = render()

        with self._lock:
            if self._generations.get(path, 0) == generation:
                self._pages.setdefault(path, {})[variant] = value
            else:
                logger.debug("Discarded render of %s overlapping a revalidation", path)
        return value

    def is_cached(self, path: str, variant: Hashable = None) -> bool:
        with self._lock:
            return variant in self._pages.get(path, {})

    def revalidate_path(self, path: str) -> None:
        """Mark every cached variant of `path` stale."""
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            dropped = self._pages.pop(path, None)
        logger.info(
            "Revalidated %s (%d cached entries dropped)",
            path,
            len(dropped) if dropped else 0,
        )


_page_cache: Optional[PageCache] = None


def get_page_cache() -> PageCache:
    global _page_cache
    if _page_cache is None:
        _page_cache = PageCache()
    return _page_cache


def listing_variant(**params: Any) -> Tuple[Tuple[str, Any], ...]:
    return tuple(sorted(params.items()))
