"""
Cache Module - In-process cache for public list payloads

Entries expire after a fixed time-to-live and are invalidated by prefix
whenever the underlying resource is written.
"""

import time
import threading


DEFAULT_TTL = 300  # five minutes
MAX_ENTRIES = 256


class ContentCache:
    """Small TTL cache keyed by strings such as 'skills:category=backend'"""

    def __init__(self, ttl=DEFAULT_TTL, clock=time.monotonic, max_entries=MAX_ENTRIES):
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries = {}  # {key: (expires_at, value)}
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key, value, ttl=None):
        lifetime = self.ttl if ttl is None else ttl
        with self._lock:
            now = self._clock()
            if key not in self._entries and len(self._entries) >= self.max_entries:
                self._evict(now)
            self._entries[key] = (now + lifetime, value)
        return value

    def _evict(self, now):
        """Drop expired entries; when none have expired, drop the one expiring soonest"""
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if not expired and self._entries:
            oldest = min(self._entries, key=lambda k: self._entries[k][0])
            del self._entries[oldest]

    def get_or_set(self, key, factory, ttl=None):
        value = self.get(key)
        if value is None:
            value = self.set(key, factory(), ttl=ttl)
        return value

    def invalidate(self, prefix=None):
        """Drop every entry, or only the ones whose key starts with prefix"""
        with self._lock:
            if prefix is None:
                self._entries.clear()
                return
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]

    def __len__(self):
        return len(self._entries)


content_cache = ContentCache()


def cache_key(namespace, params=None):
    """Build a stable key from a namespace and query parameters"""
    if not params:
        return f'{namespace}:'
    parts = '&'.join(f'{k}={params[k]}' for k in sorted(params))
    return f'{namespace}:{parts}'


__all__ = ['ContentCache', 'content_cache', 'cache_key', 'DEFAULT_TTL', 'MAX_ENTRIES']
