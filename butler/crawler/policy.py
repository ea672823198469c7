# butler/crawler/policy.py
"""
Admission policy: host canonicalization, domain allow-list and scheme check.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Set

WWW_PREFIX = "www."
EXTERNAL_DOMAIN = "external domain"


def canonical_host(host: str, allow_www: bool) -> str:
    """Return the single canonical spelling of *host*.

    With ``allow_www`` the ``www.`` prefix is added when missing, otherwise
    every leading ``www.`` is removed. The result is lower-cased, so applying
    the function twice gives the same value as applying it once.
    """
    host = host.lower()
    if allow_www:
        return host if host.startswith(WWW_PREFIX) else WWW_PREFIX + host
    while host.startswith(WWW_PREFIX):
        host = host[len(WWW_PREFIX):]
    return host


class AdmissionPolicy:
    """Decides whether a normalized link may become a fetch task."""

    def __init__(self, allow_www: bool = False, schemes: Iterable[str] = ("http",)) -> None:
        self.allow_www = allow_www
        self.schemes: FrozenSet[str] = frozenset(schemes)
        # written while seeding only, read-only once workers run
        self._domains: Set[str] = set()

    @property
    def domains(self) -> FrozenSet[str]:
        return frozenset(self._domains)

    def normalize_host(self, host: str) -> str:
        return canonical_host(host, self.allow_www)

    def allow(self, domain: str) -> str:
        """Mark *domain* as crawlable and return its canonical form."""
        host = self.normalize_host(domain)
        self._domains.add(host)
        return host

    def is_allowed(self, host: str) -> bool:
        return host in self._domains

    def check(self, scheme: str, host: str) -> Optional[str]:
        """Return ``None`` when the link is admitted, else the ignore reason.

        *host* must already be canonical.
        """
        if scheme not in self.schemes:
            return f"wrong scheme: {scheme}"
        if not self.is_allowed(host):
            return EXTERNAL_DOMAIN
        return None
