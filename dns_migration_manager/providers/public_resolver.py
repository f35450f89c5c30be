"""
Public resolver probe.

Looks names up through a public DNS-over-HTTPS JSON API (Google's
``/resolve`` endpoint by default). Lookups are best effort: a failed
lookup is reported as a ``failed`` probe result, never raised.
"""

import logging
from typing import List, Optional

import requests

from ..core.models import ProbeResult, ProbeStatus, RawAnswer, RecordType
from ..utils.config import DEFAULT_RESOLVER_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class PublicResolverProbe:
    """Unauthenticated DNS-over-HTTPS lookups."""

    def __init__(
        self,
        url: str = DEFAULT_RESOLVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def probe(self, name: str, record_type) -> ProbeResult:
        """Look up ``name`` for one record type and classify the outcome."""
        record_type = RecordType.parse(record_type)
        try:
            response = self.session.get(
                self.url,
                params={"name": name, "type": record_type.value},
                headers={"Accept": "application/dns-json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Lookup of {record_type.value} {name} failed: {e}")
            return ProbeResult(name, record_type, ProbeStatus.FAILED, error=str(e))

        if not isinstance(data, dict) or data.get("Status") != 0 or not data.get("Answer"):
            logger.debug(f"No {record_type.value} data for {name}")
            return ProbeResult(name, record_type, ProbeStatus.EMPTY)

        answers = []
        for entry in data["Answer"]:
            answer = self._parse_answer(entry)
            if answer is not None:
                answers.append(answer)

        status = ProbeStatus.ANSWERED if answers else ProbeStatus.EMPTY
        return ProbeResult(name, record_type, status, answers=answers)

    def resolve(self, name: str, record_type) -> List[RawAnswer]:
        """Return the raw answers for ``name``; empty on a miss or a failure."""
        return self.probe(name, record_type).answers

    @staticmethod
    def _parse_answer(entry) -> Optional[RawAnswer]:
        if not isinstance(entry, dict):
            return None
        data = entry.get("data")
        type_code = entry.get("type")
        if (
            not isinstance(data, str)
            or not data.strip()
            or isinstance(type_code, bool)
            or not isinstance(type_code, int)
        ):
            logger.debug(f"Skipping malformed resolver answer: {entry!r}")
            return None
        ttl = entry.get("TTL")
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            ttl = None
        return RawAnswer(data=data, type_code=type_code, ttl=ttl)
