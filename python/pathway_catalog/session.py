"""
Mapping session: staleness-checked, debounced identifier mapping.

Every mapping request carries a monotonically increasing sequence number
and a snapshot of the selection it was issued for. A response is applied
only if its sequence number is still the latest one issued; anything
older is discarded on arrival, whatever order the responses come back in.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from pathway_catalog.adapters.base import PathwayDatabase, SourceKey
from pathway_catalog.models import EMPTY_MATCHES, MatchSet
from pathway_catalog.service import PathwayCatalogService, normalize_identifiers

logger = logging.getLogger("PathwayCatalog.Session")


@dataclass(frozen=True)
class MappingRequest:
    """Ticket identifying one mapping request and the selection behind it."""
    sequence: int
    source: PathwayDatabase
    species_id: str
    identifiers: Tuple[str, ...]


class MappingSession:
    """
    Holds the current (source, species) selection and its MatchSet.

    Args:
        service: Catalog facade used for the mapping calls
        executor: Pool running submitted requests; one worker is created
            when omitted
        debounce_seconds: Quiet period for `schedule`, defaults to the
            service config
        on_update: Called with the new MatchSet each time one is applied
    """

    def __init__(self, service: PathwayCatalogService,
                 executor: Optional[ThreadPoolExecutor] = None,
                 debounce_seconds: Optional[float] = None,
                 on_update: Optional[Callable[[MatchSet], None]] = None):
        self.service = service
        self.debounce_seconds = (service.config.debounce_seconds
                                 if debounce_seconds is None else debounce_seconds)
        self.on_update = on_update

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1)
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

        self._sequence = 0
        self._source: Optional[PathwayDatabase] = None
        self._species_id: Optional[str] = None
        self._matches: MatchSet = EMPTY_MATCHES

    @property
    def match_set(self) -> MatchSet:
        with self._lock:
            return self._matches

    @property
    def latest_sequence(self) -> int:
        with self._lock:
            return self._sequence

    @property
    def selection(self) -> Tuple[Optional[PathwayDatabase], Optional[str]]:
        with self._lock:
            return self._source, self._species_id

    def select(self, source: SourceKey, species_id: str) -> None:
        """
        Change the active selection.

        In-flight requests become stale and the current MatchSet is
        cleared, so a pathway list is never annotated with matches of
        another species.
        """
        key = self.service.select_source(source)
        with self._lock:
            self._sequence += 1
            self._source = key
            self._species_id = species_id
            self._matches = EMPTY_MATCHES
        self._cancel_timer()

    def begin(self, identifiers: Iterable[str]) -> MappingRequest:
        """Issue the next sequence number for the current selection."""
        with self._lock:
            if self._source is None:
                raise RuntimeError("No source selected")
            self._sequence += 1
            return MappingRequest(
                sequence=self._sequence,
                source=self._source,
                species_id=self._species_id or '',
                identifiers=tuple(normalize_identifiers(identifiers)),
            )

    def complete(self, request: MappingRequest, matches: MatchSet) -> bool:
        """
        Apply a response if its request is still the latest.

        Returns:
            True when applied, False when discarded as stale
        """
        with self._lock:
            current = (request.sequence == self._sequence
                       and request.source == self._source
                       and request.species_id == (self._species_id or ''))
            if current:
                self._matches = applied = frozenset(matches)
        if not current:
            logger.debug(f"Discarding stale mapping response #{request.sequence}")
            return False
        if self.on_update:
            self.on_update(applied)
        return True

    def _execute(self, request: MappingRequest) -> bool:
        matches = self.service.map_identifiers(
            request.source, request.species_id, request.identifiers
        )
        return self.complete(request, matches)

    def run(self, identifiers: Iterable[str]) -> bool:
        """Map synchronously. Returns whether the result was applied."""
        return self._execute(self.begin(identifiers))

    def submit(self, identifiers: Iterable[str]) -> Future:
        """Map on the executor; the future resolves to applied/discarded."""
        request = self.begin(identifiers)
        return self._executor.submit(self._execute, request)

    def schedule(self, identifiers: Iterable[str]) -> None:
        """
        Debounced submit.

        Each call restarts the quiet period; only the last identifier set
        of a burst of edits is mapped.

        Raises:
            RuntimeError: no source is selected
        """
        with self._lock:
            if self._source is None:
                raise RuntimeError("No source selected")
        snapshot = list(identifiers)
        timer = threading.Timer(self.debounce_seconds, self._submit_scheduled, args=(snapshot,))
        timer.daemon = True
        with self._lock:
            previous, self._timer = self._timer, timer
        if previous is not None:
            previous.cancel()
        timer.start()

    def _submit_scheduled(self, identifiers: List[str]) -> None:
        """Timer target: nobody holds the future, so failures are logged here."""
        try:
            future = self.submit(identifiers)
        except RuntimeError as e:
            logger.error(f"Debounced mapping could not be submitted: {e}")
            return
        future.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Debounced mapping failed: {error!r}", exc_info=error)

    def _cancel_timer(self):
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def close(self):
        """Cancel pending debounced work and release the executor."""
        self._cancel_timer()
        if self._owns_executor:
            self._executor.shutdown(wait=False)
