"""
Glossterm Term Registry
Accumulates the terms resolved during one rendering run
"""

import logging
import threading
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TermRegistry:
    """
    Maps lower-cased terms to their resolved definitions

    Shared by every document rendered in one run. Recording a term that is
    already present overwrites it.
    """

    def __init__(self):
        self._terms: Dict[str, str] = {}
        self._lock = threading.Lock()

    def record(self, term: str, definition: str):
        """
        Insert or overwrite a term

        Args:
            term: Lower-cased term
            definition: Resolved definition text, possibly empty
        """
        with self._lock:
            if term in self._terms and self._terms[term] != definition:
                logger.debug(f"Overwriting definition of '{term}'")
            self._terms[term] = definition

    def snapshot_sorted(self) -> List[Tuple[str, str]]:
        """Get all (term, definition) pairs ordered by term"""
        with self._lock:
            return sorted(self._terms.items())

    def get(self, term: str) -> Optional[str]:
        with self._lock:
            return self._terms.get(term)

    def __contains__(self, term: str) -> bool:
        with self._lock:
            return term in self._terms

    def __len__(self) -> int:
        with self._lock:
            return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter([term for term, _ in self.snapshot_sorted()])
