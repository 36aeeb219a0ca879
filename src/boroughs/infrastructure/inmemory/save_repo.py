import copy
from typing import Any, Dict, List, Optional

from boroughs.domain.repositories import SaveRepository


class InMemorySaveRepository(SaveRepository):
    """Keeps save payloads for the lifetime of the process."""

    def __init__(self) -> None:
        self._slots: Dict[str, Dict[str, Any]] = {}

    def save(self, slot: str, payload: Dict[str, Any]) -> None:
        self._slots[str(slot)] = copy.deepcopy(payload)

    def load(self, slot: str) -> Optional[Dict[str, Any]]:
        payload = self._slots.get(str(slot))
        return copy.deepcopy(payload) if payload is not None else None

    def list_slots(self) -> List[str]:
        return sorted(self._slots)

    def delete(self, slot: str) -> bool:
        return self._slots.pop(str(slot), None) is not None
