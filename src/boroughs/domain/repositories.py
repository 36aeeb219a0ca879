from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class SaveRepository(ABC):
    @abstractmethod
    def save(self, slot: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def load(self, slot: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def list_slots(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, slot: str) -> bool:
        raise NotImplementedError

    def exists(self, slot: str) -> bool:
        return slot in self.list_slots()
