from dataclasses import dataclass
from typing import Union


@dataclass
class TurnAdvanced:
    day: int
    hour: int


@dataclass
class DeliveryShiftStarted:
    total_tasks: int
    day: int
    hour: int


@dataclass
class DeliveryMade:
    completed: int
    total_tasks: int
    on_time: bool
    pay: int
    day: int
    hour: int


@dataclass
class DeliveryShiftCompleted:
    total_tasks: int
    day: int
    hour: int


@dataclass
class RelationshipChanged:
    npc_id: str
    npc_name: str
    interaction: str
    delta: int
    relationship_after: int
    success: bool


@dataclass
class ContactAdded:
    npc_id: str
    npc_name: str


@dataclass
class ItemPurchased:
    item_id: str
    item_name: str
    price: int


@dataclass
class DiaryEntryWritten:
    text: str
    day: int
    hour: int


JournalEvent = Union[
    DiaryEntryWritten,
    DeliveryShiftStarted,
    DeliveryMade,
    DeliveryShiftCompleted,
    ContactAdded,
    ItemPurchased,
]

GameEvent = Union[JournalEvent, TurnAdvanced, RelationshipChanged]
