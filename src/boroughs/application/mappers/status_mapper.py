from __future__ import annotations

from typing import List

from boroughs.application.dtos import StatTable
from boroughs.domain.models.character import STAT_NAMES, Character
from boroughs.domain.models.item import EquipmentSlot
from boroughs.domain.models.world import World


def to_stats_table(character: Character) -> StatTable:
    rows = [[name.capitalize(), str(character.effective_stat(name))] for name in STAT_NAMES]
    rows.extend([skill.capitalize(), str(value)] for skill, value in character.skills.items())
    return StatTable(title="Stats", headers=["Stat", "Value"], rows=rows)


def to_vitals_table(character: Character, world: World) -> StatTable:
    return StatTable(
        title="Vitals",
        headers=["HP", "Energy", "Hunger", "Morale", "Day", "Hour", "District", "Place"],
        rows=[
            [
                str(character.hp),
                str(character.energy),
                str(character.hunger),
                str(character.morale),
                str(world.time.day),
                f"{world.time.hour:02d}:00",
                world.active_district,
                world.active_place,
            ]
        ],
    )


def to_image_table(character: Character) -> StatTable:
    return StatTable(
        title="Needs & image",
        headers=["Leisure", "Popularity", "Attractiveness", "Sexuality", "Money"],
        rows=[
            [
                str(character.leisure),
                str(character.popularity),
                str(character.attractiveness),
                str(character.sexuality),
                str(character.money),
            ]
        ],
    )


def to_inventory_table(character: Character) -> StatTable:
    inventory = character.inventory
    rows = [[item.name, str(item.weight)] for item in inventory]
    if not rows:
        rows = [["Empty", ""]]
    return StatTable(
        title=f"Inventory ({inventory.total_weight}/{inventory.limit})",
        headers=["Item", "Weight"],
        rows=rows,
    )


def to_equipment_table(character: Character) -> StatTable:
    rows = []
    for slot in EquipmentSlot:
        item = character.equipment.get(slot)
        rows.append([slot.value.capitalize(), item.name if item is not None else "-"])
    return StatTable(title="Equipment", headers=["Slot", "Item"], rows=rows)


def to_status_tables(character: Character, world: World) -> List[StatTable]:
    return [
        to_stats_table(character),
        to_vitals_table(character, world),
        to_image_table(character),
        to_inventory_table(character),
        to_equipment_table(character),
    ]
