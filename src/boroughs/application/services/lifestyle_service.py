from __future__ import annotations

from boroughs.application.dtos import ActionResult
from boroughs.application.services.balance_tables import (
    COOK_BASE_CHANCE,
    COOK_FAILURE_CHANGE,
    COOK_SKILL_BONUS,
    COOK_SUCCESS_CHANGE,
    COOK_SUCCESS_MULTIPLIER,
    HAIR_STYLES,
    HOME_PLACES,
    SALON_PLACES,
)
from boroughs.application.session import GameSession
from boroughs.domain.models.item import Item, ItemType
from boroughs.domain.models.menu import MenuKind, MenuSession
from boroughs.domain.services.random_source import clamp


def cooking_chance(session: GameSession) -> int:
    character = session.character
    chance = character.stat_check("intellect", COOK_BASE_CHANCE)
    chance += character.skills.get("cooking", 0) * COOK_SKILL_BONUS
    return clamp(chance, 10, 95)


def cook(session: GameSession) -> ActionResult:
    character = session.character
    if session.world.active_place not in HOME_PLACES:
        return ActionResult.blocked("You can only cook at home.")
    ingredient = next((item for item in character.inventory if item.type == ItemType.INGREDIENT.value), None)
    if ingredient is None:
        return ActionResult.blocked("You have no ingredients to cook with.")

    character.inventory.remove_item(ingredient)
    if session.rng.roll(cooking_chance(session)):
        change = dict(COOK_SUCCESS_CHANGE)
        change["hunger"] = ingredient.nutrition * COOK_SUCCESS_MULTIPLIER
        character.apply_change(change)
        return ActionResult.done(
            f"The {ingredient.name} turns into a proper meal.",
            system=f"Hunger {character.hunger}.",
        )
    change = dict(COOK_FAILURE_CHANGE)
    change["hunger"] = ingredient.nutrition
    character.apply_change(change)
    return ActionResult.done(
        f"The {ingredient.name} ends up burnt. You eat it anyway.",
        system=f"Hunger {character.hunger}.",
    )


def open_eat_menu(session: GameSession) -> ActionResult:
    foods = session.character.inventory.foods()
    if not foods:
        return ActionResult.blocked("You have nothing ready to eat.")
    options = [f"{item.name} (+{item.nutrition} hunger)" for item in foods]
    menu = MenuSession(MenuKind.EAT, options, {"items": foods})
    return ActionResult.done("You check what's edible in your bag.", options=options, menu=menu)


def eat(session: GameSession, item: Item) -> ActionResult:
    character = session.character
    if not character.inventory.remove_item(item):
        return ActionResult.blocked(f"{item.name} is no longer in your bag.")
    character.apply_change(
        {"hunger": item.nutrition, "morale": item.effects.morale, "stats": dict(item.effects.stats)}
    )
    return ActionResult.done(f"You eat the {item.name}.", system=f"Hunger {character.hunger}.")


def open_hair_menu(session: GameSession) -> ActionResult:
    if session.world.active_place not in SALON_PLACES:
        return ActionResult.blocked("Hairstyles are done at the salon.")
    options = [f"{name}: {price}" for name, price, _ in HAIR_STYLES]
    menu = MenuSession(MenuKind.HAIR, options, {"styles": list(range(len(HAIR_STYLES)))})
    return ActionResult.done("The stylist hands you a laminated price list.", options=options, menu=menu)


def style_hair(session: GameSession, style_index: int) -> ActionResult:
    name, price, change = HAIR_STYLES[style_index]
    character = session.character
    if character.money < price:
        return ActionResult.blocked(f"{name} costs {price}, you have {character.money}.")
    applied = dict(change)
    applied["money"] = -price
    character.apply_change(applied)
    character.appearance["hair"] = name
    return ActionResult.done(
        f"You leave the salon with a fresh look: {name.lower()}.",
        system=f"Money left: {character.money}.",
    )
