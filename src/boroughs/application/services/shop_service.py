from __future__ import annotations

import logging
from typing import List, Sequence

from boroughs.application.dtos import ActionResult
from boroughs.application.services.balance_tables import SHOP_CATEGORIES_BY_PLACE, SHOP_VARIANT_TYPES
from boroughs.application.session import GameSession
from boroughs.domain.events import ItemPurchased
from boroughs.domain.models.item import Item
from boroughs.domain.models.menu import MenuKind, MenuSession


logger = logging.getLogger(__name__)


def stock_for(session: GameSession, types: Sequence[str] | None = None) -> List[Item]:
    sold_here = SHOP_CATEGORIES_BY_PLACE.get(session.world.active_place, ())
    wanted = [kind for kind in sold_here if types is None or kind in types]
    return session.catalogs.items_of_type(wanted) if wanted else []


def open_shop(session: GameSession, variant: str) -> ActionResult:
    types = SHOP_VARIANT_TYPES.get(variant, ())
    place = session.world.active_place
    stock = stock_for(session, types)
    if not stock:
        return ActionResult.blocked(f"Nothing like that is sold at the {place}.")
    options = [f"{item.name}: {item.price} (weight {item.weight})" for item in stock]
    menu = MenuSession(MenuKind.SHOP, options, {"items": stock})
    return ActionResult.done(
        f"You browse the shelves of the {place}.",
        system=f"Money: {session.character.money}. Bag: {session.character.inventory.free_weight} weight free.",
        options=options,
        menu=menu,
    )


def purchase(session: GameSession, template: Item) -> ActionResult:
    """Buy a fresh copy of a catalog item. Funds are checked before carrying capacity."""

    character = session.character
    if character.money < template.price:
        return ActionResult.blocked(
            f"{template.name} costs {template.price}, you have {character.money}."
        )
    item = template.copy()
    if not character.inventory.add(item):
        return ActionResult.blocked(
            f"Your bag cannot take {template.name} (weight {template.weight}, "
            f"{character.inventory.free_weight} free)."
        )
    character.apply_change({"money": -template.price})
    session.publish(ItemPurchased(item_id=item.id, item_name=item.name, price=template.price))
    logger.info("Purchased %s for %s", item.id, template.price)
    return ActionResult.done(
        f"You pay for the {item.name} and stuff it in your bag.",
        system=f"Money left: {character.money}.",
    )


def buy_by_text(session: GameSession, text: str | None) -> ActionResult:
    wanted = str(text or "").strip()
    if not wanted:
        return ActionResult.blocked("Say what you want to buy.")
    stock = stock_for(session)
    if not stock:
        return ActionResult.blocked(f"Nothing is for sale at the {session.world.active_place}.")
    template = next((item for item in stock if item.matches(wanted)), None)
    if template is None:
        return ActionResult.blocked(f"No {wanted} for sale here.")
    return purchase(session, template)
