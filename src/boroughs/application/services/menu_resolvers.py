"""Resolvers for numbered menus, keyed by menu kind.

Each resolver receives the session, the menu that was just closed and the
0-based option index. Returning a result that carries a new menu opens it.
"""

from __future__ import annotations

from typing import Callable, Dict

from boroughs.application.dtos import ActionResult
from boroughs.application.services import lifestyle_service, shop_service, social_service, wardrobe_service
from boroughs.application.session import GameSession
from boroughs.domain.models.menu import MenuKind, MenuSession


MenuResolver = Callable[[GameSession, MenuSession, int], ActionResult]


def _npc_from_ids(session: GameSession, menu: MenuSession, index: int):
    npc_ids = menu.payload.get("npc_ids") or []
    if index >= len(npc_ids):
        return None
    return session.find_npc(npc_ids[index])


def resolve_shop(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    return shop_service.purchase(session, menu.payload["items"][index])


def resolve_phone(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    npc = _npc_from_ids(session, menu, index)
    if npc is None:
        return ActionResult.blocked("The number rings out.")
    return social_service.call(session, npc)


def resolve_npc_pick(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    npc = _npc_from_ids(session, menu, index)
    if npc is None or not npc.is_at(*session.world.location):
        return ActionResult.blocked("They have already left.")
    return social_service.open_action_menu(session, npc)


def resolve_npc_action(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    npc = session.find_npc(str(menu.payload.get("npc_id", "")))
    if npc is None:
        return ActionResult.blocked("They have already left.")
    return social_service.interact(session, npc, menu.payload["actions"][index])


def resolve_social_target(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    npc = _npc_from_ids(session, menu, index)
    if npc is None:
        return ActionResult.blocked("They have already left.")
    return social_service.interact(session, npc, str(menu.payload.get("interaction", "talk")))


def resolve_wardrobe(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    action, target = menu.payload["entries"][index]
    if action == "wear":
        return wardrobe_service.wear(session, target)
    return wardrobe_service.take_off(session, target)


def resolve_eat(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    return lifestyle_service.eat(session, menu.payload["items"][index])


def resolve_hair(session: GameSession, menu: MenuSession, index: int) -> ActionResult:
    return lifestyle_service.style_hair(session, menu.payload["styles"][index])


MENU_RESOLVERS: Dict[MenuKind, MenuResolver] = {
    MenuKind.SHOP: resolve_shop,
    MenuKind.PHONE: resolve_phone,
    MenuKind.NPC_PICK: resolve_npc_pick,
    MenuKind.NPC_ACTION: resolve_npc_action,
    MenuKind.SOCIAL_TARGET: resolve_social_target,
    MenuKind.WARDROBE: resolve_wardrobe,
    MenuKind.EAT: resolve_eat,
    MenuKind.HAIR: resolve_hair,
}
