from __future__ import annotations

import logging
from typing import List

from boroughs.application.dtos import ActionResult
from boroughs.application.services.balance_tables import (
    NAKED_SOCIAL_PENALTY,
    PHONE_CALL_CHANGE,
    PHONE_CALL_RELATIONSHIP,
    SMALLTALK_CHANGE,
    SOCIAL_BASE_CHANCE,
    SOCIAL_FAILURE_MORALE,
    SOCIAL_FAILURE_RELATIONSHIP,
    SOCIAL_FAILURE_RELATIONSHIP_NAKED,
    SOCIAL_SUCCESS_MORALE,
    SOCIAL_SUCCESS_RELATIONSHIP,
)
from boroughs.application.session import GameSession
from boroughs.domain.events import ContactAdded, RelationshipChanged
from boroughs.domain.models.character import Character
from boroughs.domain.models.menu import MenuKind, MenuSession
from boroughs.domain.models.npc import NPC


logger = logging.getLogger(__name__)

INTERACTIONS = ("talk", "flirt", "befriend")

_FALLBACK_LINES = {
    "smalltalk": ["Weather's been strange lately, huh?"],
    "talk_success": ["Good to see a familiar face around here."],
    "talk_failure": ["Sorry, I'm busy."],
    "flirt_success": ["Oh? Keep talking."],
    "flirt_failure": ["Not today, sweetheart."],
    "befriend_success": ["Sure, let's keep in touch."],
    "befriend_failure": ["I don't really know you."],
    "phone": ["Hey, it's been a while!"],
}


def _line(session: GameSession, key: str) -> str:
    pool = session.catalogs.phrase_pool(key) or _FALLBACK_LINES.get(key, ["..."])
    return session.rng.pick(pool)


def _npc_label(npc: NPC) -> str:
    return f"{npc.name} ({npc.role})" if npc.role else npc.name


def interaction_chance(character: Character, interaction: str) -> int:
    chance = character.stat_check("charisma", SOCIAL_BASE_CHANCE[interaction])
    if character.is_naked():
        chance -= NAKED_SOCIAL_PENALTY[interaction]
    return max(0, chance)


def smalltalk(session: GameSession) -> ActionResult:
    session.character.apply_change(SMALLTALK_CHANGE)
    here = session.npcs_here()
    speaker = session.rng.pick(here).name if here else "A passer-by"
    return ActionResult.done(
        "You trade a few words with whoever is around.",
        dialogue=f"{speaker}: {_line(session, 'smalltalk')}",
    )


def open_npc_list(session: GameSession) -> ActionResult:
    here = session.npcs_here()
    if not here:
        return ActionResult.blocked("Nobody you know is around.")
    options = [_npc_label(npc) for npc in here]
    menu = MenuSession(MenuKind.NPC_PICK, options, {"npc_ids": [npc.id for npc in here]})
    return ActionResult.done("You look over the faces nearby.", options=options, menu=menu)


def open_action_menu(session: GameSession, npc: NPC) -> ActionResult:
    options = [interaction.capitalize() for interaction in INTERACTIONS]
    menu = MenuSession(MenuKind.NPC_ACTION, options, {"npc_id": npc.id, "actions": list(INTERACTIONS)})
    return ActionResult.done(f"{npc.name} notices you walking over.", options=options, menu=menu)


def open_target_menu(session: GameSession, interaction: str) -> ActionResult:
    here = session.npcs_here()
    if not here:
        return ActionResult.blocked(f"There is nobody here to {interaction}.")
    options = [_npc_label(npc) for npc in here]
    menu = MenuSession(
        MenuKind.SOCIAL_TARGET,
        options,
        {"interaction": interaction, "npc_ids": [npc.id for npc in here]},
    )
    return ActionResult.done(f"Who do you want to {interaction}?", options=options, menu=menu)


def interact(session: GameSession, npc: NPC, interaction: str) -> ActionResult:
    """Roll a charisma check against ``npc`` and settle the relationship."""

    if interaction not in SOCIAL_BASE_CHANCE:
        return ActionResult.blocked(f"You don't know how to {interaction}.")
    if not npc.is_at(*session.world.location):
        return ActionResult.blocked(f"{npc.name} is no longer here.")

    character = session.character
    naked = character.is_naked()
    chance = interaction_chance(character, interaction)
    success = session.rng.roll(chance)

    if success:
        delta = SOCIAL_SUCCESS_RELATIONSHIP
        character.apply_change({"morale": SOCIAL_SUCCESS_MORALE})
    else:
        delta = SOCIAL_FAILURE_RELATIONSHIP_NAKED if naked else SOCIAL_FAILURE_RELATIONSHIP
        character.apply_change({"morale": SOCIAL_FAILURE_MORALE})
    after = npc.adjust_relationship(delta)
    logger.debug("%s with %s at %s%%: %s", interaction, npc.id, chance, "success" if success else "failure")

    session.publish(
        RelationshipChanged(
            npc_id=npc.id,
            npc_name=npc.name,
            interaction=interaction,
            delta=delta,
            relationship_after=after,
            success=success,
        )
    )
    notes: List[str] = [f"Relationship with {npc.name}: {after:+d} ({delta:+d})."]
    if success and character.add_contact(npc.id):
        session.publish(ContactAdded(npc_id=npc.id, npc_name=npc.name))
        notes.append(f"{npc.name} is now in your phone.")
    if naked and not success:
        notes.append("Showing up undressed did not help.")

    outcome = "success" if success else "failure"
    return ActionResult.done(
        f"You {interaction} with {npc.name}.",
        dialogue=f"{npc.name}: {_line(session, f'{interaction}_{outcome}')}",
        system=" ".join(notes),
    )


def open_phone(session: GameSession) -> ActionResult:
    contacts = [npc for npc in (session.find_npc(npc_id) for npc_id in session.character.contacts) if npc]
    if not contacts:
        return ActionResult.blocked("Your contact list is empty.")
    options = [_npc_label(npc) for npc in contacts]
    menu = MenuSession(MenuKind.PHONE, options, {"npc_ids": [npc.id for npc in contacts]})
    return ActionResult.done("You scroll through your contacts.", options=options, menu=menu)


def call(session: GameSession, npc: NPC) -> ActionResult:
    after = npc.adjust_relationship(PHONE_CALL_RELATIONSHIP)
    session.character.apply_change(PHONE_CALL_CHANGE)
    session.publish(
        RelationshipChanged(
            npc_id=npc.id,
            npc_name=npc.name,
            interaction="call",
            delta=PHONE_CALL_RELATIONSHIP,
            relationship_after=after,
            success=True,
        )
    )
    return ActionResult.done(
        f"You call {npc.name} and chat for a while.",
        dialogue=f"{npc.name}: {_line(session, 'phone')}",
        system=f"Relationship with {npc.name}: {after:+d}.",
    )
