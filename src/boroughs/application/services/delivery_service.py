from __future__ import annotations

import logging
from typing import List, Tuple

from boroughs.application.dtos import ActionResult
from boroughs.application.services.balance_tables import (
    COURIER_JOB,
    COURIER_OFFICE,
    DELIVERY_BASE_CHANCE,
    DELIVERY_LATE_CHANGE,
    DELIVERY_ON_TIME_CHANGE,
    DELIVERY_PAY_LATE,
    DELIVERY_PAY_ON_TIME,
    DELIVERY_SHIFT_BONUS,
    DELIVERY_TASK_CHOICES,
    PICKUP_CHANGE,
)
from boroughs.application.session import GameSession
from boroughs.domain.events import DeliveryMade, DeliveryShiftCompleted, DeliveryShiftStarted
from boroughs.domain.models.delivery import DeliveryQuest


logger = logging.getLogger(__name__)

Location = Tuple[str, str]


def _describe(location: Location) -> str:
    district, place = location
    return f"the {place} in {district}"


def _random_dropoff(session: GameSession, *, avoid: List[Location]) -> Location:
    spots = [
        (district, place)
        for district, places in session.world.districts.items()
        for place in places
        if (district, place) not in avoid
    ]
    if not spots:
        spots = [(district, place) for district, places in session.world.districts.items() for place in places]
    return session.rng.pick(spots)


def delivery_chance(session: GameSession) -> int:
    character = session.character
    agility = character.stat_check("agility", DELIVERY_BASE_CHANCE)
    intellect = character.stat_check("intellect", DELIVERY_BASE_CHANCE)
    return (agility + intellect) // 2


def start_shift(session: GameSession) -> ActionResult:
    character = session.character
    if character.job.strip().lower() != COURIER_JOB:
        job = character.job or "no job"
        return ActionResult.blocked(f"Nobody hands out shifts for {job}. Courier work needs the courier job.")
    if session.delivery is not None:
        return ActionResult.blocked(
            f"Your shift is still running: {session.delivery.remaining} drop(s) left."
        )
    if session.world.location != COURIER_OFFICE:
        return ActionResult.blocked(f"Shifts are handed out at {_describe(COURIER_OFFICE)}.")

    tasks = session.rng.pick(DELIVERY_TASK_CHOICES)
    dropoff = _random_dropoff(session, avoid=[COURIER_OFFICE])
    session.delivery = DeliveryQuest(total_tasks=tasks, pickup=COURIER_OFFICE, dropoff=dropoff)
    clock = session.world.time
    session.publish(DeliveryShiftStarted(total_tasks=tasks, day=clock.day, hour=clock.hour))
    logger.info("Courier shift started with %s drops", tasks)
    return ActionResult.done(
        "The dispatcher slides a route sheet across the counter.",
        dialogue=f"Dispatcher: {tasks} drops today. Don't make me call you twice.",
        system=f"Collect the parcels here, first drop goes to {_describe(dropoff)}.",
    )


def pickup(session: GameSession) -> ActionResult:
    quest = session.delivery
    if quest is None:
        return ActionResult.blocked("You have no active delivery shift.")
    if quest.picked_up:
        return ActionResult.blocked("The parcels are already in your bag.")
    if session.world.location != quest.pickup:
        return ActionResult.blocked(f"The parcels wait at {_describe(quest.pickup)}.")

    quest.picked_up = True
    session.character.apply_change(PICKUP_CHANGE)
    return ActionResult.done(
        "You sign for a stack of parcels and strap them down.",
        system=f"Next drop: {_describe(quest.dropoff)}.",
    )


def deliver(session: GameSession) -> ActionResult:
    quest = session.delivery
    if quest is None:
        return ActionResult.blocked("You have no active delivery shift.")
    if not quest.picked_up:
        return ActionResult.blocked(f"Pick up the parcels at {_describe(quest.pickup)} first.")
    if session.world.location != quest.dropoff:
        return ActionResult.blocked(f"This drop goes to {_describe(quest.dropoff)}.")

    character = session.character
    on_time = session.rng.roll(delivery_chance(session))
    pay = DELIVERY_PAY_ON_TIME if on_time else DELIVERY_PAY_LATE
    change = dict(DELIVERY_ON_TIME_CHANGE if on_time else DELIVERY_LATE_CHANGE)
    change["money"] = pay
    character.apply_change(change)
    quest.completed += 1

    clock = session.world.time
    session.publish(
        DeliveryMade(
            completed=quest.completed,
            total_tasks=quest.total_tasks,
            on_time=on_time,
            pay=pay,
            day=clock.day,
            hour=clock.hour,
        )
    )
    narrative = (
        "You hand over the parcel with time to spare."
        if on_time
        else "The client taps their watch while signing. Late, but delivered."
    )

    if quest.finished:
        character.apply_change({"money": DELIVERY_SHIFT_BONUS})
        session.delivery = None
        session.publish(DeliveryShiftCompleted(total_tasks=quest.total_tasks, day=clock.day, hour=clock.hour))
        logger.info("Courier shift completed after %s drops", quest.total_tasks)
        return ActionResult.done(
            narrative + " That was the last one; the route sheet goes in the bin.",
            system=f"Paid {pay}. Shift bonus {DELIVERY_SHIFT_BONUS}. Shift complete.",
        )

    quest.dropoff = _random_dropoff(session, avoid=[quest.dropoff, quest.pickup])
    return ActionResult.done(
        narrative,
        system=f"Paid {pay}. {quest.remaining} drop(s) left, next: {_describe(quest.dropoff)}.",
    )
