from __future__ import annotations


HUNGER_DECAY_PER_TURN = 4
STARVING_THRESHOLD = 20
STARVING_PENALTY = 2
EXHAUSTED_THRESHOLD = 20
EXHAUSTED_PENALTY = 2
NAKED_MORALE_PENALTY = 3

NPC_MOVE_CHANCE = 40

# one event twice as often as two
EVENT_COUNT_WEIGHTS = (1, 1, 2)

SOCIAL_BASE_CHANCE = {
    "talk": 50,
    "flirt": 45,
    "befriend": 55,
}
NAKED_SOCIAL_PENALTY = {
    "talk": 20,
    "flirt": 25,
    "befriend": 20,
}
SOCIAL_SUCCESS_RELATIONSHIP = 5
SOCIAL_SUCCESS_MORALE = 2
SOCIAL_FAILURE_RELATIONSHIP = -2
SOCIAL_FAILURE_RELATIONSHIP_NAKED = -6
SOCIAL_FAILURE_MORALE = -1

SMALLTALK_CHANGE = {"leisure": 4, "popularity": 1}
PHONE_CALL_RELATIONSHIP = 1
PHONE_CALL_CHANGE = {"leisure": 3}

TRAINING_PLACES = ("gym", "park")
TRAINING_MIN_ENERGY = 10
TRAINING_CHANGE = {"stats": {"strength": 1}, "health": {"hp": -1}, "energy": -6, "morale": 3}

COURIER_JOB = "courier"
COURIER_OFFICE = ("downtown", "courier office")
DELIVERY_TASK_CHOICES = (2, 3, 4)
DELIVERY_BASE_CHANCE = 60
DELIVERY_PAY_ON_TIME = 35
DELIVERY_PAY_LATE = 15
DELIVERY_SHIFT_BONUS = 20
PICKUP_CHANGE = {"energy": -2}
DELIVERY_ON_TIME_CHANGE = {"energy": -5, "morale": 2, "skills": {"streetwise": 1}}
DELIVERY_LATE_CHANGE = {"energy": -7, "morale": -2}

SHOP_CATEGORIES_BY_PLACE = {
    "mall": ("clothing", "gadget", "food"),
    "boutique": ("clothing",),
    "market": ("food", "ingredient"),
    "cafe": ("food",),
}
SHOP_VARIANT_TYPES = {
    "shop_clothes": ("clothing",),
    "shop_food": ("food", "ingredient"),
    "shop_gadgets": ("gadget",),
}

HOME_PLACES = ("apartment",)
COOK_BASE_CHANCE = 50
COOK_SKILL_BONUS = 5
COOK_SUCCESS_MULTIPLIER = 2
COOK_SUCCESS_CHANGE = {"morale": 2, "skills": {"cooking": 1}}
COOK_FAILURE_CHANGE = {"morale": -1}

SALON_PLACES = ("salon",)
HAIR_STYLES = (
    ("Quick trim", 20, {"morale": 2, "popularity": 1}),
    ("Salon styling", 40, {"morale": 4, "popularity": 3}),
    ("Bold color", 60, {"morale": 6, "popularity": 6}),
)

JOURNAL_MAX_ENTRIES = 200
