"""Authored content for the sandbox: abilities, cards, and relics."""
from turnstile import Card, TurnRestriction
from turnstile_combat import RelicInstance
from turnstile_trigger import compile_ability

# Records as they would appear in a content file, including legacy spellings.
ABILITY_RECORDS = [
    {
        "id": "execute",
        "name": "Execute",
        "effects": [{"type": "damage", "amount": 6}],
        "triggers": [{"type": "belowHpPct", "target": "enemy", "value": 30, "operator": "lte"}],
    },
    {
        "id": "rally",
        "name": "Rally",
        "effects": [{"type": "power", "amount": 1}],
        "triggers": [{"type": "party_combo", "value": 3}],
    },
    {
        "id": "second_wind",
        "name": "Second Wind",
        "effects": [{"type": "heal", "amount": 4, "deadRunOnly": True}],
        "triggers": [],
    },
    {
        "id": "recall",
        "name": "Recall",
        "effects": [{"type": "draw"}],
        "triggers": [{"type": "not_discarded", "value": 4, "countdownType": "seconds"}],
    },
    {
        "id": "ambush",
        "name": "Ambush",
        "effects": [{"type": "damage", "amount": 3}],
        "triggers": [{"type": "inactive_for", "target": "enemy", "value": 3}],
    },
]

ABILITIES = [compile_ability(record) for record in ABILITY_RECORDS]

PLAYER_HAND = [
    Card("slash", cost=1, turn_restriction=TurnRestriction.PLAYER, source_actor_id="felis"),
    Card("maul", cost=3, turn_restriction=TurnRestriction.PLAYER, source_actor_id="ursus"),
    Card("execute", cost=2, source_actor_id="felis", ability_id="execute"),
    Card("parry", tags=frozenset({"interrupt"}), source_actor_id="ursus"),
    Card("recall", cost=1, source_actor_id="felis", ability_id="recall"),
    Card("ambush", cost=1, turn_restriction=TurnRestriction.ANYTIME,
         source_actor_id="felis", ability_id="ambush"),
]

ENEMY_HAND = [
    Card("bite", cost=1, turn_restriction=TurnRestriction.ENEMY, source_actor_id="wolf"),
    Card("peck", cost=1, turn_restriction=TurnRestriction.ENEMY, source_actor_id="crow"),
]

CARD_DAMAGE = {"slash": 4, "maul": 9, "execute": 12, "parry": 0, "recall": 2, "ambush": 5,
               "bite": 5, "peck": 3}

RELICS = [
    RelicInstance("r-final", "dart", "final_move_v1", enabled=False),
    RelicInstance("r-zen", "lotus", "zen_v1", enabled=False),
    RelicInstance("r-drag", "hourglass", "pause_on_drag", enabled=False),
]
