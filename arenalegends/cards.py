"""Card catalogue: costs, opponent responses and what each card deploys."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UnitSpec:
    """Stats of the units a troop card deploys."""

    name: str
    fire_bullet: bool
    hp: int
    atk: int
    cool_down: float
    speed: float
    atk_radius: float
    detect_radius: float
    pic_radius: float
    count: int = 1


@dataclass(frozen=True)
class SpellSpec:
    """Stats of the area effect a spell card deploys."""

    name: str
    pt: int
    radius: float
    duration: float
    interval: float
    atk_tower: int
    color: tuple[int, int, int]


_COSTS: dict[int, int] = {
    0: 3,
    1: 3,
    2: 4,
    3: 3,
    4: 5,
    5: 7,
    6: 5,
    7: 4,
    8: 6,
    9: 2,
    10: 4,
    11: 1,
}

_SINGLE_MODE_RESPONSES: dict[int, int] = {
    0: 5,
    1: 6,
    2: 8,
    3: 9,
    4: 1,
    5: 3,
    6: 2,
    7: 0,
    8: 7,
}

UNIT_SPECS: dict[int, UnitSpec] = {
    0: UnitSpec("Knight", True, 1766, 202, 1.2, 3, 1.2, 5, 0.7),
    1: UnitSpec("Archers", True, 304, 107, 0.9, 3, 5, 5, 0.6, count=2),
    2: UnitSpec("Musketeer", True, 720, 218, 1, 3, 6, 5, 0.7),
    3: UnitSpec("Skeletons", True, 81, 81, 1, 4, 1.2, 5, 0.5, count=15),
    4: UnitSpec("Giant", True, 4091, 254, 1.5, 2, 1.2, 50, 0.8),
    5: UnitSpec("P.E.K.K.A.", True, 3760, 816, 1.8, 2, 1.2, 5, 0.9),
    6: UnitSpec("Wizard", True, 720, 281, 1.4, 3, 5.5, 5, 0.7),
    7: UnitSpec("Hog Rider", True, 1696, 318, 1.6, 5, 1.2, 50, 0.7),
    8: UnitSpec("Barbarians", True, 1341, 384, 1.4, 4, 1.2, 5, 0.7, count=2),
}

SPELL_SPECS: dict[int, SpellSpec] = {
    9: SpellSpec("Zap", 192, 2.5, 0.5, 1, 58, (0, 140, 255)),
    10: SpellSpec("Poison", 78, 4, 8, 1, 23, (150, 50, 30)),
    11: SpellSpec("Heal", 75, 3.5, 2, 1, 0, (255, 220, 0)),
}


def card_cost(card_id: int) -> int:
    """Elixir cost of a card; raises ValueError for an unknown card."""
    try:
        return _COSTS[card_id]
    except KeyError:
        raise ValueError(f"unknown card id {card_id}") from None


def single_mode_response(card_id: int) -> int | None:
    """Card the computer opponent answers with, or None when it does not answer."""
    return _SINGLE_MODE_RESPONSES.get(card_id)


def deployment_for(card_id: int) -> UnitSpec | SpellSpec | None:
    """What a card puts on the field, or None for an unknown card."""
    if card_id in UNIT_SPECS:
        return UNIT_SPECS[card_id]
    return SPELL_SPECS.get(card_id)