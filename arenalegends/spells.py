"""Area spells: damage, stun, slow and heal within a radius."""

from __future__ import annotations

from typing import TYPE_CHECKING

from arenalegends.geometry import BLOCK_SIZE, Point, block_to_middle_px
from arenalegends.units import TOWER_DETECT_RADIUS_REVISION, Faction

if TYPE_CHECKING:
    from arenalegends.units import Army, Battlefield

ZAP_ID = 9
POISON_ID = 10
HEAL_NAME = "Heal"

STUN_SECONDS = 1.0
POISON_SLOW_FACTOR = 0.4
POISON_SLOW_SECONDS = 1.1
READY_FLASH_SECONDS = 0.15


class Spell:
    """An area effect that pulses once per interval until its duration runs out."""

    def __init__(
        self,
        world: Battlefield,
        card_id: int,
        instance_id: int,
        xb: float,
        yb: float,
        name: str,
        pt: int,
        radius: float,
        duration: float,
        interval: float,
        atk_tower: int,
        color: tuple[int, int, int],
        faction: int = Faction.BLUE,
    ) -> None:
        self.world = world
        self.card_id = card_id
        self.instance_id = instance_id
        self.name = name
        self.pt = pt
        self.radius = radius * BLOCK_SIZE
        self.duration = duration
        self.time = duration
        self.interval = interval
        self.span = 0.0
        self.atk_tower = atk_tower
        self.color = color
        self.faction = Faction(faction)
        self.ready = True
        self.ready_flash = READY_FLASH_SECONDS
        self.position = block_to_middle_px(Point(xb, yb))

    def __repr__(self) -> str:
        return f"Spell({self.name!r}, id={self.instance_id}, faction={self.faction.name})"

    @property
    def expired(self) -> bool:
        """Whether the spell's duration has run out."""
        return self.time < 0

    def _distance_to(self, unit: Army) -> float:
        return (self.position - unit.position).magnitude()

    def _pulse(self) -> None:
        if self.name == HEAL_NAME:
            for unit in list(self.world.armies(self.faction)):
                if self._distance_to(unit) < self.radius:
                    unit.healed(self.pt)
            return

        enemy = self.faction.opponent
        for unit in list(self.world.armies(enemy)):
            if self._distance_to(unit) < self.radius:
                unit.damaged(self.pt)
                if self.card_id == ZAP_ID:
                    unit.stunned = STUN_SECONDS
                if self.card_id == POISON_ID:
                    unit.speed = unit.speed_ori * POISON_SLOW_FACTOR
                    unit.lower_speed = POISON_SLOW_SECONDS
        for tower in list(self.world.towers(enemy)):
            reach = self.radius + tower.pic_radius_px - TOWER_DETECT_RADIUS_REVISION
            if self._distance_to(tower) < reach:
                tower.damaged(self.atk_tower)
                if self.card_id == ZAP_ID:
                    tower.stunned = STUN_SECONDS

    def update(self, delta_time: float) -> None:
        """Advance the timers and apply the effect when a pulse is due."""
        self.time -= delta_time
        self.span += delta_time
        self.ready_flash -= delta_time
        if self.ready:
            self._pulse()
            self.ready = False
        if self.span > self.interval:
            self.ready = True
            self.ready_flash = READY_FLASH_SECONDS
            self.span = 0.0