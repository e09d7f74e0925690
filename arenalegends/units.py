"""Units and towers: movement, targeting, combat and damage."""

from __future__ import annotations

import math
from collections.abc import Iterable
from enum import IntEnum
from typing import Protocol

from arenalegends.arena import direction_at, is_in_play
from arenalegends.geometry import (
    BLOCK_SIZE,
    Point,
    block_to_middle_px,
    block_to_px,
    find_angle,
    px_to_block,
    which_side,
)
from arenalegends.projectiles import Bullet

TOWER_DETECT_RADIUS_REVISION = 20
COLLISION_ADJUSTMENT_LENGTH = 200
COLLISION_ADJUSTMENT_ANGLE = 0.6
RANGED_BULLET_DETECT_RADIUS = 50

GIANT_ID = 4
HOG_RIDER_ID = 7
MAIN_TOWER_ID = -1
SIDE_TOWER_ID = -2

_ACTIVE_TIME_LIMIT = 181
_SEARCH_LIMIT = 10000
_SPAWN_COUNT_DOWN = 0.3
_SPEED_LEVELS = {1: 40, 2: 60, 3: 80, 4: 100, 5: 120}


class Faction(IntEnum):
    """Owner of a unit: the blue player or the red opponent."""

    BLUE = 0
    RED = 1

    @property
    def opponent(self) -> Faction:
        return Faction.RED if self is Faction.BLUE else Faction.BLUE


class Battlefield(Protocol):
    """What a unit needs from the battle it fights in."""

    game_time: float
    tick: float

    def armies(self, faction: Faction) -> Iterable[Army]: ...

    def towers(self, faction: Faction) -> Iterable[Tower]: ...

    def tower(self, faction: Faction, instance_id: int) -> Tower | None: ...

    def mark_dead(self, army: Army) -> None: ...

    def launch_bullet(self, bullet: Bullet) -> None: ...

    def delete_weapon(self, bullet: Bullet) -> None: ...

    def show_win_animation(self) -> None: ...

    def show_lose_animation(self) -> None: ...


class Army:
    """A unit on the field; towers are units that stay in place."""

    def __init__(
        self,
        world: Battlefield,
        card_id: int,
        instance_id: int,
        xb: float,
        yb: float,
        name: str,
        fire_bullet: bool,
        hp: float,
        atk: float,
        cool_down: float,
        speed: float,
        atk_radius: float,
        detect_radius: float,
        pic_radius_bk: float,
        faction: int = Faction.BLUE,
        is_tower: bool = False,
    ) -> None:
        self.world = world
        self.card_id = card_id
        self.instance_id = instance_id
        self.name = name
        self.fire_bullet = fire_bullet
        self.hp = float(hp)
        self.hp_max = float(hp)
        self.atk = atk
        self.cool_down = cool_down
        self.atk_radius = atk_radius * BLOCK_SIZE
        self.detect_radius = detect_radius * BLOCK_SIZE
        self.pic_radius_px = pic_radius_bk * BLOCK_SIZE
        self.faction = Faction(faction)
        self.is_tower = is_tower
        self.stunned = 0.0
        self.lower_speed = 0.0
        self.count_down = 0.0
        self.target: Army | None = None
        self.be_targeted: set[Army] = set()
        self.need_forced_move = False
        self.force_move_angle = 0.0
        self.previous_move_angle = 0.0
        self.head: str | None = None

        block = Point(xb, yb)
        if not is_tower:
            self.count_down = _SPAWN_COUNT_DOWN
            self.position = block_to_middle_px(block)
            self.head = f"card/{name}.png"
        elif card_id == MAIN_TOWER_ID:
            self.position = block_to_px(block)
        else:
            self.position = block_to_middle_px(block)

        self.speed_ori = float(_SPEED_LEVELS.get(int(speed), speed))
        self.speed = self.speed_ori
        self.side = which_side(self.position)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, id={self.instance_id}, faction={self.faction.name})"

    def _distance_to(self, other: Army) -> float:
        return (other.position - self.position).magnitude()

    def _fire(self, target: Army) -> None:
        if self.name == "Archers" or self.card_id == SIDE_TOWER_ID:
            image, speed, size, is_range = "bullet/arrow.png", 800, Point(30, 15), False
        elif self.name == "Musketeer" or self.card_id == MAIN_TOWER_ID:
            image, speed, size, is_range = "bullet/bullet.png", 1000, Point(20, 20), False
        elif self.name == "Wizard":
            image, speed, size, is_range = "bullet/fire.png", 600, Point(35, 35), True
        else:
            target.damaged(self.atk)
            return
        self.world.launch_bullet(
            Bullet(self.world, image, speed, self.atk, self.position, size, target, is_range)
        )

    def _in_attack_range(self, target: Army) -> bool:
        distance = self._distance_to(target)
        if target.is_tower:
            return distance <= self.atk_radius + target.pic_radius_px - TOWER_DETECT_RADIUS_REVISION
        return distance <= self.atk_radius

    def update(self, delta_time: float) -> None:
        """Advance the unit by one frame: move, target and attack."""
        if self.world.game_time > _ACTIVE_TIME_LIMIT:
            return

        if self.need_forced_move:
            self.position.x += math.cos(self.force_move_angle) * COLLISION_ADJUSTMENT_LENGTH * delta_time
            self.position.y -= math.sin(self.force_move_angle) * COLLISION_ADJUSTMENT_LENGTH * delta_time

        if self.stunned > 0:
            self.stunned -= delta_time
            self.count_down = self.cool_down
            return
        if self.stunned < 0:
            self.stunned = 0.0

        if self.lower_speed > 0:
            self.lower_speed -= delta_time
        elif self.lower_speed < 0:
            self.lower_speed = 0.0
        else:
            self.speed = self.speed_ori

        self.count_down = max(self.count_down - delta_time, 0.0)
        target = self.target
        if target is not None:
            if self._in_attack_range(target):
                if self.count_down <= 0:
                    self.count_down = self.cool_down
                    self._fire(target)
            else:
                if self.card_id != GIANT_ID:
                    target.be_targeted.discard(self)
                self.toward_where(delta_time)
        else:
            self.toward_where(delta_time)
        self.need_forced_move = False

    def healed(self, pt: float) -> None:
        """Restore hit points, never above the maximum."""
        self.hp = min(self.hp + pt, self.hp_max)

    def damaged(self, pt: float, is_range: bool = False) -> None:
        """Take damage; a ranged hit splashes everything of this side nearby."""
        if is_range:
            for unit in self.world.armies(self.faction):
                if self._distance_to(unit) - unit.pic_radius_px / 2 < RANGED_BULLET_DETECT_RADIUS:
                    unit.damaged(pt)
            for tower in self.world.towers(self.faction):
                if self._distance_to(tower) - tower.pic_radius_px < RANGED_BULLET_DETECT_RADIUS:
                    tower.damaged(pt)
        else:
            self.hp -= pt

        if self.hp < 1:
            if self.is_tower and self.card_id == MAIN_TOWER_ID:
                self.world.tick = 500
                if self.faction is Faction.RED:
                    self.world.show_win_animation()
                else:
                    self.world.show_lose_animation()
            if self.is_tower and self.card_id == SIDE_TOWER_ID:
                main_tower = self.world.tower(self.faction, 0)
                if main_tower is not None:
                    main_tower.enabled = True
            self.world.mark_dead(self)

    def toward_where(self, delta_time: float) -> None:
        """Pick a target and move towards it, or along the lane without one."""
        if not self.is_tower:
            self.count_down = max(self.count_down - delta_time, _SPAWN_COUNT_DOWN)
        self.target = self.search_target()
        if self.need_forced_move:
            return
        target = self.target
        if target is not None:
            if self.side == target.side or self.card_id == HOG_RIDER_ID:
                self.previous_move_angle = find_angle(self.position, target.position)
                self.position.x += math.cos(self.previous_move_angle) * self.speed * delta_time
                self.position.y -= math.sin(self.previous_move_angle) * self.speed * delta_time
            elif self.side < target.side:
                self.go(delta_time)
            else:
                self.go(delta_time, True)
        else:
            self.go(delta_time, self.faction is Faction.RED)

        if not self.is_tower:
            for faction in Faction:
                for unit in self.world.armies(faction):
                    self.check_collision(delta_time, unit)
            for faction in Faction:
                for tower in self.world.towers(faction):
                    self.check_collision(delta_time, tower)

        self.side = which_side(self.position)

    def go(self, delta_time: float, mirror: bool = False) -> None:
        """Walk one step along the lane map; mirror walks the red side's way."""
        block = px_to_block(self.position)
        if not is_in_play(block):
            return
        direction = direction_at(block.x, block.y, mirror)
        if direction.angle is None:
            return
        dx, dy = direction.vector
        if mirror:
            dx = -dx
        self.position.x += dx * self.speed * delta_time
        self.position.y += dy * self.speed * delta_time
        self.previous_move_angle = direction.angle

    def search_target(self) -> Army | None:
        """Nearest enemy within detection range, registering this unit as its attacker."""
        enemy = self.faction.opponent
        shortest = float(_SEARCH_LIMIT)
        found: Army | None = None
        if self.card_id not in (GIANT_ID, HOG_RIDER_ID):
            for unit in self.world.armies(enemy):
                distance = self._distance_to(unit)
                if distance < shortest:
                    shortest, found = distance, unit
        for tower in self.world.towers(enemy):
            distance = self._distance_to(tower) - tower.pic_radius_px - TOWER_DETECT_RADIUS_REVISION
            if distance < shortest:
                shortest, found = distance, tower
        if found is not None and (shortest < self.detect_radius or self.card_id == GIANT_ID):
            found.be_targeted.add(self)
            return found
        return None

    def set_force_move(self, angle: float) -> None:
        """Push the unit along the given angle on its next update."""
        self.need_forced_move = True
        self.force_move_angle = angle

    def check_collision(self, delta_time: float, entity: Army) -> None:
        """Step aside from an overlapping entity and push it the other way."""
        if entity is self:
            return
        entity_radius = entity.pic_radius_px if entity.is_tower else entity.pic_radius_px / 2
        overlap = (self.position - entity.position).magnitude() - self.pic_radius_px / 2 - entity_radius
        if overlap >= 0:
            return
        angle = find_angle(self.position, entity.position)
        difference = self.previous_move_angle - angle
        angle += -COLLISION_ADJUSTMENT_ANGLE if difference >= 0 else COLLISION_ADJUSTMENT_ANGLE
        self.position.x -= math.cos(angle) * COLLISION_ADJUSTMENT_LENGTH * delta_time
        self.position.y += math.sin(angle) * COLLISION_ADJUSTMENT_LENGTH * delta_time
        if not entity.is_tower:
            entity.set_force_move(angle)


class Tower(Army):
    """A stationary defence; a sleeping tower wakes when it is hit."""

    def __init__(
        self,
        world: Battlefield,
        card_id: int,
        instance_id: int,
        xb: float,
        yb: float,
        hp: float,
        atk: float,
        cool_down: float,
        atk_radius: float,
        pic_radius_bk: float,
        faction: int,
        enabled: bool = True,
    ) -> None:
        super().__init__(
            world, card_id, instance_id, xb, yb, "Tower", True, hp, atk, cool_down, 0,
            atk_radius, atk_radius, pic_radius_bk, faction, True,
        )
        self.enabled = enabled
        self.tower_image: str | None = None
        self.sleep_tower_image: str | None = None

    def update(self, delta_time: float) -> None:
        if not self.enabled:
            return
        super().update(delta_time)

    def damaged(self, pt: float, is_range: bool = False) -> None:
        self.enabled = True
        super().damaged(pt, is_range)


class MainTower(Tower):
    """The king tower; it sleeps until hit or until a side tower falls."""

    MAX_HP = 4824
    ATK = 109
    COOL_DOWN = 1.0

    def __init__(self, world: Battlefield, card_id: int, instance_id: int, xb: float, yb: float, faction: int) -> None:
        super().__init__(
            world, card_id, instance_id, xb, yb, self.MAX_HP, self.ATK, self.COOL_DOWN, 9, 2, faction, False
        )
        colour = "Red" if self.faction is Faction.RED else "Blue"
        self.tower_image = f"tower/{colour}MainTower.png"
        self.sleep_tower_image = f"tower/{colour}SleepMainTower.png"


class SideTower(Tower):
    """A princess tower guarding one lane."""

    MAX_HP = 3052
    ATK = 109
    COOL_DOWN = 0.8

    def __init__(self, world: Battlefield, card_id: int, instance_id: int, xb: float, yb: float, faction: int) -> None:
        super().__init__(
            world, card_id, instance_id, xb, yb, self.MAX_HP, self.ATK, self.COOL_DOWN, 7.5, 1.5, faction
        )
        colour = "Red" if self.faction is Faction.RED else "Blue"
        self.tower_image = f"tower/{colour}SideTower.png"