"""The battle: towers, deployments, elixir, clock and the end of the match."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from enum import Enum
from typing import Protocol

from arenalegends.arena import MAP_BLOCK_WIDTH
from arenalegends.cards import SpellSpec, UnitSpec, card_cost, deployment_for, single_mode_response
from arenalegends.geometry import Point, time_string
from arenalegends.projectiles import Bullet
from arenalegends.spells import Spell
from arenalegends.units import Army, Faction, MainTower, SideTower, Tower

logger = logging.getLogger(__name__)

START_GAME_TIME = 184.0
BATTLE_START_TIME = 181
TIME_UP_TICK = 500.0
TIME_UP_GAME_TIME = 10.0
ENDING_START_TICK = 500.5
ENDING_FADE_END_TICK = 501.6
ENDING_FRAME_RATE = 30
ENDING_GAME_TIME = 10000.0
END_SCENE_TICK = 508.0
MAX_ELIXIR = 10.0
RED_STARTING_ELIXIR = 3.0
DEFAULT_STARTING_ELIXIR = 7.0
NORMAL_ELIXIR_SPEED = 0.5
DOUBLE_ELIXIR_SPEED = 1.0
DOUBLE_ELIXIR_WINDOW = (60.5, 61.0)
FIRST_INSTANCE_ID = 3
RED_DECK_SIZE = 8
RED_OVERFLOW_CARD = 0
RED_OVERFLOW_BLOCK = (26, 8)
OPPONENT_LEFT_PREFIX = "?"


class Outcome(Enum):
    """How a finished battle ended for the blue player."""

    VICTORY = "victory"
    DEFEAT = "defeat"


class Uplink(Protocol):
    """The connection to the match server."""

    def write_pending(self) -> None: ...

    def disconnect(self) -> None: ...


class Battle:
    """State and per-frame rules of one match between blue and red."""

    def __init__(
        self,
        network: Uplink | None = None,
        online_mode: bool = False,
        starting_elixir: float = DEFAULT_STARTING_ELIXIR,
        elixir_speed: float = NORMAL_ELIXIR_SPEED,
    ) -> None:
        self.network = network
        self.starting_elixir = starting_elixir
        self.normal_elixir_speed = elixir_speed
        self.command_from_server: deque[str] = deque()
        self.command_to_server: deque[str] = deque()
        self.initialize(online_mode)

    def initialize(self, online_mode: bool) -> None:
        """Reset everything for a new match."""
        self.online_mode = online_mode
        self.game_time = START_GAME_TIME
        self.tick = 0.0
        self.victory = False
        self.outcome: Outcome | None = None
        self.finished = False
        self.music: str | None = "bgm/playBGMw321.ogg"
        self.turtle_image = "loading/1.jpg"
        self.turtle_frame = 1
        self.overlay_alpha = 0
        self.time_visible = False
        self.time_text = ""
        self._shown_second = BATTLE_START_TIME
        self.double_elixir = False
        self.elixir_speed = self.normal_elixir_speed
        self.elixir = {Faction.BLUE: float(self.starting_elixir), Faction.RED: RED_STARTING_ELIXIR}
        self.instance_id_counter = FIRST_INSTANCE_ID

        self.tower_map: dict[Faction, dict[int, Tower]] = {}
        self.towers_to_remove: dict[Faction, set[int]] = {f: set() for f in Faction}
        self.army_map: dict[Faction, dict[int, Army]] = {f: {} for f in Faction}
        self.army_group: dict[Faction, list[Army]] = {f: [] for f in Faction}
        self.to_be_dead: dict[Faction, set[int]] = {f: set() for f in Faction}
        self.army_queue: dict[Faction, deque[tuple[float, Army]]] = {f: deque() for f in Faction}
        self.spell_group: dict[Faction, list[Spell]] = {f: [] for f in Faction}
        self.spell_queue: dict[Faction, deque[tuple[float, Spell]]] = {f: deque() for f in Faction}
        self.wait_for_deployed: deque[tuple[int, Point]] = deque()
        self.card_select: set[int] = set()
        self.weapons: list[Bullet] = []
        self.weapons_to_delete: set[Bullet] = set()
        self.command_from_server.clear()
        self.command_to_server.clear()

        self.tower_map[Faction.BLUE] = {
            0: MainTower(self, -1, 0, 29, 9, Faction.BLUE),
            1: SideTower(self, -2, 1, 25, 3, Faction.BLUE),
            2: SideTower(self, -2, 2, 25, 14, Faction.BLUE),
        }
        self.tower_map[Faction.RED] = {
            0: MainTower(self, -1, 0, 3, 9, Faction.RED),
            1: SideTower(self, -2, 1, 6, 3, Faction.RED),
            2: SideTower(self, -2, 2, 6, 14, Faction.RED),
        }

        if not online_mode:
            self._add_practice_opponents()

    def _add_practice_opponents(self) -> None:
        release = self.game_time - 0.5
        pekka = Army(self, 5, -16, 2, 2, "P.E.K.K.A.", False, 3760, 816, 1.8, 2, 1.2, 5, 0.9, Faction.RED)
        self.army_map[Faction.RED][-16] = pekka
        self.army_queue[Faction.RED].append((release, pekka))
        for instance_id in range(-15, 0):
            skeleton = Army(
                self, 3, instance_id, 2, 16, "Skeletons", False, 81, 81, 1, 4, 1.2, 5, 0.5, Faction.RED
            )
            self.army_map[Faction.RED][instance_id] = skeleton
            self.army_queue[Faction.RED].append((release, skeleton))

    # What units and bullets need from the battle.

    def armies(self, faction: Faction) -> list[Army]:
        """Units of a faction that are on the field."""
        return list(self.army_group[faction])

    def towers(self, faction: Faction) -> list[Tower]:
        """Towers of a faction still standing."""
        return list(self.tower_map[faction].values())

    def tower(self, faction: Faction, instance_id: int) -> Tower | None:
        """A standing tower by its instance id."""
        return self.tower_map[faction].get(instance_id)

    def mark_dead(self, army: Army) -> None:
        """Schedule a destroyed unit or tower for removal at the end of the frame."""
        if army.is_tower:
            self.towers_to_remove[army.faction].add(army.instance_id)
        else:
            self.to_be_dead[army.faction].add(army.instance_id)

    def launch_bullet(self, bullet: Bullet) -> None:
        """Put a projectile into flight."""
        self.weapons.append(bullet)

    def delete_weapon(self, bullet: Bullet) -> None:
        """Schedule a projectile for removal at the end of the frame."""
        self.weapons_to_delete.add(bullet)

    # Deployment.

    def deploy_according_id(self, card_id: int, xb: int, yb: int, t: float) -> list[Army | Spell]:
        """Queue a red card's units or spell for release at time t (whole seconds)."""
        release = float(int(t))
        spec = deployment_for(card_id)
        placed: list[Army | Spell] = []
        if isinstance(spec, UnitSpec):
            for _ in range(spec.count):
                army = Army(
                    self, card_id, self.instance_id_counter, xb, yb, spec.name, spec.fire_bullet,
                    spec.hp, spec.atk, spec.cool_down, spec.speed, spec.atk_radius,
                    spec.detect_radius, spec.pic_radius, Faction.RED,
                )
                self.army_map[Faction.RED][self.instance_id_counter] = army
                self.army_queue[Faction.RED].append((release, army))
                self.instance_id_counter += 1
                placed.append(army)
        elif isinstance(spec, SpellSpec):
            spell = Spell(
                self, card_id, self.instance_id_counter, xb, yb, spec.name, spec.pt, spec.radius,
                spec.duration, spec.interval, spec.atk_tower, spec.color, Faction.RED,
            )
            self.instance_id_counter += 1
            self.spell_queue[Faction.RED].append((release, spell))
            placed.append(spell)
        return placed

    def queue_single_mode_response(self, card_id: int, block: Point) -> None:
        """Let the computer opponent answer a blue unit placed on a block."""
        response = single_mode_response(card_id)
        if response is None:
            return
        if response not in self.card_select and len(self.card_select) >= RED_DECK_SIZE:
            return
        self.card_select.add(response)
        if response >= 9:
            self.deploy_according_id(response, int(block.x), int(block.y), self.game_time - 1)
        else:
            self.wait_for_deployed.append((response, Point(block.x, block.y)))

    def put_opponent_entity(self) -> None:
        """Deploy every card the server reported for the opponent."""
        tokens: list[str] = []
        while self.command_from_server:
            message = self.command_from_server.popleft()
            if message.startswith(OPPONENT_LEFT_PREFIX):
                logger.info("Opponent leaves the game")
                continue
            tokens.extend(message.split())
            if len(tokens) < 4:
                continue
            fields, tokens = tokens[:4], tokens[4:]
            try:
                card_id, xb, yb = (int(value) for value in fields[:3])
                t = float(fields[3])
            except ValueError:
                logger.warning("ignoring malformed command %r", message)
                continue
            self.deploy_according_id(card_id, xb, yb, t)

    # End of the match.

    def show_win_animation(self) -> None:
        """End the match in the blue player's favour."""
        if self.network is not None:
            self.network.disconnect()
        self.victory = True
        self.outcome = Outcome.VICTORY
        self.music = "turtle.ogg"

    def show_lose_animation(self) -> None:
        """End the match against the blue player."""
        if self.network is not None:
            self.network.disconnect()
        self.outcome = Outcome.DEFEAT
        self.turtle_image = "loading/die.jpg"
        self.music = "lose.ogg"

    # Frame update.

    def update(self, delta_time: float) -> None:
        """Advance the match by one frame."""
        self.game_time -= delta_time
        self.tick += delta_time
        self._animate_ending()
        if self.tick >= END_SCENE_TICK:
            self.finished = True
        if self.game_time >= BATTLE_START_TIME:
            return

        self._update_objects(delta_time)
        if self.game_time < 0:
            self._time_up()
        if self.online_mode:
            if self.network is not None:
                self.network.write_pending()
            self.put_opponent_entity()
        self._update_clock()
        self._deploy_waiting()
        self._release_queued()
        self._update_elixir(delta_time)
        self._expire_spells()
        self._remove_dead()

    def _animate_ending(self) -> None:
        if self.tick <= ENDING_START_TICK:
            return
        frame = int((self.tick - ENDING_START_TICK) * ENDING_FRAME_RATE + 1)
        if self.turtle_frame >= frame:
            return
        self.game_time = ENDING_GAME_TIME
        if self.victory:
            self.turtle_frame = frame
            self.turtle_image = f"loading/{frame}.jpg"
        if self.tick < ENDING_FADE_END_TICK:
            self.overlay_alpha = min(int((self.tick - ENDING_START_TICK) * 255), 255)

    def _update_objects(self, delta_time: float) -> None:
        for faction in Faction:
            for spell in list(self.spell_group[faction]):
                spell.update(delta_time)
        for faction in Faction:
            for tower in self.towers(faction):
                tower.update(delta_time)
        for faction in Faction:
            for army in self.armies(faction):
                army.update(delta_time)
        for bullet in list(self.weapons):
            bullet.update(delta_time)

    def _time_up(self) -> None:
        self.tick = TIME_UP_TICK
        self.game_time = TIME_UP_GAME_TIME
        blue_hp = sum(tower.hp for tower in self.towers(Faction.BLUE))
        red_hp = sum(tower.hp for tower in self.towers(Faction.RED))
        if blue_hp > red_hp:
            self.show_win_animation()
        else:
            self.show_lose_animation()

    def _update_clock(self) -> None:
        if 0 <= self.game_time < BATTLE_START_TIME:
            self.time_visible = True
            if self._shown_second > int(self.game_time):
                self._shown_second = int(self.game_time)
                self.time_text = time_string(self.game_time)
        elif self.time_visible:
            self.time_visible = False

    def _deploy_waiting(self) -> None:
        while self.wait_for_deployed:
            card_id, block = self.wait_for_deployed[0]
            cost = card_cost(card_id)
            if self.elixir[Faction.RED] < cost:
                break
            self.deploy_according_id(
                card_id, MAP_BLOCK_WIDTH - 1 - int(block.x), int(block.y), self.game_time - 1
            )
            self.elixir[Faction.RED] -= cost
            self.wait_for_deployed.popleft()

    def _release_queued(self) -> None:
        for faction in Faction:
            armies = self.army_queue[faction]
            if armies and armies[0][0] > self.game_time:
                self.army_group[faction].append(armies.popleft()[1])
            spells = self.spell_queue[faction]
            if spells and spells[0][0] > self.game_time:
                self.spell_group[faction].append(spells.popleft()[1])

    def _update_elixir(self, delta_time: float) -> None:
        low, high = DOUBLE_ELIXIR_WINDOW
        if low < self.game_time < high:
            self.double_elixir = True
            self.elixir_speed = DOUBLE_ELIXIR_SPEED
        gain = delta_time * self.elixir_speed
        self.elixir[Faction.BLUE] = min(self.elixir[Faction.BLUE] + gain, MAX_ELIXIR)
        self.elixir[Faction.RED] += gain
        if self.elixir[Faction.RED] > MAX_ELIXIR and not self.online_mode:
            self.wait_for_deployed.append((RED_OVERFLOW_CARD, Point(*RED_OVERFLOW_BLOCK)))

    def _expire_spells(self) -> None:
        for faction in Faction:
            self.spell_group[faction] = [s for s in self.spell_group[faction] if not s.expired]

    def _drop(self, victim: Army) -> None:
        for attacker in victim.be_targeted:
            attacker.target = None
        for bullet in self.weapons:
            if bullet.target is victim:
                self.weapons_to_delete.add(bullet)

    def _remove_dead(self) -> None:
        for faction in Faction:
            for instance_id in sorted(self.to_be_dead[faction]):
                army = self.army_map[faction].pop(instance_id, None)
                if army is None:
                    continue
                self._drop(army)
                self.army_group[faction] = [a for a in self.army_group[faction] if a is not army]
            self.to_be_dead[faction].clear()
        for faction in Faction:
            for instance_id in sorted(self.towers_to_remove[faction]):
                tower = self.tower_map[faction].pop(instance_id, None)
                if tower is not None:
                    self._drop(tower)
            self.towers_to_remove[faction].clear()
        if self.weapons_to_delete:
            self.weapons = [b for b in self.weapons if b not in self.weapons_to_delete]
        self.weapons_to_delete.clear()

    def _all_standing(self) -> Iterable[Army]:
        for faction in Faction:
            yield from self.towers(faction)
            yield from self.armies(faction)