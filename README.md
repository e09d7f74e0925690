# arenalegends

The rules engine of a two-player, real-time card battle game. Blue and red
each hold a main tower and two side towers on a 32 × 18 block arena that a
river splits in two. Elixir pays for troops and spells. Troops walk a fixed
flow field toward the enemy and attack what they find in range. They also
push each other apart when they overlap.

The package needs nothing beyond the standard library.

## Installation

```
pip install .
```

To install the test tools too:

```
pip install ".[test]"
```

## Modules

### `arenalegends.geometry`

- `Point` is a small 2D vector. It supports `+`, `-`, scaling by a number and `magnitude()`.
- `px_to_block`, `block_to_px` and `block_to_middle_px` convert between pixels and map blocks. A block is 50 px wide, and the map has a two-block border.
- `find_angle(center, point)` gives the heading from one point to another in radians, with the y axis pointing up.
- `which_side(pos)` returns a `Side`, which is `BLUE`, `BRIDGE` or `RED`.
- `time_string(sec)` formats the clock as `"M : SS"`.
- `float_to_str(num)` formats a number with one decimal place.

### `arenalegends.arena`

- The tile map is held in `MAP_TILES`. Use `tile_at(x, y)` to get the `Tile` of a block.
- The walking flow field is held in `DIRECTION_MAP`. Use `direction_at(x, y, mirror)` to get the `Direction` of a block. Each `Direction` has a `vector` and an `angle`.
- `is_in_play(block)` tells whether a block lies on the field.
- `is_valid_deploy(block)` tells whether blue may place a troop there. The block must be on the blue half and must not be a tower tile.
- Both functions raise `ValueError` for blocks outside the arena.

### `arenalegends.cards`

- `card_cost(card_id)` gives the elixir cost of each of the 12 cards. It raises `ValueError` for an unknown id.
- `single_mode_response(card_id)` gives the card the computer opponent plays in reply, or `None`.
- `deployment_for(card_id)` returns the card's `UnitSpec` or `SpellSpec`, or `None` for an unknown id.

### `arenalegends.units`

`Army` is a troop. Its `update` does the following:

- moves it along the flow field, or straight at its target;
- finds the nearest enemy with `search_target`;
- attacks, either in melee or by launching a `Bullet`;
- resolves collisions with `check_collision`.

Other `Army` methods:

- `damaged(pt, is_range)` applies damage. A ranged hit instead damages every unit and tower of the struck faction near the point of impact.
- `healed(pt)` restores hit points, up to the maximum.

The towers:

- `Tower` is an `Army` that never moves. When `enabled` is false it does nothing, and it wakes the first time it is damaged.
- `MainTower` starts asleep.
- `SideTower` wakes its faction's main tower when it falls.

### `arenalegends.projectiles`

`Bullet` homes on its target. When it comes within 25 px it damages the target and asks the battle to remove it.

### `arenalegends.spells`

`Spell` is an area effect, such as Zap, Poison or Heal, that pulses once per interval.

- Zap stuns what it hits.
- Poison slows what it hits.
- Heal restores its own faction's troops.
- Damaging spells also hit enemy towers.
- `expired` becomes true once the duration has run out.

### `arenalegends.battle`

`Battle` holds the state of one match:

- the towers, and the troops and spells on the field;
- the release queues, the elixir of both sides and the clock;
- the outcome.

Each call to `update(delta_time)` advances one frame. It does the following:

- updates every object;
- releases queued units and spells;
- refills elixir, which regenerates twice as fast in the last minute;
- removes the dead;
- decides the match on tower hit points when time runs out.

Where the match stands:

- `outcome` becomes an `Outcome` once the match is decided.
- `finished` becomes true when the ending sequence is over.
- `time_text` holds the clock string.

In offline mode a computer opponent plays red. It is fed through `queue_single_mode_response(card_id, block)`.

### `arenalegends.network`

`NetworkClient` connects over TCP. The default address is `localhost:11113`. The client reads in a background thread and passes each message to `handle_data`:

- A message starting with `!` sets `pair_successfully`.
- A message starting with `?` closes the connection and is queued.
- Any other message is queued in `inbox`.

`write_pending()` sends the oldest message in `outbox`.

### `arenalegends.slider`

`Slider` is a value slider from 0 to 1, driven by `on_mouse_down`, `on_mouse_move` and `on_mouse_up`. `set_value` moves the knob and calls `on_value_changed`.

## Example

```python
from arenalegends.battle import Battle
from arenalegends.geometry import Point

battle = Battle()               # an offline match with a computer opponent

# Red answers a blue Knight placed on block (20, 8).
battle.queue_single_mode_response(0, Point(20, 8))

for _ in range(60 * 10):        # ten seconds at 60 frames per second
    battle.update(1 / 60)

print(battle.time_text, battle.elixir)
```

### Online play

For online play, link the client's queues to the battle's:

```python
from arenalegends.battle import Battle
from arenalegends.network import NetworkClient

battle = Battle(online_mode=True)
client = NetworkClient(inbox=battle.command_from_server, outbox=battle.command_to_server)
battle.network = client
client.connect()
```

After connecting:

- Moves to send go into `battle.command_to_server`.
- Opponent moves arrive as `"<card id> <x> <y> <time>"`.
- On each update the battle sends one pending move and deploys every received move with `deploy_according_id`.

## What the package does not do

- There is no drawing, sound playback, window or input loop. Image and music names are kept only as strings on the objects.
- There are no menus, no card-selection screen and no scoreboard.
- There is no match server. `NetworkClient` only connects to one.
- There is no command-line program.

## Running the tests

```
pytest
```