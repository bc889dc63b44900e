# tilebrawl

A two-player, split-screen arena game built on pygame. Both players share one
keyboard and one 100 × 100 tile arena. Paint tiles in your colour, launch homing
balloons at your rival, and watch out for the special tiles scattered across
the floor.

## Installing and playing

```
pip install .
tilebrawl
```

The window opens at the size of the desktop (1280 × 720 if that cannot be
found), split down the middle: player 1 on the left, player 2 on the right.
Press Escape or close the window to quit.

### Assets

`tilebrawl` looks for its images and font in `../Assets` relative to the
current directory. Point it elsewhere with `--assets`:

```
tilebrawl --assets path/to/Assets
```

The directory is expected to hold `sprite_tile2.jpg` (floor texture),
`hero.png` and `base_character.png` (sprite sheets of 128 × 128 frames for
players 1 and 2) and `Font.ttf`. If the images cannot be loaded the error is
printed and the game draws plain coloured tiles and circles instead; if the
font cannot be loaded pygame's default font is used.

## Controls

| Action           | Player 1 | Player 2      |
|------------------|----------|---------------|
| Move             | W A S D  | Arrow keys    |
| Launch balloon   | E        | Right Shift   |
| Paint tiles      | Space    | Right Control |
| Zoom in          | Z        | O             |
| Zoom out         | X        | P             |

Both players share one one-second balloon cooldown. Painting claims the tiles
within a radius around the player and has a three-second cooldown for each
player. Zoom goes down to half the default view and back up to the default.

Balloons shoot off in the direction the player is moving or facing, then home
in on the rival. A hit costs 10 health; a balloon that has not hit anything
disappears after 12 seconds.

## Winning

- Own more than half of all tiles in the arena, or
- be the last player standing.

If both players are eliminated at the same time the game ends in a draw. The
result ("Player 1 Wins!", "Player 2 Wins!" or "Draw - Both Eliminated") is
printed and the window closes.

## Tiles

- **Sticky** (yellow): slows you to 40 % speed while you stand on it.
- **Damage** (red): costs 1 health on entry and 1 more every second you stay.
- **Healing** (green): restores 2 health when you step onto one you own.
- **Teleporter** (magenta): sends you to the centre of a random tile.
- **Super** (purple): slows you to 20 % speed, costs 5 health on entry and 1
  more every second you stay.

An unpainted tile shows its special colour. A painted tile shows its owner's
colour to the opponent; the owner still sees the tile's special colour.

## Using the pieces

The game logic lives in importable modules, so it can be driven without a
window:

- `tilebrawl.tiles` – `Tile`, `StickyTile`, `DamageTile`, `HealingTile`,
  `TeleporterTile`, `SuperTile`, `TileSpecialType` and `Clock` (elapsed-time
  measurement with an injectable time source).
- `tilebrawl.arena` – `Arena` (a randomly filled grid, with `grid_size`,
  `world_size` and `player_tile_counts()`), `TileOdds` and `choose_tile_type`.
- `tilebrawl.player` – `Player`, `PlayerPool`, `Controls`, `AnimationDirection`.
- `tilebrawl.balloon` – `AttackBalloon`.
- `tilebrawl.rules` – `process_tile_interaction`, `check_win_condition`,
  `balloon_hits_target`, `resolve_balloons`, `spawn_balloon` and `Outcome`.
- `tilebrawl.resources` – `ResourceManager`, `ResourceError`,
  `texture_manager()` and `font_manager()`.
- `tilebrawl.hud` – `compute_layout`, `HudLayout` and `Hud`.
- `tilebrawl.app` – `GameEngine` (`handle_key`, `step`, `run`), `SplitView`
  and `main`.

For example, `GameEngine(arena, player1, player2).step(dt)` advances a match by
`dt` seconds and returns an `Outcome`.

## What it does not do

There is no computer opponent and no network play: both players sit at the
same keyboard. There are no menus, no restart and no saved scores; one match is
played per launch.

## Running the tests

```
pip install .[test]
pytest
```