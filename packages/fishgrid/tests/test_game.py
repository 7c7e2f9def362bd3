"""Tests for the Game state machine: phases, transitions, and score."""
from __future__ import annotations

import random

import pytest
from fishgrid import (
    Direction,
    DuplicateRegistrationError,
    Game,
    GameConfig,
    Kind,
    WorldFullError,
    make_falling_rock,
    make_fish,
    make_heart,
    make_rock,
    make_snail,
)
from fishgrid.types import DIRECTIONS

QUIET = GameConfig(
    width=5,
    height=5,
    num_rocks=0,
    num_snails=0,
    fast_move_chance=0.0,
    slow_move_chance=0.0,
    wander_off_chance=0.0,
    heart_chance=0.0,
)


class FixedRandom:
    """Always rolls the same double and the same direction."""

    def __init__(self, value: float = 0.0, direction: Direction = Direction.LEFT) -> None:
        self.value = value
        self.index = DIRECTIONS.index(direction)

    def random(self) -> float:
        return self.value

    def randrange(self, stop: int) -> int:
        return self.index % stop


def _game(config: GameConfig = QUIET, rng=None) -> Game:
    return Game(config, rng=rng if rng is not None else random.Random(0), populate=False)


def _board(config: GameConfig = QUIET, home=(4, 4), player=(0, 0), rng=None) -> Game:
    game = _game(config, rng)
    game.place_home(*home)
    game.place_player(*player)
    return game


def _fish(color: int = 1):
    return make_fish(color, fast=False)


def _put(game: Game, entity, x: int, y: int):
    entity.set_position(x, y)
    game.world.register(entity)
    return entity


# --- Construction and setup ---

def test_populated_game_matches_opening_layout():
    game = Game(seed=42)
    kinds = [e.kind for e in game.world.entities()]

    assert kinds.count(Kind.HOME) == 1
    assert kinds.count(Kind.PLAYER) == 1
    assert kinds.count(Kind.ROCK) + kinds.count(Kind.FALLING_ROCK) == 10
    assert kinds.count(Kind.SNAIL) == 1
    assert kinds.count(Kind.FISH) == 10
    assert len(game.missing) == 10
    assert game.found == ()
    assert game.safe == ()
    assert game.score == 0
    assert game.tick_count == 0
    assert not game.game_over()
    assert game.missing_fish_left() == 10


def test_player_starts_at_home():
    game = Game(seed=7)
    assert game.player.position == game.home.position


def test_missing_fish_cover_every_non_player_color():
    game = Game(seed=3)
    assert sorted(f.color for f in game.missing) == list(range(1, 11))


def test_same_seed_same_board():
    a = Game(seed=99)
    b = Game(seed=99)
    assert [(v.kind, v.x, v.y) for v in a.world.view()] == [
        (v.kind, v.x, v.y) for v in b.world.view()
    ]


def test_seed_is_exposed():
    assert Game(seed=5).seed == 5
    assert Game().seed is not None


def test_injected_rng_is_used_by_world():
    rng = random.Random(1)
    game = Game(QUIET, rng=rng, populate=False)
    assert game.world.rng is rng
    assert game.seed is None


def test_board_too_small_raises_world_full():
    with pytest.raises(WorldFullError):
        Game(GameConfig(width=3, height=3), seed=1)


def test_second_home_rejected():
    game = _game()
    game.place_home(0, 0)
    with pytest.raises(ValueError):
        game.place_home(1, 1)


def test_player_without_home_needs_position():
    game = _game()
    with pytest.raises(ValueError):
        game.place_player()


def test_add_missing_rejects_non_fish():
    game = _board()
    with pytest.raises(AssertionError):
        game.add_missing(make_rock(), 2, 2)


def test_step_without_player_raises():
    game = _game()
    game.place_home(0, 0)
    with pytest.raises(RuntimeError):
        game.step()


def test_step_without_home_raises():
    game = _game()
    game.place_player(0, 0)
    with pytest.raises(RuntimeError):
        game.step()


def test_category_views_are_tuples():
    game = _board()
    game.add_missing(_fish(), 2, 2)
    assert isinstance(game.missing, tuple)
    assert isinstance(game.found, tuple)
    assert isinstance(game.safe, tuple)


# --- Player movement ---

def test_move_player_onto_free_tile():
    game = _board()
    assert game.move_player(Direction.RIGHT)
    assert game.player.position == (1, 0)


def test_move_player_off_board_is_rejected():
    game = _board()
    assert not game.move_player(Direction.UP)
    assert not game.move_player(Direction.LEFT)
    assert game.player.position == (0, 0)


def test_move_player_into_rock_is_rejected():
    game = _board()
    _put(game, make_rock(), 1, 0)
    assert not game.move_player(Direction.RIGHT)
    assert game.player.position == (0, 0)


def test_move_player_onto_missing_fish():
    game = _board()
    game.add_missing(_fish(), 1, 0)
    assert game.move_player(Direction.RIGHT)


# --- Phase 1: player interaction ---

def test_stepping_on_fish_finds_it():
    game = _board()
    fish = game.add_missing(_fish(), 1, 0)

    game.move_player(Direction.RIGHT)
    game.step()

    assert game.missing == ()
    assert game.found == (fish,)
    assert game.score == 0


def test_found_fish_follows_one_behind():
    game = _board()
    fish = game.add_missing(_fish(), 1, 0)

    game.move_player(Direction.RIGHT)
    game.step()
    assert fish.position == (0, 0)

    game.move_player(Direction.DOWN)
    game.step()
    assert fish.position == (1, 0)


def test_delivering_home_scores_once():
    game = _board(home=(0, 0))
    fish = game.add_missing(make_fish(2, fast=False), 1, 0)

    game.move_player(Direction.RIGHT)
    game.step()
    game.move_player(Direction.LEFT)
    game.step()

    assert game.score == 15
    assert game.safe == (fish,)
    assert game.found == ()
    assert fish not in game.world
    assert game.game_over()

    for _ in range(3):
        game.step()
    assert game.score == 15
    assert game.safe == (fish,)


def test_home_with_no_followers_changes_nothing():
    game = _board(home=(0, 0))
    game.add_missing(_fish(), 3, 3)
    game.step()
    assert game.score == 0
    assert game.safe == ()


def test_delivering_several_fish_sums_points():
    game = _board(home=(0, 0))
    a = game.add_missing(make_fish(1, fast=False), 1, 0)
    b = game.add_missing(make_fish(9, fast=False), 2, 0)

    game.move_player(Direction.RIGHT)
    game.step()
    game.move_player(Direction.RIGHT)
    game.step()
    assert game.found == (a, b)

    game.move_player(Direction.LEFT)
    game.step()
    game.move_player(Direction.LEFT)
    game.step()

    assert game.score == 15 + 7
    assert game.safe == (a, b)
    assert len(game.world) == 2


def test_collecting_heart_scores_and_removes_it():
    game = _board()
    heart = _put(game, make_heart(10), 1, 0)

    game.move_player(Direction.RIGHT)
    game.step()

    assert game.score == 10
    assert heart not in game.world


def test_player_cannot_find_a_found_fish_twice():
    game = _board()
    fish = game.add_missing(_fish(), 1, 0)
    game.move_player(Direction.RIGHT)
    game.step()
    # step back onto the follower's tile
    game.move_player(Direction.LEFT)
    game.step()
    assert game.found == (fish,)
    assert game.missing == ()


# --- Phase 2: missing fish wander ---

def _corridor(direction=Direction.LEFT):
    """4x1 strip: heart/home at x=0, fish at x=1, rock at x=2, player at x=3."""
    cfg = GameConfig(
        width=4, height=1, num_rocks=0, num_snails=0,
        fast_move_chance=1.0, slow_move_chance=1.0,
        wander_off_chance=0.0, heart_chance=0.0,
    )
    return _game(cfg, FixedRandom(0.0, direction))


def test_missing_fish_wandering_home_is_saved_without_score():
    game = _corridor()
    game.place_home(0, 0)
    game.place_player(3, 0)
    _put(game, make_rock(), 2, 0)
    fish = game.add_missing(_fish(), 1, 0)

    game.step()

    assert game.missing == ()
    assert game.safe == (fish,)
    assert fish not in game.world
    assert game.score == 0
    assert game.game_over()


def test_missing_fish_eats_heart_without_score():
    game = _corridor()
    game.place_home(3, 0)
    game.place_player(3, 0)
    _put(game, make_rock(), 2, 0)
    heart = _put(game, make_heart(), 0, 0)
    fish = game.add_missing(_fish(), 1, 0)

    game.step()

    assert fish.position == (0, 0)
    assert heart not in game.world
    assert game.score == 0
    assert game.missing == (fish,)


def test_blocked_wander_is_skipped():
    game = _corridor(Direction.RIGHT)
    game.place_home(0, 0)
    game.place_player(3, 0)
    _put(game, make_snail(), 2, 0)
    fish = game.add_missing(_fish(), 1, 0)

    game.step()

    assert fish.position == (1, 0)
    assert game.missing == (fish,)


def test_fish_do_not_wander_below_move_chance():
    cfg = GameConfig(
        width=5, height=5, num_rocks=0, num_snails=0,
        fast_move_chance=0.5, slow_move_chance=0.5,
        wander_off_chance=0.0, heart_chance=0.0,
    )
    game = _board(cfg, rng=FixedRandom(0.75, Direction.RIGHT))
    fish = game.add_missing(_fish(), 2, 2)

    for _ in range(10):
        game.step()
    assert fish.position == (2, 2)


def test_fast_fish_use_fast_move_chance():
    cfg = GameConfig(
        width=5, height=5, num_rocks=0, num_snails=0,
        fast_move_chance=0.9, slow_move_chance=0.1,
        wander_off_chance=0.0, heart_chance=0.0,
    )
    game = _board(cfg, rng=FixedRandom(0.5, Direction.DOWN))
    fast = game.add_missing(make_fish(1, fast=True), 2, 0)
    slow = game.add_missing(make_fish(2, fast=False), 3, 0)

    game.step()

    assert fast.position == (2, 1)
    assert slow.position == (3, 0)


def test_missing_fish_cannot_swim_onto_another_fish():
    game = _corridor()
    game.place_home(3, 0)
    game.place_player(3, 0)
    blocker = game.add_missing(_fish(2), 0, 0)
    fish = game.add_missing(_fish(), 1, 0)
    _put(game, make_rock(), 2, 0)

    game.step()

    assert blocker.position == (0, 0)
    assert fish.position == (1, 0)


# --- Phase 4: found fish wander off ---

def _two_followers(threshold: int, chance: float):
    cfg = GameConfig(
        width=5, height=5, num_rocks=0, num_snails=0,
        fast_move_chance=0.0, slow_move_chance=0.0,
        boredom_threshold=threshold, wander_off_chance=chance,
        heart_chance=0.0,
    )
    game = _board(cfg)
    first = game.add_missing(_fish(1), 1, 0)
    second = game.add_missing(_fish(2), 2, 0)
    game.move_player(Direction.RIGHT)
    game.step()
    game.move_player(Direction.RIGHT)
    game.step()
    return game, first, second


def test_wander_off_waits_for_boredom_threshold():
    game, first, second = _two_followers(threshold=5, chance=1.0)
    assert game.found == (first, second)
    # found on the last step, which already counted once
    assert second.boredom == 1

    for _ in range(3):
        game.step()
        assert second in game.found

    game.step()
    assert second in game.missing
    assert second not in game.found
    assert second.boredom == 0


def test_first_follower_never_wanders_off():
    game, first, second = _two_followers(threshold=0, chance=1.0)
    for _ in range(30):
        game.step()
        assert game.found[0] is first
    assert first.boredom == 0


def test_wander_off_chance_zero_keeps_followers():
    game, first, second = _two_followers(threshold=1, chance=0.0)
    for _ in range(50):
        game.step()
    assert game.found == (first, second)
    assert second.boredom > 1


def test_wandered_off_fish_can_be_found_again():
    game, first, second = _two_followers(threshold=2, chance=1.0)
    game.step()
    assert second in game.missing
    x, y = second.position
    assert (x, y) == (0, 0)

    game.move_player(Direction.LEFT)
    game.move_player(Direction.LEFT)
    game.step()
    assert game.found[-1] is second


# --- Phase 5: hearts ---

def test_heart_spawns_on_free_tile():
    cfg = GameConfig(
        width=5, height=5, num_rocks=0, num_snails=0,
        fast_move_chance=0.0, slow_move_chance=0.0,
        wander_off_chance=0.0, heart_chance=1.0,
    )
    game = _board(cfg)
    game.step()

    hearts = [e for e in game.world.entities() if e.kind is Kind.HEART]
    assert len(hearts) == 1
    assert game.world.find(*hearts[0].position) == hearts
    assert hearts[0].points == cfg.heart_points


def test_heart_spawn_skipped_when_world_full():
    cfg = GameConfig(
        width=2, height=1, num_rocks=0, num_snails=0,
        fast_move_chance=0.0, slow_move_chance=0.0,
        wander_off_chance=0.0, heart_chance=1.0,
    )
    game = _board(cfg, home=(0, 0), player=(0, 0))
    _put(game, make_rock(), 1, 0)

    game.step()

    assert len(game.world) == 3
    assert game.tick_count == 1


# --- Phase 6: autonomous step ---

def test_step_runs_falling_rocks():
    game = _board()
    rock = _put(game, make_falling_rock(), 3, 0)
    game.step()
    assert rock.position == (3, 1)


# --- Click ---

def test_click_removes_rocks_only():
    game = _board()
    rock = _put(game, make_rock(), 2, 2)
    falling = _put(game, make_falling_rock(), 2, 2)
    snail = _put(game, make_snail(), 3, 3)

    assert game.click(2, 2) == 2
    assert rock not in game.world
    assert falling not in game.world

    assert game.click(3, 3) == 0
    assert snail in game.world


def test_click_leaves_fish_home_and_player():
    game = _board(home=(0, 0))
    fish = game.add_missing(_fish(), 2, 2)

    assert game.click(0, 0) == 0
    assert game.click(2, 2) == 0
    assert fish in game.world
    assert game.home in game.world
    assert game.player in game.world


def test_click_empty_tile():
    game = _board()
    assert game.click(4, 0) == 0


# --- Reset and ticks ---

def test_tick_count_advances_per_step():
    game = _board()
    for i in range(1, 4):
        game.step()
        assert game.tick_count == i


def test_reset_starts_a_fresh_board():
    game = Game(seed=11)
    game.click(*game.missing[0].position)
    for _ in range(5):
        game.step()

    game.reset()

    assert game.tick_count == 0
    assert game.score == 0
    assert len(game.missing) == 10
    assert game.found == ()
    assert game.safe == ()
    assert game.player.position == game.home.position
    assert len(game.world) == 23


# --- Signals ---

def test_signals_report_found_and_saved():
    game = _board(home=(0, 0))
    fish = game.add_missing(_fish(), 1, 0)
    seen = []
    game.signals.subscribe("found", lambda name, data: seen.append((name, data)))
    game.signals.subscribe("saved", lambda name, data: seen.append((name, data)))

    game.move_player(Direction.RIGHT)
    game.step()
    assert seen == [("found", {"fish": fish})]

    game.move_player(Direction.LEFT)
    game.step()
    assert seen[-1] == ("saved", {"fish": fish, "points": 15, "rescued": True})


def test_signals_report_clear():
    game = _board()
    _put(game, make_rock(), 2, 2)
    seen = []
    game.signals.subscribe("cleared", lambda name, data: seen.append(data))

    game.click(2, 2)

    assert seen == [{"x": 2, "y": 2, "count": 1}]


def test_signals_delivered_at_end_of_step():
    game = _board()
    game.add_missing(_fish(), 1, 0)
    game.move_player(Direction.RIGHT)
    game.step()
    assert game.signals.pending() == 0


def test_fish_that_wanders_off_onto_home_saves_itself():
    cfg = GameConfig(
        width=5, height=5, num_rocks=0, num_snails=0,
        fast_move_chance=0.0, slow_move_chance=0.0,
        boredom_threshold=1, wander_off_chance=1.0, heart_chance=0.0,
    )
    game = _board(cfg, home=(0, 0))
    first = game.add_missing(_fish(1), 1, 0)
    second = game.add_missing(_fish(2), 2, 0)
    game.move_player(Direction.RIGHT)
    game.step()
    game.move_player(Direction.RIGHT)
    game.step()

    # trailing on the home tile when it got bored
    assert second in game.missing
    assert second.position == (0, 0)

    game.step()
    assert game.safe == (second,)
    assert game.found == (first,)
    assert game.score == 0


def test_add_missing_rejects_registered_fish_without_moving_it():
    game = _board()
    fish = game.add_missing(_fish(), 1, 1)

    with pytest.raises(DuplicateRegistrationError):
        game.add_missing(fish, 3, 3)
    assert fish.position == (1, 1)
    assert game.world.find(1, 1) == [fish]
    assert game.missing == (fish,)


def test_missing_fish_may_swim_onto_player():
    cfg = GameConfig(
        width=5, height=5, num_rocks=0, num_snails=0,
        fast_move_chance=1.0, slow_move_chance=1.0,
        wander_off_chance=0.0, heart_chance=0.0,
    )
    game = _board(cfg, rng=FixedRandom(0.0, Direction.LEFT))
    fish = game.add_missing(_fish(), 1, 0)

    game.step()
    assert fish.position == game.player.position == (0, 0)
    assert fish in game.missing

    # caught on the following tick without the player moving
    game.step()
    assert game.found == (fish,)
