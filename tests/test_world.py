"""Regression tests for the authoritative world rules."""
from __future__ import annotations

import pytest

from coin_arena import config
from coin_arena.errors import UnknownPlayerError
from coin_arena.game import Coin, World, overlaps_coin
from coin_arena.game.models import Player


@pytest.fixture()
def world() -> World:
    return World(seed=7)


def test_world_starts_with_full_coin_pool(world: World) -> None:
    assert len(world.coins) == config.COIN_COUNT
    assert not any(coin.collected for coin in world.coins)
    for coin in world.coins:
        assert 10 <= coin.x <= 789
        assert 10 <= coin.y <= 589
        assert isinstance(coin.x, int)


def test_new_player_spawns_inside_playfield(world: World) -> None:
    for _ in range(50):
        player = world.add_player()
        assert 10 <= player.x < 790
        assert 10 <= player.y < 590
        assert (player.width, player.height) == (20, 20)
        assert player.score == 0
        assert len(player.color) == 7 and player.color.startswith("#")
        int(player.color[1:], 16)


def test_player_ids_are_unique(world: World) -> None:
    ids = {world.add_player().id for _ in range(20)}
    assert len(ids) == 20


def test_move_sets_position_exactly_without_clamping(world: World) -> None:
    world.coins.clear()
    player = world.add_player("p1")
    world.move_player("p1", -250.5, 4000.25)
    assert (player.x, player.y) == (-250.5, 4000.25)


def test_move_in_place_collects_overlapping_coin(world: World) -> None:
    world.coins[:] = [Coin(105, 105)]
    player = world.add_player("p1")
    player.x, player.y = 100, 100
    assert world.move_player("p1", 100, 100) == 1
    assert world.coins[0].collected
    assert player.score == 1


def test_collection_is_idempotent(world: World) -> None:
    world.coins[:] = [Coin(105, 105)]
    player = world.add_player("p1")
    world.move_player("p1", 100, 100)
    world.move_player("p1", 101, 101)
    world.move_player("p1", 100, 100)
    assert player.score == 1


def test_second_player_finds_coin_already_taken(world: World) -> None:
    world.coins[:] = [Coin(105, 105)]
    first = world.add_player("a")
    second = world.add_player("b")
    world.move_player("a", 100, 100)
    world.move_player("b", 98, 98)
    assert first.score == 1
    assert second.score == 0


def test_score_counts_every_coin_touched(world: World) -> None:
    world.coins[:] = [Coin(105, 105), Coin(110, 100), Coin(300, 300)]
    player = world.add_player("p1")
    world.move_player("p1", 100, 100)
    world.move_player("p1", 295, 295)
    assert player.score == 3
    assert world.coins_remaining() == 0


def test_collision_box_is_smaller_than_drawn_coin() -> None:
    coin = Coin(100, 100)
    # Inside the drawn radius-10 circle, but left of the collision box.
    player = Player(id="p", x=71, y=95, color="#000000")
    assert not overlaps_coin(player, coin)
    player.x = 81
    assert overlaps_coin(player, coin)
    # Edges touching is not an overlap.
    player.x = 110
    assert not overlaps_coin(player, coin)


def test_move_for_unknown_player_raises(world: World) -> None:
    with pytest.raises(UnknownPlayerError):
        world.move_player("ghost", 0, 0)


def test_remove_player_twice_is_harmless(world: World) -> None:
    world.add_player("p1")
    assert world.remove_player("p1") is not None
    assert world.remove_player("p1") is None
    assert "p1" not in world.players


def test_snapshot_is_detached_from_world(world: World) -> None:
    player = world.add_player("p1")
    snapshot = world.snapshot()
    assert snapshot.players["p1"] == player.to_dict()
    assert len(snapshot.coins) == config.COIN_COUNT
    player.x = 999
    assert snapshot.players["p1"]["x"] != 999
