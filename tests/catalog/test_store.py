"""Tests for the shared catalog store."""
import pytest

from lbcatalog.catalog.models import AssetType
from lbcatalog.catalog.store import SearchContext


@pytest.mark.unit
def test_create_or_get_game_assigns_sequential_ids(sctx):
    first, created_first = sctx.create_or_get_game("/games/a.nes")
    second, created_second = sctx.create_or_get_game("/games/b.nes")
    again, created_again = sctx.create_or_get_game("/games/a.nes")

    assert (first, second) == (0, 1)
    assert created_first is True
    assert created_second is True
    assert again == first
    assert created_again is False
    assert len(sctx.games) == 2
    assert sctx.find_game_id("/games/b.nes") == 1
    assert sctx.find_game_id("/games/c.nes") is None


@pytest.mark.unit
def test_create_or_get_game_rejects_empty_path(sctx):
    with pytest.raises(ValueError):
        sctx.create_or_get_game("")


@pytest.mark.unit
def test_register_path_never_remaps(sctx):
    a, _ = sctx.create_or_get_game("/games/a.cue")
    b, _ = sctx.create_or_get_game("/games/b.cue")

    assert sctx.register_path("/games/a-disc2.cue", a) is True
    assert sctx.register_path("/games/a-disc2.cue", a) is False
    assert sctx.register_path("/games/a-disc2.cue", b) is False
    assert sctx.find_game_id("/games/a-disc2.cue") == a

    with pytest.raises(KeyError):
        sctx.register_path("/games/x.cue", 99)


@pytest.mark.unit
def test_collection_childs_are_append_only(sctx):
    game_id, _ = sctx.create_or_get_game("/games/a.nes")

    sctx.add_collection_child("NES", game_id)
    sctx.add_collection_child("NES", game_id)
    sctx.add_collection_child("Favorites", game_id)

    assert sctx.collection_childs["NES"] == [game_id, game_id]
    assert sctx.collection_childs["Favorites"] == [game_id]
    assert set(sctx.collections) == {"NES", "Favorites"}

    with pytest.raises(KeyError):
        sctx.add_collection_child("NES", 42)


@pytest.mark.unit
def test_get_or_create_collection_is_idempotent(sctx):
    first = sctx.get_or_create_collection("SNES")
    second = sctx.get_or_create_collection("SNES")

    assert first is second
    assert sctx.collection_childs["SNES"] == []


@pytest.mark.unit
def test_set_asset_is_noop_when_occupied(sctx):
    game_id, _ = sctx.create_or_get_game("/games/a.nes")

    assert sctx.set_asset(game_id, AssetType.BOX_FRONT, "/img/1.png") is True
    assert sctx.set_asset(game_id, AssetType.BOX_FRONT, "/img/2.png") is False
    assert sctx.get_asset(game_id, AssetType.BOX_FRONT) == "/img/1.png"
    assert sctx.get_asset(game_id, AssetType.LOGO) is None


@pytest.mark.unit
def test_summary_and_paths_by_game(sctx):
    a, _ = sctx.create_or_get_game("/games/a.nes")
    b, _ = sctx.create_or_get_game("/games/b.nes")
    sctx.register_path("/games/a2.nes", a)
    sctx.add_collection_child("NES", a)
    sctx.add_collection_child("NES", a)
    sctx.add_collection_child("NES", b)
    sctx.set_asset(b, AssetType.LOGO, "/img/b.png")

    [row] = sctx.summary()

    assert row.name == "NES"
    assert row.entries == 3
    assert row.games == 2
    assert row.with_assets == 1
    assert sctx.paths_by_game() == {a: {"/games/a.nes", "/games/a2.nes"}, b: {"/games/b.nes"}}


@pytest.mark.unit
def test_to_dict_lists_games_and_collections():
    sctx = SearchContext()
    game_id, _ = sctx.create_or_get_game("/games/a.nes")
    sctx.add_collection_child("NES", game_id)

    data = sctx.to_dict()

    assert data["collections"] == {"NES": [0]}
    assert data["games"]["0"]["title"] == "a"
