"""
Shared catalog state for one run.

All providers write into the same SearchContext, one after another. The
context is not thread safe: the orchestrator must not run providers
concurrently against it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from .models import AssetType, Collection, Game

logger = logging.getLogger(__name__)


@dataclass
class CollectionSummary:
    """Counters for one collection, used for reporting."""
    name: str
    entries: int
    games: int
    with_assets: int


class SearchContext:
    """
    Run-scoped catalog store.

    Attributes:
        games: Game id -> Game
        path_to_gameid: Canonical file path -> game id
        collections: Collection name -> Collection
        collection_childs: Collection name -> member game ids, in the order
                           they were encountered

    Invariants:
        - a canonical path maps to at most one game id
        - every id listed in collection_childs exists in games
        - asset slots are write-once
    """

    def __init__(self):
        self.games: Dict[int, Game] = {}
        self.path_to_gameid: Dict[str, int] = {}
        self.collections: Dict[str, Collection] = {}
        self.collection_childs: Dict[str, List[int]] = {}

    def find_game_id(self, can_path: str) -> Optional[int]:
        """Look up the game owning a canonical path."""
        return self.path_to_gameid.get(can_path)

    def create_or_get_game(self, can_path: str) -> Tuple[int, bool]:
        """
        Get the game for a canonical path, creating it on first encounter.

        Args:
            can_path: Canonical path of the game's primary file

        Returns:
            (game id, True if the game was created by this call)
        """
        if not can_path:
            raise ValueError("Game path must not be empty")

        game_id = self.path_to_gameid.get(can_path)
        if game_id is not None:
            return game_id, False

        game_id = len(self.games)
        self.games[game_id] = Game.from_path(can_path)
        self.path_to_gameid[can_path] = game_id
        logger.debug(f"New game #{game_id}: {can_path}")
        return game_id, True

    def register_path(self, can_path: str, game_id: int) -> bool:
        """
        Map an additional path to an existing game.

        An already registered path keeps its owner, so the index stays
        injective.

        Returns:
            True if the mapping was added
        """
        if game_id not in self.games:
            raise KeyError(f"Unknown game id: {game_id}")

        owner = self.path_to_gameid.get(can_path)
        if owner is not None:
            if owner != game_id:
                logger.debug(
                    f"Path {can_path} already belongs to game #{owner}, not remapped to #{game_id}"
                )
            return False

        self.path_to_gameid[can_path] = game_id
        return True

    def get_or_create_collection(self, name: str) -> Collection:
        """Get a collection by name, creating it (and its child list) if needed."""
        collection = self.collections.get(name)
        if collection is None:
            collection = Collection(name)
            self.collections[name] = collection
        self.collection_childs.setdefault(name, [])
        return collection

    def add_collection_child(self, name: str, game_id: int) -> None:
        """
        Append a game to a collection.

        Membership is append-only and not deduplicated: a game may appear in
        several collections, and the child list records every entry that
        referred to it.
        """
        if game_id not in self.games:
            raise KeyError(f"Unknown game id: {game_id}")
        self.get_or_create_collection(name)
        self.collection_childs[name].append(game_id)

    def get_asset(self, game_id: int, asset_type: AssetType) -> Optional[str]:
        return self.games[game_id].assets.get(asset_type)

    def set_asset(self, game_id: int, asset_type: AssetType, path: str) -> bool:
        """Bind an asset file; no-op if the slot is already occupied."""
        return self.games[game_id].assets.add_file_maybe(asset_type, path)

    def paths_by_game(self) -> Dict[int, Set[str]]:
        """Group the path index by game id."""
        out: Dict[int, Set[str]] = {}
        for path, game_id in self.path_to_gameid.items():
            out.setdefault(game_id, set()).add(path)
        return out

    def summary(self) -> List[CollectionSummary]:
        """Per-collection counters, sorted by collection name."""
        result = []
        for name in sorted(self.collections):
            childs = self.collection_childs.get(name, [])
            unique = set(childs)
            with_assets = sum(1 for gid in unique if len(self.games[gid].assets) > 0)
            result.append(CollectionSummary(
                name=name,
                entries=len(childs),
                games=len(unique),
                with_assets=with_assets,
            ))
        return result

    def to_dict(self) -> dict:
        """Plain representation of the whole catalog for JSON output."""
        return {
            'games': {str(gid): game.to_dict() for gid, game in self.games.items()},
            'collections': {
                name: list(self.collection_childs.get(name, []))
                for name in self.collections
            },
        }
