"""
Catalog data structures.

Defines the games, launch files, collections and asset slots shared by all
metadata providers.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional


class AssetType(Enum):
    """
    Asset categories a game can have.

    Every category holds at most one file per game.
    """
    BOX_FRONT = 'box_front'
    BOX_BACK = 'box_back'
    ARCADE_MARQUEE = 'marquee'
    CARTRIDGE = 'cartridge'
    SCREENSHOTS = 'screenshot'
    POSTER = 'poster'
    ARCADE_PANEL = 'panel'
    LOGO = 'logo'
    BACKGROUND = 'background'
    UI_STEAMGRID = 'steamgrid'
    MUSIC = 'music'
    VIDEOS = 'video'


class Assets:
    """
    Asset slots of a single game.

    Binding is first-writer-wins: once a category is filled, later candidates
    are ignored. Providers rely on this to express priority purely through
    the order in which they offer files.
    """

    def __init__(self):
        self._files: Dict[AssetType, str] = {}

    def add_file_maybe(self, asset_type: AssetType, path: str) -> bool:
        """
        Bind a file to a slot if the slot is still empty.

        Args:
            asset_type: Asset category
            path: File path to bind

        Returns:
            True if the file was bound, False if the slot was already taken
        """
        if not path or asset_type in self._files:
            return False
        self._files[asset_type] = path
        return True

    def get(self, asset_type: AssetType) -> Optional[str]:
        return self._files.get(asset_type)

    def items(self):
        return self._files.items()

    def __contains__(self, asset_type: AssetType) -> bool:
        return asset_type in self._files

    def __len__(self) -> int:
        return len(self._files)

    def to_dict(self) -> Dict[str, str]:
        return {t.value: p for t, p in self._files.items()}


@dataclass
class GameFile:
    """A launchable file of a game."""
    path: str  # Canonical path
    name: Optional[str] = None  # Display name, e.g. "Play Disc 2"


@dataclass
class Game:
    """
    Represents a game in the catalog.

    A game is identified by the canonical path of its primary file. The first
    entry of `files` is the primary launch target, later ones come from
    secondary entries.
    """
    title: str = ''
    description: str = ''
    developers: List[str] = field(default_factory=list)
    publishers: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    release_date: Optional[date] = None
    rating: float = 0.0  # 0.0-1.0
    launch_cmd: str = ''  # Contains the {file.path} placeholder
    launch_workdir: str = ''
    files: List[GameFile] = field(default_factory=list)
    assets: Assets = field(default_factory=Assets)

    @classmethod
    def from_path(cls, path: str) -> 'Game':
        """Create a game whose primary file is `path`, titled after its file name."""
        return cls(title=Path(path).stem, files=[GameFile(path=path)])

    def find_file(self, path: str) -> Optional[GameFile]:
        """Return the launch file with the given canonical path, if any."""
        for game_file in self.files:
            if game_file.path == path:
                return game_file
        return None

    def to_dict(self) -> dict:
        """Plain representation for JSON output."""
        return {
            'title': self.title,
            'description': self.description,
            'developers': list(self.developers),
            'publishers': list(self.publishers),
            'genres': list(self.genres),
            'release_date': self.release_date.isoformat() if self.release_date else None,
            'rating': self.rating,
            'launch_cmd': self.launch_cmd,
            'launch_workdir': self.launch_workdir,
            'files': [{'path': f.path, 'name': f.name} for f in self.files],
            'assets': self.assets.to_dict(),
        }


@dataclass
class Collection:
    """A named group of games, typically one platform."""
    name: str

    def __post_init__(self):
        """Ensure name is set."""
        if not self.name:
            raise ValueError("Collection name is required")


def append_unique(values: List[str], new_values: Iterable[str]) -> None:
    """
    Append values to a list, dropping duplicates.

    Keeps the first occurrence of every value, so the original order of
    the list is preserved.
    """
    seen = set(values)
    for value in new_values:
        if value not in seen:
            values.append(value)
            seen.add(value)
