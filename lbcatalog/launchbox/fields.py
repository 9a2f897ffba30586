"""
LaunchBox document vocabulary.

Maps LaunchBox XML tag names and asset directory names to the field and
asset identifiers used by the ingester.
"""

from enum import Enum
from typing import Dict, List, Tuple, TypeVar

from lxml import etree

from lbcatalog.catalog.models import AssetType

MSG_PREFIX = "LaunchBox:"
ROOT_TAG = 'LaunchBox'


class GameField(Enum):
    """Fields of a <Game> entry."""
    ID = 'id'
    PATH = 'path'
    TITLE = 'title'
    RELEASE = 'release'
    DEVELOPER = 'developer'
    PUBLISHER = 'publisher'
    NOTES = 'notes'
    GENRE = 'genre'
    PLAYMODE = 'playmode'
    STARS = 'stars'
    EMULATOR = 'emulator'
    EMULATOR_PARAMS = 'emulator_params'


class AdditionalAppField(Enum):
    """Fields of an <AdditionalApplication> entry."""
    ID = 'id'
    GAME_ID = 'game_id'
    PATH = 'path'
    NAME = 'name'


GAME_FIELD_MAP: Dict[str, GameField] = {
    'ID': GameField.ID,
    'ApplicationPath': GameField.PATH,
    'Title': GameField.TITLE,
    'Developer': GameField.DEVELOPER,
    'Publisher': GameField.PUBLISHER,
    'ReleaseDate': GameField.RELEASE,
    'Notes': GameField.NOTES,
    'PlayMode': GameField.PLAYMODE,
    'Genre': GameField.GENRE,
    'CommunityStarRating': GameField.STARS,
    'Emulator': GameField.EMULATOR,
    'CommandLine': GameField.EMULATOR_PARAMS,
}

ADDIAPP_FIELD_MAP: Dict[str, AdditionalAppField] = {
    'Id': AdditionalAppField.ID,
    'ApplicationPath': AdditionalAppField.PATH,
    'GameID': AdditionalAppField.GAME_ID,
    'Name': AdditionalAppField.NAME,
}

# Subdirectories of Images/<platform>/, ordered by priority. For categories
# with several sources, the first directory that has a file for a game wins.
ASSET_DIRS: List[Tuple[str, AssetType]] = [
    ('Box - Front', AssetType.BOX_FRONT),
    ('Box - Front - Reconstructed', AssetType.BOX_FRONT),
    ('Fanart - Box - Front', AssetType.BOX_FRONT),

    ('Box - Back', AssetType.BOX_BACK),
    ('Box - Back - Reconstructed', AssetType.BOX_BACK),
    ('Fanart - Box - Back', AssetType.BOX_BACK),

    ('Arcade - Marquee', AssetType.ARCADE_MARQUEE),
    ('Banner', AssetType.ARCADE_MARQUEE),

    ('Cart - Front', AssetType.CARTRIDGE),
    ('Disc', AssetType.CARTRIDGE),
    ('Fanart - Cart - Front', AssetType.CARTRIDGE),
    ('Fanart - Disc', AssetType.CARTRIDGE),

    ('Screenshot - Gameplay', AssetType.SCREENSHOTS),
    ('Screenshot - Game Select', AssetType.SCREENSHOTS),
    ('Screenshot - Game Title', AssetType.SCREENSHOTS),
    ('Screenshot - Game Over', AssetType.SCREENSHOTS),
    ('Screenshot - High Scores', AssetType.SCREENSHOTS),

    ('Advertisement Flyer - Front', AssetType.POSTER),
    ('Arcade - Control Panel', AssetType.ARCADE_PANEL),
    ('Clear Logo', AssetType.LOGO),
    ('Fanart - Background', AssetType.BACKGROUND),
    ('Steam Banner', AssetType.UI_STEAMGRID),
]

F = TypeVar('F', GameField, AdditionalAppField)


def read_fields(element: etree._Element, field_map: Dict[str, F]) -> Dict[F, str]:
    """
    Collect the known child fields of an entry element.

    Text is stripped and empty values are dropped. Unknown children are
    ignored together with their subtrees. If a tag repeats, the first
    non-empty value is kept.

    Args:
        element: <Game> or <AdditionalApplication> element
        field_map: Tag name -> field identifier

    Returns:
        Field identifier -> text
    """
    values: Dict[F, str] = {}
    for child in element:
        if not isinstance(child.tag, str):
            continue  # comments, processing instructions

        field_id = field_map.get(child.tag)
        if field_id is None or field_id in values:
            continue

        contents = (child.text or '').strip()
        if not contents:
            continue

        values[field_id] = contents
    return values


def child_text(parent: etree._Element, tag: str) -> str:
    """Stripped text of the first child with the given tag, or ''."""
    elem = parent.find(tag)
    if elem is not None and elem.text:
        return elem.text.strip()
    return ''
