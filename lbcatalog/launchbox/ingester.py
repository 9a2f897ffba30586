"""
LaunchBox platform XML ingestion.

Reads Data/Platforms/<platform>.xml documents and folds their <Game> entries
into the shared SearchContext. Games are identified by the canonical path of
their file, so the same file listed on several platforms (or by another
provider) ends up as a single game.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from lxml import etree

from lbcatalog.catalog.models import Game, append_unique
from lbcatalog.catalog.store import SearchContext
from lbcatalog.paths import canonical_path, resolve_in
from .addiapps import merge_additional_apps
from .document import DocumentError, open_document
from .fields import (
    ADDIAPP_FIELD_MAP,
    GAME_FIELD_MAP,
    MSG_PREFIX,
    AdditionalAppField,
    GameField,
    read_fields,
)
from .registry import Emulator, Platform

logger = logging.getLogger(__name__)

FILE_PATH_PLACEHOLDER = '{file.path}'
# CommunityStarRating is given in stars (0-5). Game.rating is stored on a
# 0-1 scale, so the raw star value is divided by this and never kept as is.
MAX_STARS = 5.0
# Ratings below this are treated as unset
RATING_EPSILON = 0.0001


class CommandFallback(Enum):
    """
    Command line used when neither the game nor the platform defines one.

    EMULATOR_PATH repeats the emulator executable as the argument string.
    That is what earlier releases did and is kept as the default so existing
    catalogs do not change, even though it is unlikely to be what LaunchBox
    itself would run.
    """
    EMULATOR_PATH = 'emulator_path'
    EMULATOR_PARAMS = 'emulator_params'
    NONE = 'none'


class PlatformXMLError(Exception):
    """
    A platform document could not be processed completely.

    Attributes:
        result: Counters for the entries stored before the error, or None
                if the document could not be opened at all
    """

    def __init__(self, message: str, result: Optional['IngestResult'] = None):
        super().__init__(message)
        self.result = result


@dataclass
class IngestResult:
    """Counters for one platform document."""
    platform: str
    entries: int = 0
    games_added: int = 0
    games_merged: int = 0
    entries_skipped: int = 0
    addiapps_merged: int = 0
    addiapps_skipped: int = 0


def parse_release_date(text: str) -> Optional[date]:
    """
    Parse an ISO date, ignoring a trailing time part.

    Examples:
        - '1994-03-19' -> date(1994, 3, 19)
        - '1994-03-19T00:00:00-08:00' -> date(1994, 3, 19)
        - '19940319' -> None
    """
    if len(text) < 10 or (len(text) > 10 and text[10].isdigit()):
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_rating(text: str) -> Optional[float]:
    """
    Convert a star rating to the 0.0-1.0 scale.

    Returns:
        Rating, or None if the text is not a number
    """
    try:
        stars = float(text)
    except ValueError:
        return None
    if stars != stars:  # NaN
        return None
    return min(max(stars / MAX_STARS, 0.0), 1.0)


def build_launch_command(emu_app: str, emu_params: str) -> str:
    """Launch command template for an emulator and its command line."""
    if not emu_app:
        return ''
    params = f" {emu_params}" if emu_params else ''
    return f'"{emu_app}"{params} {FILE_PATH_PLACEHOLDER}'


def store_game_fields(
    game: Game,
    fields: Mapping[GameField, str],
    platform: Platform,
    emulators: Mapping[str, Emulator],
    command_fallback: CommandFallback = CommandFallback.EMULATOR_PATH,
) -> None:
    """
    Merge the fields of one <Game> entry into a game.

    Fields are applied in GameField order so the result does not depend on
    the order of the tags in the document.

    Args:
        game: Game to update (new or already known)
        fields: Values read from the entry
        platform: Platform the document belongs to
        emulators: Known emulators by id
        command_fallback: Policy when no command line is configured
    """
    default_emu = emulators.get(platform.default_emu_id)
    emu_app = default_emu.app_path if default_emu else ''
    if platform.cmd_params:
        emu_params = platform.cmd_params
    elif command_fallback is CommandFallback.EMULATOR_PATH:
        emu_params = emu_app
    elif command_fallback is CommandFallback.EMULATOR_PARAMS:
        emu_params = default_emu.cmd_params if default_emu else ''
    else:
        emu_params = ''

    for field_id in GameField:
        value = fields.get(field_id)
        if value is None:
            continue

        if field_id is GameField.TITLE:
            game.title = value
        elif field_id is GameField.NOTES:
            if not game.description:
                game.description = value
        elif field_id is GameField.DEVELOPER:
            append_unique(game.developers, [value])
        elif field_id is GameField.PUBLISHER:
            append_unique(game.publishers, [value])
        elif field_id is GameField.GENRE:
            append_unique(game.genres, [value])
        elif field_id is GameField.RELEASE:
            if game.release_date is None:
                game.release_date = parse_release_date(value)
        elif field_id is GameField.STARS:
            rating = parse_rating(value)
            if rating is not None and rating >= RATING_EPSILON and rating > game.rating:
                game.rating = rating
        elif field_id is GameField.PLAYMODE:
            modes = [token.strip() for token in value.split(';')]
            append_unique(game.genres, [mode for mode in modes if mode])
        elif field_id is GameField.EMULATOR:
            emu = emulators.get(value)
            if emu is not None:
                emu_app = emu.app_path
        elif field_id is GameField.EMULATOR_PARAMS:
            emu_params = value
        elif field_id in (GameField.ID, GameField.PATH):
            pass
        else:
            raise ValueError(f"Unhandled game field: {field_id}")

    if not game.launch_cmd:
        game.launch_cmd = build_launch_command(emu_app, emu_params)
        if emu_app:
            game.launch_workdir = str(Path(emu_app).parent)


class PlatformIngester:
    """
    Ingests the game lists of one LaunchBox installation.

    One instance is shared by all platforms of the installation.
    """

    def __init__(
        self,
        lb_dir: Union[str, Path],
        emulators: Mapping[str, Emulator],
        command_fallback: CommandFallback = CommandFallback.EMULATOR_PATH,
    ):
        """
        Initialize ingester.

        Args:
            lb_dir: LaunchBox installation root
            emulators: Emulators by id, from the registry
            command_fallback: Launch command policy, see CommandFallback
        """
        self.lb_dir = Path(lb_dir)
        self.emulators = emulators
        self.command_fallback = command_fallback

    def process_platform_xml(self, platform: Platform, sctx: SearchContext) -> IngestResult:
        """
        Ingest one platform document.

        Games are stored first; additional applications are merged once all
        games of the document are known, since they may refer to games
        declared further down.

        The document is read as a stream. If it breaks off (syntax error,
        truncated file), the entries read so far are kept, the additional
        applications collected so far are still merged, and the rest of the
        document is abandoned.

        Args:
            platform: Platform to ingest
            sctx: Shared catalog

        Returns:
            IngestResult counters

        Raises:
            PlatformXMLError: If the document cannot be opened, is not a
                              LaunchBox document, or cannot be read to its
                              end; in the last case `result` holds the
                              counters of what was stored
        """
        xml_path = platform.xml_path
        try:
            records = open_document(xml_path)
        except DocumentError as e:
            raise PlatformXMLError(str(e)) from e

        sctx.get_or_create_collection(platform.name)

        result = IngestResult(platform=platform.name)
        addiapps: List[Dict[AdditionalAppField, str]] = []
        gameid_map: Dict[str, int] = {}

        error = None
        try:
            for elem in records:
                if elem.tag == 'Game':
                    result.entries += 1
                    self._read_game(elem, xml_path, platform, sctx, gameid_map, result)
                elif elem.tag == 'AdditionalApplication':
                    addiapps.append(read_fields(elem, ADDIAPP_FIELD_MAP))
        except DocumentError as e:
            error = e

        result.addiapps_merged, result.addiapps_skipped = merge_additional_apps(
            xml_path, self.lb_dir, addiapps, gameid_map, sctx
        )

        if error is not None:
            raise PlatformXMLError(f"{error}, remainder of the document ignored", result) from error

        logger.info(
            f"{MSG_PREFIX} platform `{platform.name}`: {result.games_added} new games, "
            f"{result.games_merged} merged, {result.entries_skipped} entries skipped"
        )
        return result

    def _read_game(
        self,
        elem: etree._Element,
        xml_path: str,
        platform: Platform,
        sctx: SearchContext,
        gameid_map: Dict[str, int],
        result: IngestResult,
    ) -> Optional[int]:
        """Validate and store a single <Game> element."""
        fields = read_fields(elem, GAME_FIELD_MAP)

        lb_id = fields.get(GameField.ID)
        if lb_id is None:
            logger.warning(f"{MSG_PREFIX} in `{xml_path}`, a game has no ID, entry ignored")
            result.entries_skipped += 1
            return None

        raw_path = fields.get(GameField.PATH)
        if raw_path is None:
            logger.warning(
                f"{MSG_PREFIX} in `{xml_path}`, game `{lb_id}` has no path, entry ignored"
            )
            result.entries_skipped += 1
            return None

        can_path = canonical_path(resolve_in(self.lb_dir, raw_path))
        if not can_path:
            logger.warning(
                f"{MSG_PREFIX} in `{xml_path}`, game file `{raw_path}` doesn't seem to exist, "
                f"entry ignored"
            )
            result.entries_skipped += 1
            return None

        game_id = self._store_game(can_path, fields, platform, sctx, result)
        gameid_map.setdefault(lb_id, game_id)
        return game_id

    def _store_game(
        self,
        can_path: str,
        fields: Mapping[GameField, str],
        platform: Platform,
        sctx: SearchContext,
        result: IngestResult,
    ) -> int:
        """Create or update the game for a path and add it to the platform collection."""
        game_id, created = sctx.create_or_get_game(can_path)
        game = sctx.games[game_id]

        store_game_fields(game, fields, platform, self.emulators, self.command_fallback)
        if not game.launch_cmd:
            logger.warning(f"{MSG_PREFIX} game '{game.title}' has no launch command")

        if created:
            result.games_added += 1
        else:
            result.games_merged += 1

        sctx.add_collection_child(platform.name, game_id)
        return game_id
