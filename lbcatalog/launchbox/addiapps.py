"""
LaunchBox additional application merging.

<AdditionalApplication> entries add extra launch targets (other discs,
alternate configurations, DLC launchers) to a game of the same document.
"""

import logging
from pathlib import Path
from typing import Iterable, Mapping, Tuple

from lbcatalog.catalog.models import GameFile
from lbcatalog.catalog.store import SearchContext
from lbcatalog.paths import canonical_path, resolve_in
from .fields import MSG_PREFIX, AdditionalAppField

logger = logging.getLogger(__name__)


def store_addiapp(
    xml_path: str,
    lb_dir: Path,
    values: Mapping[AdditionalAppField, str],
    gameid_map: Mapping[str, int],
    sctx: SearchContext,
) -> bool:
    """
    Attach one additional application to its game.

    If the file is already one of the game's files, only its display name
    is updated. Otherwise the file is appended and its path registered in
    the catalog so later references resolve to the same game.

    Args:
        xml_path: Document path, for log messages
        lb_dir: Installation root
        values: Fields read from the entry
        gameid_map: LaunchBox game id -> catalog game id, for this document
        sctx: Shared catalog

    Returns:
        True if the entry was merged, False if it was ignored
    """
    entry_id = values.get(AdditionalAppField.ID)
    if entry_id is None:
        logger.warning(
            f"{MSG_PREFIX} in `{xml_path}`, an additional application entry has no ID, "
            f"entry ignored"
        )
        return False

    lb_gameid = values.get(AdditionalAppField.GAME_ID)
    if lb_gameid is None:
        logger.warning(
            f"{MSG_PREFIX} in `{xml_path}`, additional application entry `{entry_id}` "
            f"has no GameID field, entry ignored"
        )
        return False

    game_id = gameid_map.get(lb_gameid)
    if game_id is None:
        logger.warning(
            f"{MSG_PREFIX} in `{xml_path}`, additional application entry `{entry_id}` "
            f"refers to nonexisting game `{lb_gameid}`, entry ignored"
        )
        return False

    raw_path = values.get(AdditionalAppField.PATH)
    if raw_path is None:
        logger.warning(
            f"{MSG_PREFIX} in `{xml_path}`, additional application entry `{entry_id}` "
            f"has no path, entry ignored"
        )
        return False

    can_path = canonical_path(resolve_in(lb_dir, raw_path))
    if not can_path:
        logger.warning(
            f"{MSG_PREFIX} in `{xml_path}`, additional application entry `{entry_id}` "
            f"refers to nonexisting file `{raw_path}`, entry ignored"
        )
        return False

    name = values.get(AdditionalAppField.NAME)
    game = sctx.games[game_id]

    game_file = game.find_file(can_path)
    if game_file is not None:
        if name is not None:
            game_file.name = name
    else:
        game.files.append(GameFile(path=can_path, name=name))

    sctx.register_path(can_path, game_id)
    return True


def merge_additional_apps(
    xml_path: str,
    lb_dir: Path,
    entries: Iterable[Mapping[AdditionalAppField, str]],
    gameid_map: Mapping[str, int],
    sctx: SearchContext,
) -> Tuple[int, int]:
    """
    Merge all additional applications collected from one document.

    Returns:
        (merged count, ignored count)
    """
    merged = 0
    skipped = 0
    for values in entries:
        if store_addiapp(xml_path, lb_dir, values, gameid_map, sctx):
            merged += 1
        else:
            skipped += 1

    if merged or skipped:
        logger.debug(
            f"{MSG_PREFIX} `{xml_path}`: {merged} additional applications merged, {skipped} ignored"
        )
    return merged, skipped
