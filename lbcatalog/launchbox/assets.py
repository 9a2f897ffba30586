"""
LaunchBox media lookup.

Binds files from the Images, Music and Videos folders of an installation to
the games of a platform by comparing file names with game titles.

Directory structure:
    <lb_dir>/Images/<platform>/<category dir>/**/<escaped title>-NN.<ext>
    <lb_dir>/Music/<platform>/**/<escaped title>.<ext>
    <lb_dir>/Videos/<platform>/**/<title> (<tag>).<ext>

Matching is best-effort: files that do not match any title are skipped
silently.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Tuple, Union

from lbcatalog.catalog.models import AssetType
from lbcatalog.catalog.store import SearchContext
from .fields import ASSET_DIRS, MSG_PREFIX
from .matching import asset_title, build_title_map, video_title_candidates
from .registry import Platform

logger = logging.getLogger(__name__)

IMAGES_DIR = 'Images'
MUSIC_DIR = 'Music'
VIDEOS_DIR = 'Videos'


def iter_files(asset_dir: Path) -> List[Path]:
    """
    List the readable, non-hidden files below a directory.

    The result is sorted so that matching does not depend on the order in
    which the filesystem returns entries. A missing directory yields an
    empty list.
    """
    if not asset_dir.is_dir():
        return []

    files = []
    for dirpath, dirnames, filenames in os.walk(asset_dir):
        dirnames[:] = [d for d in dirnames if not d.startswith('.')]
        for filename in filenames:
            if filename.startswith('.'):
                continue
            path = Path(dirpath) / filename
            if os.access(path, os.R_OK):
                files.append(path)
    return sorted(files)


def find_assets_in(
    asset_dir: Path,
    asset_type: AssetType,
    has_num_suffix: bool,
    title_to_gameid: Mapping[str, int],
    sctx: SearchContext,
) -> int:
    """
    Bind image or music files of one directory.

    Args:
        asset_dir: Directory to scan (recursively)
        asset_type: Category the files belong to
        has_num_suffix: Whether file names carry a "-NN" counter
        title_to_gameid: Escaped title -> game id
        sctx: Shared catalog

    Returns:
        Number of files bound
    """
    bound = 0
    for path in iter_files(asset_dir):
        game_id = title_to_gameid.get(asset_title(path.name, has_num_suffix))
        if game_id is None:
            continue
        if sctx.set_asset(game_id, asset_type, str(path)):
            bound += 1
    return bound


def find_videos_in(
    asset_dir: Path,
    title_to_gameid: Mapping[str, int],
    sctx: SearchContext,
) -> int:
    """
    Bind video files of one directory.

    Args:
        asset_dir: Directory to scan (recursively)
        title_to_gameid: Plain title -> game id
        sctx: Shared catalog

    Returns:
        Number of files bound
    """
    bound = 0
    for path in iter_files(asset_dir):
        for title in video_title_candidates(path.name):
            game_id = title_to_gameid.get(title)
            if game_id is not None:
                if sctx.set_asset(game_id, AssetType.VIDEOS, str(path)):
                    bound += 1
                break
    return bound


def find_assets(
    lb_dir: Union[str, Path],
    platform: Platform,
    sctx: SearchContext,
    asset_dirs: Sequence[Tuple[str, AssetType]] = ASSET_DIRS,
) -> Dict[AssetType, int]:
    """
    Look up media for all games of a platform collection.

    Image directories are scanned in priority order, then music, then
    videos. Since asset slots are write-once, a file found in an earlier
    directory is never replaced by one found later.

    Args:
        lb_dir: LaunchBox installation root
        platform: Platform whose collection should be matched
        sctx: Shared catalog
        asset_dirs: (image subdirectory, category) pairs in priority order

    Returns:
        Number of bound files per category
    """
    counts: Dict[AssetType, int] = {}
    collection_childs = sctx.collection_childs.get(platform.name)
    if not collection_childs:
        return counts

    lb_dir = Path(lb_dir)
    members = [(game_id, sctx.games[game_id].title) for game_id in collection_childs]

    esctitle_to_gameid = build_title_map(members, escaped=True)

    images_root = lb_dir / IMAGES_DIR / platform.name
    for dir_name, asset_type in asset_dirs:
        bound = find_assets_in(images_root / dir_name, asset_type, True, esctitle_to_gameid, sctx)
        counts[asset_type] = counts.get(asset_type, 0) + bound

    music_root = lb_dir / MUSIC_DIR / platform.name
    counts[AssetType.MUSIC] = find_assets_in(
        music_root, AssetType.MUSIC, False, esctitle_to_gameid, sctx
    )

    title_to_gameid = build_title_map(members, escaped=False)
    video_root = lb_dir / VIDEOS_DIR / platform.name
    counts[AssetType.VIDEOS] = find_videos_in(video_root, title_to_gameid, sctx)

    logger.debug(
        f"{MSG_PREFIX} platform `{platform.name}`: {sum(counts.values())} media files bound"
    )
    return counts
