"""
Title derivation rules for LaunchBox asset files.

LaunchBox names media after the game title, made filesystem-safe. These
helpers turn file names back into titles. They never touch the disk.
"""

import re
from pathlib import PurePath
from typing import Iterable, List, Tuple

# Characters LaunchBox replaces with '_' in media file names
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\']')
# Numbered duplicate marker, e.g. "Alpha-01.png"
NUM_SUFFIX = re.compile(r'-\d{2}$')


def escape_title(title: str) -> str:
    """
    Render a game title the way LaunchBox names its image files.

    Example:
        >>> escape_title('Metroid: Zero Mission')
        'Metroid_ Zero Mission'
    """
    return INVALID_FILENAME_CHARS.sub('_', title)


def complete_base_name(filename: str) -> str:
    """
    File name without its last extension.

    Example:
        >>> complete_base_name('Super Mario Bros. 3-01.png')
        'Super Mario Bros. 3-01'
    """
    name = PurePath(filename).name
    idx = name.rfind('.')
    if idx <= 0:
        return name
    return name[:idx]


def strip_num_suffix(basename: str) -> str:
    """
    Remove a trailing "-NN" duplicate counter.

    Names without a counter are returned unchanged.

    Example:
        >>> strip_num_suffix('Metroid_ Zero Mission-01')
        'Metroid_ Zero Mission'
    """
    return NUM_SUFFIX.sub('', basename)


def asset_title(filename: str, has_num_suffix: bool) -> str:
    """Candidate (escaped) title for an image or music file."""
    basename = complete_base_name(filename)
    return strip_num_suffix(basename) if has_num_suffix else basename


def strip_trailing_tag(basename: str) -> str:
    """
    Remove a trailing parenthesized region/version tag.

    A '(' at the very start of the name is not treated as a tag opener.

    Example:
        >>> strip_trailing_tag('Chrono Trigger (USA)')
        'Chrono Trigger'
    """
    end = len(basename)
    if basename.endswith(')'):
        idx = basename.rfind('(', 0, len(basename) - 1)
        if idx > 0:
            end = idx
    return basename[:end].strip()


def rewrite_video_title(title: str) -> str:
    """
    Fallback rewrite for video titles that did not match directly.

    " - " becomes ": " and a trailing ", The" moves to the front.

    Example:
        >>> rewrite_video_title('Zelda, The')
        'The Zelda'
    """
    title = title.replace(' - ', ': ')
    if title.endswith(', The'):
        title = 'The ' + title[:-len(', The')]
    return title


def video_title_candidates(filename: str) -> List[str]:
    """
    Titles to try for a video file, in order.

    The second candidate is only present when the rewrite changes anything.
    """
    title = strip_trailing_tag(complete_base_name(filename))
    candidates = [title]
    rewritten = rewrite_video_title(title)
    if rewritten != title:
        candidates.append(rewritten)
    return candidates


def build_title_map(members: Iterable[Tuple[int, str]], escaped: bool) -> dict:
    """
    Build a title -> game id lookup.

    Args:
        members: (game id, title) pairs in collection order
        escaped: Whether to index the filesystem-safe rendering of the titles

    Returns:
        Dict of title -> game id; for duplicate titles the first member wins
    """
    out = {}
    for game_id, title in members:
        out.setdefault(escape_title(title) if escaped else title, game_id)
    return out
