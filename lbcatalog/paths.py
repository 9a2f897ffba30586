"""
Path handling for LaunchBox data.

LaunchBox stores paths relative to its installation directory, usually with
Windows separators. Everything that ends up in the catalog is converted to a
canonical absolute path first.
"""

import os
from pathlib import Path
from typing import Optional, Union


def home_path() -> Path:
    """Return the user's home directory."""
    return Path.home()


def resolve_in(root: Union[str, Path], value: str) -> Path:
    """
    Resolve a path found in a LaunchBox document against the installation root.

    Args:
        root: Installation root directory
        value: Path as written in the XML (relative or absolute, any separator)

    Returns:
        Absolute (not yet canonical) path

    Examples:
        - resolve_in('/lb', 'Games\\NES\\Alpha.nes') -> Path('/lb/Games/NES/Alpha.nes')
        - resolve_in('/lb', '/roms/Alpha.nes') -> Path('/roms/Alpha.nes')
    """
    if os.sep == '/':
        value = value.replace('\\', '/')
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = Path(root) / path
    return path


def canonical_path(path: Union[str, Path]) -> str:
    """
    Get the canonical form of an existing path.

    Symlinks, '.' and '..' components are resolved. Returns an empty string
    when the path does not exist, so callers can treat "missing" and
    "unresolvable" the same way.
    """
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError):
        return ''


def canonical_dir(path: Union[str, Path]) -> Optional[Path]:
    """Canonical directory path, or None if it is not an existing directory."""
    resolved = canonical_path(path)
    if not resolved or not os.path.isdir(resolved):
        return None
    return Path(resolved)
