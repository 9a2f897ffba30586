"""
Shared pytest fixtures and utilities for the lbcatalog test suite.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest
import yaml
from lxml import etree

from lbcatalog.catalog.store import SearchContext

Record = Tuple[str, Dict[str, str]]


def write_launchbox_xml(path: Path, records: Iterable[Record], root_tag: str = 'LaunchBox') -> Path:
    """
    Write a LaunchBox-style document.

    Args:
        path: Destination file
        records: (element tag, {child tag: text}) pairs
        root_tag: Root element name
    """
    root = etree.Element(root_tag)
    for tag, fields in records:
        elem = etree.SubElement(root, tag)
        for child_tag, text in fields.items():
            etree.SubElement(elem, child_tag).text = text

    path.parent.mkdir(parents=True, exist_ok=True)
    etree.ElementTree(root).write(
        str(path), xml_declaration=True, encoding='utf-8', pretty_print=True
    )
    return path


class InstallBuilder:
    """
    Builds a fake LaunchBox installation below a temp directory.

    Usage:
        lb.add_file('Games/NES/Alpha.nes')
        lb.write_emulators(emulators=[...], platforms=[...])
        lb.write_platform('NES', games=[...], addiapps=[...])
    """

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def add_file(self, rel_path: str, data: bytes = b'data') -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def write_emulators(
        self,
        emulators: Iterable[Dict[str, str]] = (),
        platforms: Iterable[Dict[str, str]] = (),
    ) -> Path:
        records: List[Record] = [('Emulator', e) for e in emulators]
        records += [('EmulatorPlatform', p) for p in platforms]
        return write_launchbox_xml(self.root / 'Data' / 'Emulators.xml', records)

    def write_platform(
        self,
        name: str,
        games: Iterable[Dict[str, str]] = (),
        addiapps: Iterable[Dict[str, str]] = (),
        extra: Optional[Iterable[Record]] = None,
    ) -> Path:
        records: List[Record] = [('Game', g) for g in games]
        records += [('AdditionalApplication', a) for a in addiapps]
        records += list(extra or [])
        return write_launchbox_xml(self.root / 'Data' / 'Platforms' / f'{name}.xml', records)

    def write_raw_platform(self, name: str, content: str) -> Path:
        path = self.root / 'Data' / 'Platforms' / f'{name}.xml'
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return path


@pytest.fixture
def lb(tmp_path: Path) -> InstallBuilder:
    """Empty LaunchBox installation in the temp workspace."""
    return InstallBuilder(tmp_path / 'LaunchBox')


@pytest.fixture
def nes_install(lb: InstallBuilder) -> InstallBuilder:
    """
    Installation with one emulator (RetroArch) and one platform (NES).

    No games are declared; tests write Data/Platforms/NES.xml themselves.
    """
    lb.add_file('Emulators/RetroArch/retroarch.exe')
    lb.write_emulators(
        emulators=[{
            'ID': 'emu-ra',
            'ApplicationPath': 'Emulators\\RetroArch\\retroarch.exe',
            'CommandLine': '-f',
        }],
        platforms=[{
            'Emulator': 'emu-ra',
            'Platform': 'NES',
            'CommandLine': '-L cores\\nestopia.dll',
        }],
    )
    lb.write_platform('NES')
    return lb


@pytest.fixture
def sctx() -> SearchContext:
    """Fresh, empty catalog."""
    return SearchContext()


@pytest.fixture
def make_config(tmp_path: Path):
    """
    Create a minimal config.yaml in a temp directory.

    Usage:
        path = make_config({"launchbox": {"command_fallback": "none"}})
    """

    def _builder(overrides: Optional[dict] = None) -> Path:
        base = {
            'launchbox': {'installdir': str(tmp_path / 'LaunchBox')},
            'logging': {'level': 'INFO', 'console': False},
        }
        for key, value in (overrides or {}).items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = {**base[key], **value}
            else:
                base[key] = value

        cfg_path = tmp_path / 'config.yaml'
        cfg_path.write_text(yaml.safe_dump(base))
        return cfg_path

    return _builder
