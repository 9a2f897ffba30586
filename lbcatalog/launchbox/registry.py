"""LaunchBox emulator and platform registry parsing."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree

from lbcatalog.paths import canonical_path, resolve_in
from .document import DocumentError, open_document
from .fields import MSG_PREFIX, child_text

logger = logging.getLogger(__name__)

EMULATORS_XML = Path('Data') / 'Emulators.xml'
PLATFORMS_DIR = Path('Data') / 'Platforms'


@dataclass
class Emulator:
    """Represents an <Emulator> defined in Emulators.xml."""
    id: str
    app_path: str  # Canonical path of the executable
    cmd_params: str = ''

    def incomplete(self) -> bool:
        return not self.id or not self.app_path


@dataclass
class Platform:
    """Represents an <EmulatorPlatform> defined in Emulators.xml."""
    name: str = ''
    default_emu_id: str = ''
    cmd_params: str = ''
    xml_path: str = ''  # Canonical path of Data/Platforms/<name>.xml

    def incomplete(self) -> bool:
        return not self.default_emu_id or not self.name or not self.xml_path


@dataclass
class EmulatorData:
    """Everything read from Emulators.xml."""
    emus: Dict[str, Emulator] = field(default_factory=dict)
    platforms: List[Platform] = field(default_factory=list)


class RegistryError(Exception):
    """
    Emulators.xml reading errors.

    Attributes:
        data: Entries read before the error (empty if none)
    """

    def __init__(self, message: str, data: Optional[EmulatorData] = None):
        super().__init__(message)
        self.data = data if data is not None else EmulatorData()


def read_emulators_xml(lb_dir: Union[str, Path]) -> EmulatorData:
    """
    Read the emulator and platform registry of an installation.

    Problems with the document itself are logged; the entries read before
    the problem are kept. The caller decides what to do when nothing was
    found.

    Args:
        lb_dir: LaunchBox installation root

    Returns:
        EmulatorData with validated emulators and platforms
    """
    lb_dir = Path(lb_dir)
    try:
        out = parse_emulators_xml(lb_dir / EMULATORS_XML, lb_dir)
    except RegistryError as e:
        logger.warning(f"{MSG_PREFIX} {e}")
        out = e.data

    _remove_platforms_without_emulator(out)
    return out


def parse_emulators_xml(xml_path: Path, lb_dir: Path) -> EmulatorData:
    """
    Parse Emulators.xml without cross-validation.

    Args:
        xml_path: Path to Emulators.xml
        lb_dir: Installation root, used to resolve relative paths

    Returns:
        EmulatorData with complete entries only

    Raises:
        RegistryError: If the file cannot be read to its end or is not a
                       LaunchBox document; `data` holds the entries read
                       before the error
    """
    platforms_dir = lb_dir / PLATFORMS_DIR
    out = EmulatorData()

    try:
        for elem in open_document(xml_path):
            if elem.tag == 'EmulatorPlatform':
                platform = _parse_platform_element(elem, platforms_dir)
                if platform.incomplete():
                    logger.debug(f"{MSG_PREFIX} incomplete platform entry `{platform.name}` ignored")
                    continue
                out.platforms.append(platform)
            elif elem.tag == 'Emulator':
                emu = _parse_emulator_element(elem, lb_dir)
                if emu.incomplete():
                    continue
                if emu.id in out.emus:
                    logger.debug(f"{MSG_PREFIX} duplicate emulator id `{emu.id}`, keeping the first one")
                    continue
                out.emus[emu.id] = emu
    except DocumentError as e:
        raise RegistryError(str(e), out) from e

    return out


def _parse_platform_element(elem: etree._Element, platforms_dir: Path) -> Platform:
    """Parse a single <EmulatorPlatform> element."""
    platform = Platform(
        name=child_text(elem, 'Platform'),
        default_emu_id=child_text(elem, 'Emulator'),
        cmd_params=child_text(elem, 'CommandLine'),
    )
    if platform.name:
        platform.xml_path = canonical_path(platforms_dir / f"{platform.name}.xml")
    return platform


def _parse_emulator_element(elem: etree._Element, lb_dir: Path) -> Emulator:
    """Parse a single <Emulator> element."""
    emu = Emulator(
        id=child_text(elem, 'ID'),
        app_path='',
        cmd_params=child_text(elem, 'CommandLine'),
    )

    raw_path = child_text(elem, 'ApplicationPath')
    if raw_path:
        candidate = resolve_in(lb_dir, raw_path)
        emu.app_path = canonical_path(candidate)
        if not emu.app_path:
            logger.warning(
                f"{MSG_PREFIX} emulator `{candidate}` doesn't seem to exist, entry ignored"
            )
    return emu


def _remove_platforms_without_emulator(data: EmulatorData) -> None:
    """Drop platforms whose default emulator is not in the emulator table."""
    kept = []
    for platform in data.platforms:
        if platform.default_emu_id not in data.emus:
            logger.warning(
                f"{MSG_PREFIX} emulator platform `{platform.name}` refers to "
                f"a missing emulator id, entry ignored"
            )
            continue
        kept.append(platform)
    data.platforms = kept
