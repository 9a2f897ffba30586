"""LaunchBox metadata provider."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from lbcatalog.catalog.store import SearchContext
from lbcatalog.paths import canonical_dir, home_path
from .assets import find_assets
from .fields import MSG_PREFIX
from .ingester import CommandFallback, IngestResult, PlatformIngester, PlatformXMLError
from .registry import read_emulators_xml

logger = logging.getLogger(__name__)


@dataclass
class ProviderResult:
    """Outcome of one provider run."""
    installdir: Optional[Path] = None
    platforms: List[IngestResult] = field(default_factory=list)
    failed_documents: List[str] = field(default_factory=list)

    @property
    def games_added(self) -> int:
        return sum(p.games_added for p in self.platforms)


def find_installation() -> Optional[Path]:
    """Return the default LaunchBox directory (~/LaunchBox) if it exists."""
    possible_path = home_path() / 'LaunchBox'
    if possible_path.is_dir():
        logger.info(f"{MSG_PREFIX} found directory: `{possible_path}`")
        return possible_path
    return None


class LaunchboxProvider:
    """
    Imports games from a LaunchBox installation.

    Options:
        installdir: Installation directory; defaults to ~/LaunchBox
        command_fallback: CommandFallback value (or its string form)
    """

    name = 'launchbox'
    display_name = 'LaunchBox'

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(options or {})

    def installation_dir(self) -> Optional[Path]:
        """Installation directory from the options, or the default one."""
        installdir = self.options.get('installdir')
        if installdir:
            path = canonical_dir(Path(str(installdir)).expanduser())
            if path is None:
                logger.warning(f"{MSG_PREFIX} `{installdir}` is not a directory")
            return path
        return find_installation()

    def command_fallback(self) -> CommandFallback:
        return CommandFallback(self.options.get('command_fallback', CommandFallback.EMULATOR_PATH))

    def find_lists(self, sctx: SearchContext) -> ProviderResult:
        """
        Import everything from the installation into the catalog.

        Each platform is processed completely (games, additional
        applications, media) before the next one starts. A broken platform
        document is reported; whatever was read before the break is kept.

        Args:
            sctx: Shared catalog, possibly already filled by other providers

        Returns:
            ProviderResult with per-platform counters
        """
        result = ProviderResult()

        lb_dir = self.installation_dir()
        if lb_dir is None:
            logger.info(f"{MSG_PREFIX} no installation found")
            return result
        result.installdir = lb_dir

        emu_data = read_emulators_xml(lb_dir)
        if not emu_data.emus:
            logger.warning(f"{MSG_PREFIX} no emulator settings found")
            return result
        if not emu_data.platforms:
            logger.warning(f"{MSG_PREFIX} no platforms found")
            return result

        ingester = PlatformIngester(lb_dir, emu_data.emus, self.command_fallback())
        for platform in emu_data.platforms:
            try:
                result.platforms.append(ingester.process_platform_xml(platform, sctx))
            except PlatformXMLError as e:
                logger.warning(f"{MSG_PREFIX} {e}")
                result.failed_documents.append(platform.xml_path)
                if e.result is not None:
                    result.platforms.append(e.result)
            find_assets(lb_dir, platform, sctx)

        logger.info(
            f"{MSG_PREFIX} {result.games_added} games added from "
            f"{len(result.platforms)} platforms"
        )
        return result
