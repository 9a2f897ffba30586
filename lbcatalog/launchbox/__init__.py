"""
LaunchBox provider package for lbcatalog.

Reads emulator/platform definitions, platform game lists, additional
applications and media folders of a LaunchBox installation.
"""

from .registry import Emulator, EmulatorData, Platform, read_emulators_xml
from .ingester import CommandFallback, IngestResult, PlatformIngester, PlatformXMLError
from .addiapps import merge_additional_apps, store_addiapp
from .assets import find_assets
from .provider import LaunchboxProvider, ProviderResult, find_installation

__all__ = [
    'Emulator',
    'EmulatorData',
    'Platform',
    'read_emulators_xml',
    'CommandFallback',
    'IngestResult',
    'PlatformIngester',
    'PlatformXMLError',
    'merge_additional_apps',
    'store_addiapp',
    'find_assets',
    'LaunchboxProvider',
    'ProviderResult',
    'find_installation',
]
