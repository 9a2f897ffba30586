"""
lbcatalog - LaunchBox metadata ingester

Reads a LaunchBox installation (emulator and platform XML, per-platform game
lists, image/music/video folders) and folds it into a shared, deduplicated
in-memory game catalog for a frontend.
"""

__version__ = "0.3.0"
__author__ = "jbruns"
