"""Directory traversal: find project files and hand them to the patcher."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from . import config
from .models import PatchResult, ScanProgress, ScanSummary
from .patcher import DocumentPatcher

logger = logging.getLogger(__name__)


def find_candidate_files(directory: Path) -> Tuple[List[Path], Optional[Path], List[Path]]:
    """List what ``directory`` holds for the updater.

    Returns the project files (.csproj/.vbproj), the packages.config file
    (or None) and the subdirectories, each in name order. Symlinked
    directories are skipped. Raises ``OSError`` when the directory cannot be
    listed.
    """
    project_files: List[Path] = []
    packages_config: Optional[Path] = None
    subdirectories: List[Path] = []

    for entry in sorted(Path(directory).iterdir()):
        if entry.is_dir():
            if not entry.is_symlink():
                subdirectories.append(entry)
            continue
        if not entry.is_file():
            continue
        name = entry.name.lower()
        if name.endswith(config.PROJECT_FILE_SUFFIXES):
            project_files.append(entry)
        elif name == config.PACKAGES_CONFIG_NAME:
            packages_config = entry

    return project_files, packages_config, subdirectories


class DirectoryWalker:
    """Depth-first scan feeding matching files to a :class:`DocumentPatcher`."""

    def __init__(
        self,
        patcher: DocumentPatcher,
        progress: ScanProgress,
        base_path: Optional[Path] = None,
        summary: Optional[ScanSummary] = None,
    ):
        self.patcher = patcher
        self.progress = progress
        self.base_path = base_path
        self.summary = summary if summary is not None else ScanSummary()

    def display_path(self, path: Path) -> str:
        """Render ``path`` relative to the base path used in log output."""
        if not self.base_path:
            return str(path)
        try:
            return str(path.relative_to(self.base_path))
        except ValueError:
            return str(path)

    def scan(self, directory: Path, recurse: bool = False) -> bool:
        """Process ``directory`` and, with ``recurse``, every subdirectory below it.

        Returns False when any file or subdirectory failed; the scan still
        visits everything else.
        """
        directory = Path(directory)
        try:
            project_files, packages_config, subdirectories = find_candidate_files(directory)
        except OSError as exc:
            self.progress.flush()
            logger.error("Error scanning directory %s: %s", directory, exc)
            return False

        if recurse:
            self.progress.tick()

        success = True
        for project_file in project_files:
            if not self._process(project_file, self.patcher.update_project_file):
                success = False

        if packages_config is not None:
            if not self._process(packages_config, self.patcher.update_packages_config):
                success = False

        if not recurse:
            return success

        for subdirectory in subdirectories:
            if self.scan(subdirectory, recurse=True):
                continue
            self.progress.flush()
            logger.warning("Error processing directory %s; will continue searching", subdirectory)
            success = False

        return success

    def _process(self, path: Path, update: Callable[[Path, Optional[str]], PatchResult]) -> bool:
        self.progress.flush()
        self.progress.touch()

        display_name = self.display_path(path)
        if self.patcher.request.verbose:
            logger.debug("  processing %s", display_name)

        result = update(path, display_name)
        self.summary.record(result)
        return result.ok
