"""One update run over a directory tree."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import ConfigurationError
from .models import ScanProgress, ScanSummary, UpdateRequest
from .patcher import DocumentPatcher
from .versioning import parse_version
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)


class UpdateSession:
    """Resolves an :class:`UpdateRequest` once and runs it over a directory tree.

    Args:
        request: Package name, unparsed target version and flags.
        write: Destination for progress markers. Defaults to stdout.
        clock: Monotonic clock used to pace progress markers.
    """

    def __init__(
        self,
        request: UpdateRequest,
        write: Optional[Callable[[str], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.request = request
        self.write = write
        self.clock = clock
        self.summary = ScanSummary()

    def resolve_request(self) -> UpdateRequest:
        """Validate the request and parse its target version.

        Raises:
            ConfigurationError: the package name is blank
            InvalidVersionFormat: the version is empty or not dotted numeric
        """
        name = (self.request.package_name or "").strip()
        if not name:
            raise ConfigurationError("The NuGet package name must be defined")
        target = parse_version(self.request.package_version)
        return replace(self.request, package_name=name, target_version=target)

    def run(self, root: Union[str, Path] = ".", recurse: bool = False) -> bool:
        """Scan ``root`` and return True when every directory and file was processed."""
        request = self.resolve_request()

        root_dir = Path(root or ".").resolve()
        logger.info(
            "Searching for Visual Studio projects referencing %s to assure each uses version %s",
            request.package_name,
            request.package_version.strip(),
        )
        if recurse:
            logger.info("Searching %s and subdirectories", root_dir)
        else:
            logger.info("Only searching %s; use --recurse to include subdirectories", root_dir)

        base_path = root_dir.parent if root_dir.parent != root_dir else None
        progress = ScanProgress(write=self.write, clock=self.clock)
        self.summary = ScanSummary()
        walker = DirectoryWalker(DocumentPatcher(request), progress, base_path, self.summary)

        success = walker.scan(root_dir, recurse=recurse)
        progress.flush()
        return success
