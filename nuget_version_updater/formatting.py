"""Restore Visual Studio's two-line layout for empty tag pairs.

After saving, Visual Studio writes an element with no content as

    <FileUpgradeFlags>
    </FileUpgradeFlags>

while the XML writer produces ``<FileUpgradeFlags></FileUpgradeFlags>``.
This pass reopens a saved file and splits such pairs back onto two lines.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from . import config

logger = logging.getLogger(__name__)

_EMPTY_TAG_PAIR = re.compile(
    r"^(?P<indent>\s*)"
    r"<(?P<open>(?P<name>[^\s/>!?]+)(?:\s[^>]*)?)(?<!/)>"
    r"</(?P<close>[^>]+)>\s*$"
)

_BYTE_ORDER_MARK = "\ufeff"


def split_empty_tag_pairs(lines: Iterable[str]) -> Tuple[List[str], int]:
    """Return ``lines`` with every ``<Tag></Tag>`` line split in two.

    Both new lines keep the original indentation. A pair whose names
    differ is logged and passed through unchanged. A byte order mark at the
    start of a line is kept in front of the opening tag. The second item of
    the result is the number of pairs that were split.
    """
    output: List[str] = []
    replaced = 0
    for line in lines:
        bom = _BYTE_ORDER_MARK if line.startswith(_BYTE_ORDER_MARK) else ""
        match = _EMPTY_TAG_PAIR.match(line[len(bom):])
        if not match:
            output.append(line)
            continue

        if match.group("name") != match.group("close").strip():
            logger.warning("Unbalanced XML tag pair: %s", line.strip())
            output.append(line)
            continue

        indent = match.group("indent")
        output.append(f"{bom}{indent}<{match.group('open')}>")
        output.append(f"{indent}</{match.group('close').strip()}>")
        replaced += 1
    return output, replaced


def normalize_empty_tag_pairs(path: Path) -> bool:
    """Rewrite ``path`` in place with empty tag pairs split onto two lines.

    The lines are written to a temporary file beside ``path`` which
    replaces the original only when at least one pair was split. Errors are
    logged and leave ``path`` as it was.

    Returns:
        True when the file was rewritten
    """
    path = Path(path)
    temp_name: Optional[str] = None
    try:
        with open(path, "r", encoding=config.OUTPUT_ENCODING) as reader:
            lines = [line.rstrip("\r\n") for line in reader]

        updated, replaced = split_empty_tag_pairs(lines)

        fd, temp_name = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=str(path.parent))
        with os.fdopen(fd, "w", encoding=config.OUTPUT_ENCODING, newline="") as writer:
            for line in updated:
                writer.write(line + config.OUTPUT_NEWLINE)

        if not replaced:
            return False

        shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
        temp_name = None
        return True
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error updating XML tag formatting in file %s: %s", path, exc)
        return False
    finally:
        if temp_name and os.path.exists(temp_name):
            os.unlink(temp_name)
