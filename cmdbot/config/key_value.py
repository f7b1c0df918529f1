"""Reader/writer for the flat ``key:value`` files used by the bot.

Both ``config.ini`` and the dynamic command file use the same format: one
entry per line, key and value separated by the first ``:``.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path


def parse_key_value_text(text: str, *, source: str = "<text>") -> dict[str, str]:
    entries: dict[str, str] = {}
    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.rstrip("\r")
        if not line.strip():
            continue
        key, sep, value = line.partition(":")
        if not sep:
            logging.warning(f"⚠️ Skipping line without ':' file={source} line={lineno}")
            continue
        entries[key] = value
    return entries


def read_key_value_file(path: str | os.PathLike[str]) -> dict[str, str]:
    """Read ``path`` into an ordered dict.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    with open(path, encoding="utf-8") as f:
        return parse_key_value_text(f.read(), source=str(path))


def format_key_value_text(entries: Mapping[str, str]) -> str:
    return "".join(f"{key}:{value}\n" for key, value in entries.items())


def write_key_value_file(
    path: str | os.PathLike[str], entries: Mapping[str, str], *, backup: bool = True
) -> None:
    """Atomically replace ``path`` with ``entries``.

    The previous file, if any, is kept as ``<path>.bak``.
    """
    target = Path(path)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)
    if backup and target.is_file():
        try:
            shutil.copy2(target, target.with_name(f"{target.name}.bak"))
        except OSError as e:
            logging.debug(f"💥 Backup failed file={target}: {str(e)}")

    temp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as tmp:
            temp_path = tmp.name
            tmp.write(format_key_value_text(entries))
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(temp_path, target)
    except OSError:
        if temp_path and os.path.exists(temp_path):
            try:
                os.unlink(temp_path)
            except OSError:
                pass
        logging.error(f"💥 Atomic save failed file={target}")
        raise
