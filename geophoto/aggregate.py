import logging
import os
import threading
from pathlib import Path
from typing import Dict, Iterator, Optional

from .errors import AggregationCancelled, GeoPhotoError
from .exif import record_from_file
from .record import GeoRecord

logger = logging.getLogger(__name__)


def _check_cancelled(cancel: Optional[threading.Event], root) -> None:
    if cancel is not None and cancel.is_set():
        raise AggregationCancelled(f"Walk of {root} was cancelled")


def iter_files(root, cancel: Optional[threading.Event] = None) -> Iterator[Path]:
    """
    Yields every regular file under ``root``, recursively.

    Pipes, sockets, device files and broken symlinks are skipped, as are
    entries the walk cannot read (permission denied, vanished directories);
    a missing root simply yields nothing.
    """

    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable entry {error.filename}: {error.strerror or error}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        _check_cancelled(cancel, root)
        dirnames.sort()
        for filename in sorted(filenames):
            file_path = Path(dirpath) / filename
            if not file_path.is_file():
                logger.debug(f"Skipping {file_path}: not a regular file")
                continue
            yield file_path


def aggregate(root, cancel: Optional[threading.Event] = None) -> Dict[int, GeoRecord]:
    """
    Collects GPS-tagged photos under a directory, keyed by GPS Unix time.

    Files that cannot be opened, carry no EXIF, or lack any of the six GPS
    tags are skipped. When two photos share a timestamp, the one visited
    later replaces the earlier one.

    Args:
        root: Directory to walk.
        cancel: Optional event; setting it aborts the walk.

    Returns:
        A new dict mapping Unix timestamp -> GeoRecord.

    Raises:
        AggregationCancelled: if ``cancel`` was set before the walk finished.
    """
    collection: Dict[int, GeoRecord] = {}
    visited = skipped = collisions = 0

    for file_path in iter_files(root, cancel):
        _check_cancelled(cancel, root)
        visited += 1

        try:
            record = record_from_file(file_path)
        except GeoPhotoError as e:
            logger.debug(f"Skipping {file_path}: {e}")
            skipped += 1
            continue

        if not record.is_complete:
            logger.debug(f"Skipping {file_path}: missing {', '.join(record.missing_fields())}")
            skipped += 1
            continue

        key = record.unix()
        if key in collection:
            logger.debug(f"Timestamp {key} of {file_path} replaces {collection[key].path}")
            collisions += 1
        collection[key] = record

    logger.info(
        f"Aggregated {len(collection)} photo(s) from {root}: "
        f"{visited} file(s) visited, {skipped} skipped, {collisions} timestamp collision(s)"
    )
    return collection
