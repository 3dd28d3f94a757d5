#!/usr/bin/env python3
"""
Media Maintenance

Brings the video index back in line with the files on disk and applies
the retention policy. Useful after videos were deleted or copied by hand,
or when the app has not run a sweep for a while.

Usage:
    python scripts/media_maintenance.py                # Dry run
    python scripts/media_maintenance.py --apply        # Actually change things
    python scripts/media_maintenance.py --days 14      # Custom retention age

Steps:
- Index entries whose file is gone are dropped
- Files in the videos directory that no index entry points to are reported
  (never deleted: they may be a copy still in progress)
- Videos older than the retention age are deleted
"""

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path

# Add parent directory to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import LOG_BACKUP_COUNT, LOG_DIR, LOG_MAINTENANCE_FILE
from media.config import MediaConfig
from media.implementations.local_media_store import LocalMediaStore
from media.managers.retention_manager import RetentionPolicy
from media.models.media_file import now_epoch_ms
from media.utils.path_utils import format_size

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """
    Setup logging to console and a daily rotated file.

    Falls back to ./logs when the system log directory is not writable.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    log_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(log_format)
    root.addHandler(console_handler)

    log_file = Path(LOG_DIR) / LOG_MAINTENANCE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        local_logs = Path(__file__).parent.parent / "logs"
        local_logs.mkdir(exist_ok=True)
        log_file = local_logs / LOG_MAINTENANCE_FILE
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        logger.warning(f"Cannot write to {LOG_DIR}, logging to {log_file}")

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(log_format)
    root.addHandler(file_handler)


def run_maintenance(
    store: LocalMediaStore,
    policy: RetentionPolicy,
    max_age_days: float,
    dry_run: bool = True,
) -> dict:
    """
    Reconcile the index, report orphans and sweep expired videos.

    A dry run only reads the index and the videos directory.

    Args:
        store: Initialized local media store
        policy: Retention policy for the store
        max_age_days: Retention age in days
        dry_run: If True, only report what would change

    Returns:
        Statistics dict with counts
    """
    logger.info("Starting media maintenance...")
    logger.info(f"Mode: {'DRY RUN (no changes)' if dry_run else 'APPLY (will delete)'}")

    entries = store.index.load()
    logger.info(f"Found {len(entries)} indexed videos")

    missing = [media for media in entries.values() if not store.payload_exists(media)]
    missing_ids = {media.id for media in missing}
    for media in missing:
        logger.warning(f"Missing file: {media.file_name} (id: {media.id})")

    orphans = store.find_orphans()
    for path in orphans:
        logger.warning(f"Unindexed file: {path}")

    if dry_run:
        now_ms = now_epoch_ms()
        expired = [
            media for media in entries.values()
            if media.id not in missing_ids and policy.is_expired(media, max_age_days, now_ms)
        ]
        expired_count = len(expired)
        reconciled = 0
        swept = 0
        swept_bytes = sum(media.size_bytes for media in expired)
        sweep_errors = 0
    else:
        reconciled = store.reconcile()
        report = policy.run(max_age_days)
        expired_count = report.candidates
        swept = report.deleted
        swept_bytes = report.total_size_bytes
        sweep_errors = report.errors

    stats = {
        "indexed_videos": len(entries),
        "missing_files": len(missing),
        "reconciled_entries": reconciled,
        "unindexed_files": len(orphans),
        "expired_videos": expired_count,
        "deleted_videos": swept,
        "freed_bytes": swept_bytes,
        "errors": sweep_errors,
        "dry_run": dry_run,
    }

    logger.info("=" * 60)
    logger.info("SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Indexed videos:       {stats['indexed_videos']}")
    logger.info(f"Missing files:        {stats['missing_files']}")
    logger.info(f"Unindexed files:      {stats['unindexed_files']}")
    logger.info(f"Older than {max_age_days:g} days:   {stats['expired_videos']}")
    if dry_run:
        logger.info(
            f"Would free:           {format_size(stats['freed_bytes'])} "
            "(use --apply to delete)",
        )
    else:
        logger.info(f"Dropped entries:      {stats['reconciled_entries']}")
        logger.info(f"Deleted videos:       {stats['deleted_videos']}")
        logger.info(f"Freed:                {format_size(stats['freed_bytes'])}")
        logger.info(f"Errors:               {stats['errors']}")
    logger.info("=" * 60)

    return stats


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Reconcile the video index and apply retention",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Actually drop stale entries and delete old videos (default is dry run)",
    )
    parser.add_argument(
        "--days",
        type=float,
        default=None,
        help="Retention age in days (default from media config)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to media.yaml (default from settings)",
    )
    args = parser.parse_args()

    setup_logging()

    try:
        config = MediaConfig(args.config)
        store = LocalMediaStore(config)
        store.initialize()

        max_age_days = args.days if args.days is not None else config.retention_days
        policy = RetentionPolicy(
            store,
            max_age_days=max_age_days,
            batch_size=config.sweep_batch_size,
        )

        stats = run_maintenance(store, policy, max_age_days, dry_run=not args.apply)

        if args.apply and stats["errors"]:
            logger.warning(f"Maintenance finished with {stats['errors']} errors")
            sys.exit(1)
        elif not args.apply and (stats["missing_files"] or stats["expired_videos"]):
            logger.info("Run with --apply to make these changes")
        else:
            logger.info("Media store is clean")

    except Exception as e:
        logger.error(f"Maintenance failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
