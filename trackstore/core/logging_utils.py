import logging

# Project logger; configure_logging() tunes the root it propagates to.
logger = logging.getLogger("trackstore")


def log_section(title: str) -> None:
    """
    Log a top-level section header.
    """
    logger.info("")  # blank line for readability
    logger.info("=== %s ===", title)


def log_info(message: str, *args: object) -> None:
    logger.info(message, *args)


def log_step(message: str, *args: object) -> None:
    """
    Action step / ongoing work.
    """
    logger.info("→ " + message, *args)


def log_success(message: str, *args: object) -> None:
    logger.info("✅ " + message, *args)


def log_warning(message: str, *args: object) -> None:
    """
    Non-fatal problem: a record skipped during a scan, a genre file that
    could not be used, an asset left behind by a cascade delete.
    """
    logger.warning("⚠️ " + message, *args)


def log_error(message: str, *args: object) -> None:
    logger.error("❌ " + message, *args)


def log_storage_failure(action: str, track_id: str, exc: BaseException) -> None:
    """
    Report a storage failure that the caller absorbs into a None / False
    result instead of raising.

    Example:
      log_storage_failure("update", "1712-ab12cd34", exc)
      -> "❌ Failed to update track 1712-ab12cd34: [Errno 28] No space left on device"
    """
    log_error("Failed to %s track %s: %s", action, track_id, exc)


def log_progress(
    current: int,
    total: int,
    prefix: str = "",
) -> None:
    """
    Simple progress logging.

    Example:
      log_progress(10, 50, prefix="Seeding tracks")
      -> "Seeding tracks 10/50 (20.0%)"
    """
    if total <= 0:
        total = 1

    fraction = max(0.0, min(1.0, current / total))
    percent = fraction * 100

    if prefix:
        logger.info("%s %d/%d (%.1f%%)", prefix, current, total, percent)
    else:
        logger.info("%d/%d (%.1f%%)", current, total, percent)
