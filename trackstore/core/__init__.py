"""Public façade for the trackstore.core package.

This module exposes logging helpers, filesystem utilities, errors and the
base models that are safe to import from other packages. Callers should
import these cross-cutting concerns from this façade instead of the internal
submodules.
"""

from .errors import StorageIOError, TrackStoreError
from .fs_utils import (
    ensure_dir,
    ensure_parent_dir,
    iter_json_files,
    read_json,
    remove_file,
    write_bytes,
    write_json,
)
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
    log_storage_failure,
)
from .models import (
    BatchDeleteResult,
    SortField,
    SortOrder,
    Track,
    TrackDraft,
    TrackPage,
    TrackQuery,
)
from .slug import create_slug

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_storage_failure",
    "log_progress",
    "ensure_parent_dir",
    "ensure_dir",
    "iter_json_files",
    "write_json",
    "write_bytes",
    "read_json",
    "remove_file",
    "TrackStoreError",
    "StorageIOError",
    "Track",
    "TrackDraft",
    "TrackQuery",
    "TrackPage",
    "SortField",
    "SortOrder",
    "BatchDeleteResult",
    "create_slug",
]
