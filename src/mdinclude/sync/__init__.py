from mdinclude.sync.errors import IncludeSyncError, MalformedMarkerError, MissingInputError, MissingReferenceError, WriteFailureError
from mdinclude.sync.rewriter import ScanState, SyncResult, render, rewrite_lines, sync_document

__all__ = [
    "IncludeSyncError",
    "MalformedMarkerError",
    "MissingInputError",
    "MissingReferenceError",
    "WriteFailureError",
    "ScanState",
    "SyncResult",
    "render",
    "rewrite_lines",
    "sync_document",
]
