"""Cache module for revcache.

This package provides the per-repository revision cache:
- revisions: RevisionsCache and the merge aggregate key helper
"""

from revcache.cache.revisions import (
    RevisionsCache,
    merge_files_key,
)


__all__ = [
    "RevisionsCache",
    "merge_files_key",
]
