"""Extract ClickUp task IDs from free text (branch names, PR titles, commit messages).

Two patterns are applied independently and their matches concatenated:

- ``CU-abc123`` / ``cu_abc123`` (any case of ``cu``, ``-`` or ``_`` separator)
- ``#abc123``

Only the alphanumeric run is returned, in its original case. Results are
not deduplicated here; callers do that after merging all sources.
"""

import re
from typing import List

TASK_ID_PATTERNS = (
    re.compile(r"[cC][uU][-_]([a-zA-Z0-9]+)"),
    re.compile(r"#([a-zA-Z0-9]+)"),
)


def extract_task_ids(text: str | None) -> List[str]:
    """Return every task ID candidate found in text (empty list for None/empty)."""
    if not text:
        return []
    task_ids: List[str] = []
    for pattern in TASK_ID_PATTERNS:
        task_ids.extend(pattern.findall(text))
    return task_ids
