"""Reserved operation identifiers.

Writes the container triggers on its own are tagged with these ids when
they reach ``on_state_will_change`` / ``on_state_did_change`` so hooks can
tell them apart from caller-supplied ``patch`` / ``execute`` ids.
"""

from __future__ import annotations

RESET_ID = "__reset__"
UNDO_ID = "__undo__"
REDO_ID = "__redo__"

RESERVED_IDS: frozenset[str] = frozenset({RESET_ID, UNDO_ID, REDO_ID})
