"""
Dynasty -> graph group mapping, used only to color graph nodes.

Labels are free text ("唐代", "南宋", "魏晋南北朝", ...), so matching is by
substring containment. Several names can occur in one label, so the list is
checked top-down and the first hit wins.
"""

from __future__ import annotations

OTHER_GROUP = 99

DYNASTY_GROUPS: tuple[tuple[str, int], ...] = (
    ("唐", 1),  # Tang
    ("宋", 2),  # Song
    ("清", 3),  # Qing
    ("明", 4),  # Ming
    ("魏晋", 5),  # Wei-Jin
    ("汉", 6),  # Han
)


def dynasty_group(dynasty: str | None) -> int:
    label = dynasty or ""
    for needle, group in DYNASTY_GROUPS:
        if needle in label:
            return group
    return OTHER_GROUP
