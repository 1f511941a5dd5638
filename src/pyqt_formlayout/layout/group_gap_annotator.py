"""
Group transition marking.

A gap is inserted only where one named group is directly followed by a
different named group. The first group, a continuation of the same group, and
a group that resumes after an ungrouped field are never marked.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .layout_config import GroupConfig, Length, LayoutConfig


@dataclass(frozen=True)
class GroupMark:
    is_group_start: bool = False
    gap: Optional[Length] = None


def annotate_groups(groups: Sequence[Optional[str]], group_config: GroupConfig,
                    layout_config: LayoutConfig) -> List[GroupMark]:
    """
    Mark group starts for resolved groups given in document order.

    Returns:
        One GroupMark per input entry.
    """
    marks: List[GroupMark] = []
    previous_group = ""
    for group in groups:
        group = group or ""
        if not group:
            previous_group = ""
            marks.append(GroupMark())
            continue

        if previous_group and previous_group != group:
            settings = group_config.get(group)
            gap = settings.gap_before if settings is not None else None
            if gap is None:
                gap = layout_config.group_gap
            marks.append(GroupMark(is_group_start=True, gap=gap))
        else:
            marks.append(GroupMark())
        previous_group = group
    return marks
