"""Text renderers for every kind of menu node.

Each function concatenates a node's fields and its children's summaries in a
fixed order.  Children are never reordered or filtered.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..core.models import Community, Event, EventsGroup, Member, Record, Sprint, Team

SPRINT_SEPARATOR = "------------"


def _rows(rows: Sequence[str]) -> str:
    # a non-empty block of free rows is closed by one blank line
    if not rows:
        return ""
    return "".join(f"{row}\n" for row in rows) + "\n"


def _member_line(member: Member) -> str:
    return f"{member.surname} {member.name} {member.link}\n"


def category_page(title: str, info: str) -> str:
    return f"{title}\n\n{info}\n"


def team_page(team: Team) -> str:
    parts = [f"{team.name}\n\n", _rows(team.rows)]
    for member in team.members:
        parts.append(_member_line(member))
        parts.append(f"{member.skills}\n")
        if member.phone:
            parts.append(f"{member.phone}\n")
        parts.append("\n")
    return "".join(parts)


def sprint_page(sprint: Sprint) -> str:
    parts = [f"{sprint.date}\n{sprint.goal}\n\n"]
    parts.extend(f"{row.title} - {row.value}\n" for row in sprint.rows)
    parts.append("\n")
    return "".join(parts)


def sprints_page(title: str, sprints: Iterable[Sprint]) -> str:
    """All sprints on one page, each block closed by a separator line."""
    parts = [f"{title}\n\n"]
    for sprint in sprints:
        parts.append(sprint_page(sprint))
        parts.append(f"{SPRINT_SEPARATOR}\n\n")
    return "".join(parts)


def community_page(community: Community, mentors_title: str) -> str:
    parts = [f"{community.name}\n\n", _rows(community.rows), f"{mentors_title}\n"]
    parts.extend(_member_line(mentor) for mentor in community.mentors)
    parts.append("\n")
    return "".join(parts)


def events_group_page(group: EventsGroup) -> str:
    return f"{group.title}\n\n{group.info}\n" + _rows(group.rows)


def event_page(event: Event) -> str:
    parts = [f"{event.key}\n\n{event.info}\n"]
    parts.extend(f"{link.title} {link.value}\n" for link in event.links)
    return "".join(parts)


def record_page(record: Record) -> str:
    return f"{record.title}\n\n" + _rows(record.rows)
