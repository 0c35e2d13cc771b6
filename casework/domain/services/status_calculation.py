"""Derived status of a collective process.

A collective process has no stored status. Its status is calculated from
the case statuses of its individual processes:

- Processes without a case status are skipped.
- The breakdown is sorted by count (descending), then by Portuguese name.
- Display text is "Name" for a single process, "N Name" for several
  processes sharing one status, and "N Name, M Name" otherwise.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from uuid import UUID

from casework.domain.models.case_status import CaseStatus
from casework.domain.models.individual_process import IndividualProcess

NO_PROCESSES_TEXT = {"pt": "Sem processos individuais", "en": "No individual processes"}
NO_STATUS_TEXT = {"pt": "Sem status definido", "en": "No status defined"}


@dataclass(frozen=True)
class StatusBreakdownEntry:
    """Number of member processes in one case status."""

    case_status_id: UUID
    name: str
    name_en: str | None
    color: str | None
    count: int

    def display_name(self, locale: str) -> str:
        if locale == "en" and self.name_en:
            return self.name_en
        return self.name


@dataclass(frozen=True)
class CollectiveStatusSummary:
    """Calculated status of a collective process.

    Attributes:
        display_text: Portuguese display text.
        display_text_en: English display text.
        breakdown: Per-status counts, most common first.
        total_processes: Number of member processes (with or without status).
        has_multiple_statuses: More than one distinct status in the breakdown.
    """

    display_text: str
    display_text_en: str
    breakdown: tuple[StatusBreakdownEntry, ...]
    total_processes: int
    has_multiple_statuses: bool

    def text_for(self, locale: str) -> str:
        return self.display_text_en if locale == "en" else self.display_text

    @property
    def most_common(self) -> StatusBreakdownEntry | None:
        return most_common_status(self.breakdown)

    @property
    def is_uniform(self) -> bool:
        return has_uniform_status(self.breakdown)

    @property
    def color(self) -> str | None:
        top = self.most_common
        return top.color if top else None


def get_status_breakdown(
    processes: Iterable[IndividualProcess],
    case_statuses: Mapping[UUID, CaseStatus],
) -> list[StatusBreakdownEntry]:
    """Group processes by case status.

    Args:
        processes: Member processes.
        case_statuses: Case statuses by id; processes whose status is
            missing from the mapping are skipped.

    Returns:
        Breakdown sorted by count desc, then name.
    """
    counts: dict[UUID, int] = {}
    for process in processes:
        if process.case_status_id is None or process.case_status_id not in case_statuses:
            continue
        counts[process.case_status_id] = counts.get(process.case_status_id, 0) + 1

    entries = []
    for status_id, count in counts.items():
        status = case_statuses[status_id]
        entries.append(
            StatusBreakdownEntry(
                case_status_id=status_id,
                name=status.name,
                name_en=status.name_en,
                color=status.color,
                count=count,
            )
        )
    entries.sort(key=lambda e: (-e.count, e.name.casefold()))
    return entries


def format_status_breakdown(
    breakdown: Iterable[StatusBreakdownEntry], locale: str = "pt"
) -> str:
    """Render a breakdown as display text in pt or en."""
    entries = list(breakdown)
    if not entries:
        return NO_STATUS_TEXT["en" if locale == "en" else "pt"]

    if len(entries) == 1:
        only = entries[0]
        if only.count == 1:
            return only.display_name(locale)
        return f"{only.count} {only.display_name(locale)}"

    return ", ".join(f"{e.count} {e.display_name(locale)}" for e in entries)


def calculate_collective_status(
    processes: Iterable[IndividualProcess],
    case_statuses: Mapping[UUID, CaseStatus],
) -> CollectiveStatusSummary:
    """Calculate the derived status of a collective process."""
    members = list(processes)
    if not members:
        return CollectiveStatusSummary(
            display_text=NO_PROCESSES_TEXT["pt"],
            display_text_en=NO_PROCESSES_TEXT["en"],
            breakdown=(),
            total_processes=0,
            has_multiple_statuses=False,
        )

    breakdown = get_status_breakdown(members, case_statuses)
    return CollectiveStatusSummary(
        display_text=format_status_breakdown(breakdown, "pt"),
        display_text_en=format_status_breakdown(breakdown, "en"),
        breakdown=tuple(breakdown),
        total_processes=len(members),
        has_multiple_statuses=len(breakdown) > 1,
    )


def most_common_status(
    breakdown: Iterable[StatusBreakdownEntry],
) -> StatusBreakdownEntry | None:
    entries = list(breakdown)
    return entries[0] if entries else None


def has_uniform_status(breakdown: Iterable[StatusBreakdownEntry]) -> bool:
    return len(list(breakdown)) == 1
