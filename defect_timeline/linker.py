"""
Linking issue-tracker tickets to commits and releases.
"""

import logging
from datetime import datetime

from .models import BugTicket, Commit, Release, TicketRecord
from .timeline import release_for_date, release_from_name

logger = logging.getLogger(__name__)


def find_related_commits(commits: list[Commit], key: str) -> list[Commit]:
    """Commits whose message mentions the ticket key (case-sensitive substring)"""
    return [c for c in commits if key in c.msg]


def find_fixed_release(releases: list[Release], related: list[Commit]) -> Release | None:
    """Release containing the latest of the related commits"""
    last = None
    for c in related:
        if last is None or last.date < c.date:
            last = c
    if last is None:
        return None
    return release_for_date(releases, last.date)


def find_opening_release(releases: list[Release], opening_date: datetime) -> Release | None:
    return release_for_date(releases, opening_date)


def find_affected_releases(releases: list[Release], names: tuple[str, ...],
                           fixed: Release) -> list[Release]:
    """
    Resolve affected-version names, then backfill every release from the
    lowest resolved index up to (not including) the fixed release.
    """
    affected = []
    present = set()
    for name in names:
        r = release_from_name(releases, name)
        if r is None:
            logger.debug("Affected version %r matches no release", name)
            continue
        if r.index not in present:
            affected.append(r)
            present.add(r.index)

    if not affected:
        return affected

    # NOTE: starts from the lowest resolved index, which may precede the first
    # version named by the tracker
    start = min(present)
    for i in range(start, fixed.index):
        if i not in present:
            affected.append(releases[i - 1])
            present.add(i)
    return affected


def link_ticket(record: TicketRecord, commits: list[Commit], releases: list[Release]) -> BugTicket | None:
    """Place one ticket on the timeline, or None when it cannot be placed"""
    related = find_related_commits(commits, record.key)
    if not related:
        return None

    bug = BugTicket.from_record(record, related)

    bug.fixed_release = find_fixed_release(releases, related)
    if bug.fixed_release is None:
        logger.debug("Ticket %s: fix commit after the last release", record.key)
        return None

    bug.opening_release = find_opening_release(releases, record.opening_date)
    if bug.opening_release is None:
        logger.debug("Ticket %s: opened after the last release", record.key)
        return None

    bug.affected_releases = find_affected_releases(releases, record.affected_version_names, bug.fixed_release)
    return bug


def link_tickets(records, commits: list[Commit], releases: list[Release]) -> list[BugTicket]:
    """Link every ticket record; records that cannot be placed are dropped"""
    print(f"  Linking tickets to commits...", flush=True)

    tickets = []
    total = 0
    for record in records:
        total += 1
        bug = link_ticket(record, commits, releases)
        if bug is not None:
            tickets.append(bug)

    print(f"  Linked {len(tickets)}/{total} tickets", flush=True)
    return tickets
