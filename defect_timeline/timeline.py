"""
Release timeline: tags ordered by date, each owning a half-open commit window.
"""

import logging
from datetime import datetime

from .errors import InvalidRangeError
from .models import Commit, Release

logger = logging.getLogger(__name__)


def build_releases(tags: list[tuple[str, datetime]], commits: list[Commit]) -> list[Release]:
    """
    Build 1-indexed releases from (name, date) tags and fill their windows.

    `commits` must already be sorted by date; the earliest one opens the
    window of release 1.
    """
    print(f"  Building release timeline...", flush=True)

    ordered = sorted((Release(version_name=name, date=date) for name, date in tags),
                     key=lambda r: r.date)

    releases = []
    for r in ordered:
        # Two tags on the same date would give an empty window between them
        if releases and releases[-1].date == r.date:
            logger.debug("Skipping tag %s: same date as %s", r.version_name, releases[-1].version_name)
            continue
        releases.append(r)

    for i, r in enumerate(releases, 1):
        r.index = i
    for r in releases:
        r.commits = commits_between(releases, commits, r.index)

    print(f"  {len(releases)} releases from {len(tags)} tags", flush=True)
    return releases


def commits_between(releases: list[Release], commits: list[Commit], end_index: int) -> list[Commit]:
    """
    Commits in the window of release `end_index`: [previous release date, release date).

    The window of release 1 starts at the earliest commit.
    """
    if end_index < 1:
        raise InvalidRangeError("end_index should be greater than 0")
    if end_index > len(releases):
        raise InvalidRangeError(f"end_index {end_index} beyond last release {len(releases)}")
    if not commits:
        return []

    end = releases[end_index - 1].date
    start = releases[end_index - 2].date if end_index > 1 else commits[0].date

    return [c for c in commits if start <= c.date < end]


def release_for_date(releases: list[Release], date: datetime) -> Release | None:
    """
    Release whose window contains `date`, scanning in index order.

    Release 1 is open to the left; dates on or after the last release date
    belong to no release.
    """
    previous = None
    for r in releases:
        if (previous is None or previous <= date) and date < r.date:
            return r
        previous = r.date
    return None


def release_from_name(releases: list[Release], name: str) -> Release | None:
    """First release whose version name contains `name`"""
    for r in releases:
        if name in r.version_name:
            return r
    return None
