"""
Observation-horizon truncation.

Releases close to the mining date have incomplete ground truth (their bugs
are not reported yet), so only the first half of the known releases is kept.
"""

from .models import Dataset


def horizon_index(known_release_count: int) -> int:
    """Index of the last release kept out of `known_release_count`"""
    return known_release_count // 2


def reduce_dataset(dataset: Dataset) -> Dataset:
    """
    Truncate releases to the first half, then drop commits and tickets past
    the new horizon and tickets fixed before they were opened.

    The cut-off comes from `known_release_count`, not the current release
    list, so reducing an already reduced dataset changes nothing.
    """
    half = horizon_index(dataset.known_release_count)
    releases = [r for r in dataset.releases if r.index <= half]

    if not releases:
        return Dataset(commits=[], releases=[], tickets=[],
                       known_release_count=dataset.known_release_count)

    horizon = releases[-1].date
    commits = [c for c in dataset.commits if c.date <= horizon]
    tickets = [
        b for b in dataset.tickets
        if b.fixed_release.date <= horizon and b.opening_date < b.fixed_release.date
    ]

    print(f"  Reduced to {len(releases)} releases, {len(commits)} commits, {len(tickets)} tickets "
          f"(horizon {horizon:%Y-%m-%d})", flush=True)

    return Dataset(commits=commits, releases=releases, tickets=tickets,
                   known_release_count=dataset.known_release_count)
