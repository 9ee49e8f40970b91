"""
Repository mining and dataset construction pipeline.
"""

from collections.abc import Callable, Iterable
from datetime import datetime

from .history import load_commits
from .linker import link_tickets
from .models import BugTicket, Dataset, Release, TicketRecord
from .reducer import reduce_dataset
from .timeline import build_releases

# step(release, previous_release, tickets, name_to_date) -> name_to_date
FeatureStep = Callable[[Release, Release | None, list[BugTicket], dict[str, datetime]], dict[str, datetime]]


def build_dataset(repository, ticket_records: Iterable[TicketRecord], reduce: bool = True) -> Dataset:
    """
    Build the linked commit/release/ticket dataset.

    `repository` must provide traverse_commits() and tags(), e.g. an open
    GitRepository. Ticket records come from the issue tracker.
    """
    print(f"\nBuilding dataset", flush=True)

    commits = load_commits(repository)
    releases = build_releases(repository.tags(), commits)
    tickets = link_tickets(ticket_records, commits, releases)

    dataset = Dataset(commits=commits, releases=releases, tickets=tickets,
                      known_release_count=len(releases))
    if reduce:
        dataset = reduce_dataset(dataset)
    return dataset


def compute_features(dataset: Dataset, step: FeatureStep,
                     initial: dict[str, datetime] | None = None) -> dict[str, datetime]:
    """Fold `step` over the releases in index order, threading the name-to-date mapping"""
    mapping = dict(initial or {})
    previous = None
    for release in dataset.releases:
        mapping = step(release, previous, dataset.tickets, mapping)
        previous = release
    return mapping
