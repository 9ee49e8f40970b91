"""
Defect Timeline - Release-Aligned Bug Datasets from Code History
================================================================

Mines a git history and an issue tracker into one timeline: commits grouped
into release windows, bug tickets linked to the releases they were opened in,
fixed in and affect.

Key insight: later releases have bugs that are not reported yet, so only the
first half of the releases is kept as ground truth.
"""

from .config import (
    REVERT_MARKER,
    ALGORITHMS,
    DATASET_COLS,
)

from .errors import (
    DefectTimelineError,
    InvalidRangeError,
    RepositoryAccessError,
    TrackerAccessError,
)

from .models import (
    Commit,
    Release,
    TicketRecord,
    BugTicket,
    Dataset,
)

from .repository import GitRepository

from .history import (
    load_commits,
    remove_revert_commits,
)

from .timeline import (
    build_releases,
    commits_between,
)

from .linker import link_tickets

from .reducer import reduce_dataset

from .extraction import (
    build_dataset,
    compute_features,
)

from .features import (
    ReleaseFeatures,
    ReleaseFeatureTracker,
    dataset_frame,
    write_dataset,
)

from .jira import (
    JiraTicketRetriever,
    load_ticket_records,
)

from .diagnostics import diagnose_dataset

__version__ = "0.1.0"

__all__ = [
    # Config
    "REVERT_MARKER",
    "ALGORITHMS",
    "DATASET_COLS",
    # Errors
    "DefectTimelineError",
    "InvalidRangeError",
    "RepositoryAccessError",
    "TrackerAccessError",
    # Models
    "Commit",
    "Release",
    "TicketRecord",
    "BugTicket",
    "Dataset",
    # Pipeline
    "GitRepository",
    "load_commits",
    "remove_revert_commits",
    "build_releases",
    "commits_between",
    "link_tickets",
    "reduce_dataset",
    "build_dataset",
    "compute_features",
    # Features
    "ReleaseFeatures",
    "ReleaseFeatureTracker",
    "dataset_frame",
    "write_dataset",
    # Jira
    "JiraTicketRetriever",
    "load_ticket_records",
    # Diagnostics
    "diagnose_dataset",
]
