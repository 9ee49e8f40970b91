"""
Entities linked by the dataset: commits, releases and bug tickets.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .errors import InvalidRangeError


def as_utc(value: datetime) -> datetime:
    """Normalise a datetime to timezone-aware UTC (naive values are taken as UTC)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Commit:
    """A single revision read from the repository"""
    hash: str
    date: datetime
    msg: str
    files: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'date', as_utc(self.date))
        object.__setattr__(self, 'files', tuple(self.files))


@dataclass
class Release:
    """A tagged version; index is assigned once all tags are sorted by date"""
    version_name: str
    date: datetime
    index: int = 0
    commits: list[Commit] = field(default_factory=list)

    def __post_init__(self):
        self.date = as_utc(self.date)

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'version_name': self.version_name,
            'date': self.date.isoformat(),
            'num_commits': len(self.commits),
        }


@dataclass(frozen=True)
class TicketRecord:
    """Raw ticket as returned by the issue tracker"""
    key: str
    opening_date: datetime
    affected_version_names: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'opening_date', as_utc(self.opening_date))
        object.__setattr__(self, 'affected_version_names', tuple(self.affected_version_names))


@dataclass
class BugTicket:
    """A ticket placed on the release timeline"""
    key: str
    opening_date: datetime
    affected_version_names: tuple[str, ...] = ()
    commits: list[Commit] = field(default_factory=list)
    fixed_release: Release | None = None
    opening_release: Release | None = None
    affected_releases: list[Release] = field(default_factory=list)

    def __post_init__(self):
        self.opening_date = as_utc(self.opening_date)

    @classmethod
    def from_record(cls, record: TicketRecord, commits: list[Commit]) -> 'BugTicket':
        return cls(
            key=record.key,
            opening_date=record.opening_date,
            affected_version_names=record.affected_version_names,
            commits=list(commits),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary, releases flattened to their indices"""
        return {
            'key': self.key,
            'opening_date': self.opening_date.isoformat(),
            'opening_release': self.opening_release.index if self.opening_release else None,
            'fixed_release': self.fixed_release.index if self.fixed_release else None,
            'affected_releases': [r.index for r in self.affected_releases],
            'commits': [c.hash for c in self.commits],
        }


@dataclass
class Dataset:
    """Commits, releases and tickets owned by one pipeline run"""
    commits: list[Commit]
    releases: list[Release]
    tickets: list[BugTicket]
    # Number of releases before truncation; fixes the observation horizon
    known_release_count: int | None = None

    def __post_init__(self):
        if self.known_release_count is None:
            self.known_release_count = len(self.releases)

    @property
    def horizon(self) -> datetime | None:
        """Date of the last retained release"""
        return self.releases[-1].date if self.releases else None

    def release(self, index: int) -> Release:
        """Release by its 1-based index"""
        if not 1 <= index <= len(self.releases):
            raise InvalidRangeError(f"release index {index} outside 1..{len(self.releases)}")
        return self.releases[index - 1]
