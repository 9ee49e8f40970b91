"""
Per-release feature rows and dataset output.
"""

from dataclasses import dataclass, asdict
from datetime import datetime

import pandas as pd

from .config import DATASET_COLS
from .models import BugTicket, Release


@dataclass
class ReleaseFeatures:
    """Features recorded for a single release"""
    project: str
    algorithm: str
    release_index: int
    version_name: str
    release_date: str

    # Activity inside the release window
    num_commits: int = 0
    files_touched: int = 0
    new_files: int = 0          # files first seen in this release

    # Ticket linkage
    bugs_fixed: int = 0
    bugs_opened: int = 0
    bugs_affecting: int = 0     # tickets listing this release as affected

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return asdict(self)


class ReleaseFeatureTracker:
    """
    Feature step for compute_features().

    Records one ReleaseFeatures row per call and returns the file-path to
    first-seen-date mapping extended with the files new in that release.
    """

    def __init__(self, project: str, algorithm: str):
        self.project = project
        self.algorithm = algorithm
        self.rows: list[ReleaseFeatures] = []

    def __call__(self, release: Release, previous: Release | None,
                 tickets: list[BugTicket], name_to_date: dict[str, datetime]) -> dict[str, datetime]:
        updated = dict(name_to_date)
        touched = set()
        for commit in release.commits:
            for path in commit.files:
                touched.add(path)
                if path not in updated:
                    updated[path] = commit.date

        self.rows.append(ReleaseFeatures(
            project=self.project,
            algorithm=self.algorithm,
            release_index=release.index,
            version_name=release.version_name,
            release_date=release.date.isoformat(),
            num_commits=len(release.commits),
            files_touched=len(touched),
            new_files=len(updated) - len(name_to_date),
            bugs_fixed=sum(1 for b in tickets if b.fixed_release.index == release.index),
            bugs_opened=sum(1 for b in tickets if b.opening_release.index == release.index),
            bugs_affecting=sum(1 for b in tickets
                               if any(r.index == release.index for r in b.affected_releases)),
        ))
        return updated


def dataset_frame(rows: list[ReleaseFeatures]) -> pd.DataFrame:
    """Feature rows as a DataFrame in output column order"""
    return pd.DataFrame([r.to_dict() for r in rows], columns=DATASET_COLS)


def write_dataset(df: pd.DataFrame, path) -> None:
    df.to_csv(path, index=False)
    print(f"  Saved {len(df)} releases to {path}", flush=True)
