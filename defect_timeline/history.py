"""
Commit history ingestion and revert-pair removal.
"""

from .config import REVERT_MARKER, COMMIT_HASH_LENGTH
from .models import Commit


def load_commits(repository) -> list[Commit]:
    """Read the whole history, oldest first, with revert pairs removed"""
    print(f"  Loading commit history...", flush=True)

    # sorted() is stable, so equal dates keep traversal order
    commits = sorted(repository.traverse_commits(), key=lambda c: c.date)
    kept = remove_revert_commits(commits)

    print(f"  Loaded {len(kept)} commits ({len(commits) - len(kept)} removed as revert pairs)", flush=True)
    return kept


def parse_reverted_hash(line: str) -> str | None:
    """Commit id named on a 'This reverts commit <id>.' line"""
    _, _, rest = line.partition(REVERT_MARKER)
    tokens = rest.split()
    if not tokens:
        return None
    return tokens[0].rstrip('.,')[:COMMIT_HASH_LENGTH]


def remove_revert_commits(commits: list[Commit]) -> list[Commit]:
    """
    Drop every reverting commit together with the commit it reverts.

    A reverted id that is not in `commits` (e.g. it predates the ingested
    history) is ignored; the reverting commit is still dropped.
    """
    known = {c.hash for c in commits}
    to_remove = set()

    for c in commits:
        if REVERT_MARKER not in c.msg:
            continue
        for line in c.msg.split('\n'):
            if REVERT_MARKER not in line:
                continue
            to_remove.add(c.hash)
            reverted = parse_reverted_hash(line)
            if reverted and reverted in known:
                to_remove.add(reverted)

    return [c for c in commits if c.hash not in to_remove]
