"""
Dataset diagnostics for assessing linkage quality.
"""

import numpy as np

from .models import Dataset


def diagnose_dataset(dataset: Dataset, raw_ticket_count: int) -> dict:
    """Report how much of the tracker and history made it into the dataset"""
    print(f"\n{'='*60}")
    print(f"DATASET DIAGNOSTIC")
    print(f"{'='*60}")

    commits_per_release = [len(r.commits) for r in dataset.releases]
    linked = len(dataset.tickets)
    link_ratio = linked / max(raw_ticket_count, 1)
    with_affected = sum(1 for b in dataset.tickets if b.affected_version_names)
    avg_commits = float(np.mean(commits_per_release)) if commits_per_release else 0.0
    median_commits = float(np.median(commits_per_release)) if commits_per_release else 0.0
    empty_releases = sum(1 for n in commits_per_release if n == 0)

    issues = []
    if link_ratio < 0.25:
        issues.append(f"Only {link_ratio:.1%} of tickets linked - commit messages may not cite ticket keys")
    if dataset.releases and empty_releases > len(dataset.releases) / 2:
        issues.append(f"{empty_releases} of {len(dataset.releases)} releases have no commits")
    if linked and with_affected / linked < 0.5:
        issues.append(f"Few tickets list affected versions ({with_affected}/{linked})")

    horizon = dataset.horizon
    print(f"\nReleases:")
    print(f"  Known:               {dataset.known_release_count:>4}")
    print(f"  Retained:            {len(dataset.releases):>4}")
    print(f"  Horizon:             {horizon:%Y-%m-%d}" if horizon else f"  Horizon:             none")
    print(f"  Commits / release:   {avg_commits:>6.1f} avg, {median_commits:.0f} median")
    print(f"\nTickets:")
    print(f"  Retrieved:           {raw_ticket_count:>4}")
    print(f"  Linked:              {linked:>4} ({link_ratio:.1%})")
    print(f"  With affected vers.: {with_affected:>4}")

    if issues:
        print(f"\nIssues:")
        for issue in issues:
            print(f"  - {issue}")

    return {
        'known_releases': dataset.known_release_count,
        'releases': len(dataset.releases),
        'commits': len(dataset.commits),
        'tickets': linked,
        'link_ratio': link_ratio,
        'with_affected_versions': with_affected,
        'avg_commits_per_release': avg_commits,
        'issues': issues,
    }
