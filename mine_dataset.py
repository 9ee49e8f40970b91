#!/usr/bin/env python3
"""
Build a release-level defect dataset for one project.

Usage:
    python mine_dataset.py --repo ../bookkeeper --project BOOKKEEPER --output bookkeeper.csv
    python mine_dataset.py --repo ../bookkeeper --project BOOKKEEPER --output out.csv \\
        --tickets bookkeeper_issues.json --algorithm increment --diagnose
"""

import argparse
import logging
import sys

from defect_timeline import (
    ALGORITHMS,
    DefectTimelineError,
    GitRepository,
    JiraTicketRetriever,
    ReleaseFeatureTracker,
    build_dataset,
    compute_features,
    dataset_frame,
    diagnose_dataset,
    load_ticket_records,
    write_dataset,
)


def run(output: str, repo_path: str, project: str, algorithm: str,
        tickets_file: str = None, reduce: bool = True, diagnose: bool = False):
    """Mine one project and write its per-release dataset"""
    print(f"\nProcessing: {project} ({repo_path})", flush=True)

    if tickets_file:
        records = load_ticket_records(tickets_file)
        print(f"  Loaded {len(records)} tickets from {tickets_file}", flush=True)
    else:
        records = JiraTicketRetriever(project).get_tickets()

    with GitRepository(repo_path, include_files=True) as repository:
        dataset = build_dataset(repository, records, reduce=reduce)

    tracker = ReleaseFeatureTracker(project, algorithm)
    compute_features(dataset, tracker)
    df = dataset_frame(tracker.rows)
    write_dataset(df, output)

    if diagnose:
        diagnose_dataset(dataset, len(records))

    return df


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build a release-level defect dataset')
    parser.add_argument('--output', required=True, help='CSV file to write')
    parser.add_argument('--repo', required=True, help='Path to the local git repository')
    parser.add_argument('--project', required=True, help='Issue tracker project key')
    parser.add_argument('--algorithm', choices=ALGORITHMS, default='proportion',
                        help='Bugginess estimation algorithm run on the dataset')
    parser.add_argument('--tickets', help='Read tickets from a JSON export instead of Jira')
    parser.add_argument('--no-reduce', action='store_true', help='Keep all releases')
    parser.add_argument('--diagnose', action='store_true', help='Print a dataset quality report')
    parser.add_argument('--verbose', action='store_true', help='Show diagnostic logging')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        run(args.output, args.repo, args.project, args.algorithm,
            tickets_file=args.tickets, reduce=not args.no_reduce, diagnose=args.diagnose)
    except DefectTimelineError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
