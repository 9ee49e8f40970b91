"""
Jira integration for retrieving fixed bug tickets.
"""

import json
from pathlib import Path

import pandas as pd
import requests

from .config import (
    JIRA_BASE_URL,
    JIRA_TOKEN,
    JIRA_PAGE_SIZE,
    JIRA_TIMEOUT,
    JIRA_FIELDS,
    BUG_JQL,
)
from .errors import TrackerAccessError
from .models import TicketRecord


def parse_issue(issue: dict) -> TicketRecord:
    """Convert one issue from the search API into a TicketRecord"""
    try:
        fields = issue.get('fields') or {}
        opening = pd.Timestamp(fields['created'])
        if pd.isna(opening):
            raise ValueError("empty creation date")
        versions = tuple(v['name'] for v in fields.get('versions') or [] if v.get('name'))
        return TicketRecord(key=issue['key'], opening_date=opening.to_pydatetime(),
                            affected_version_names=versions)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        key = issue.get('key', '?') if isinstance(issue, dict) else '?'
        raise TrackerAccessError(f"malformed issue {key}: {e!r}") from e


def load_ticket_records(path) -> list[TicketRecord]:
    """
    Read tickets from a JSON export.

    Accepts either a raw search response ({"issues": [...]}) or a plain list
    of issues in the same shape.
    """
    with open(Path(path), encoding='utf-8') as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise TrackerAccessError(f"cannot parse ticket export {path}: {e}") from e
    issues = data.get('issues', []) if isinstance(data, dict) else data
    return [parse_issue(issue) for issue in issues]


class JiraTicketRetriever:
    """Fetch and cache the fixed bug tickets of a Jira project"""

    def __init__(self, project: str, base_url: str = JIRA_BASE_URL, session: requests.Session = None):
        self.project = project
        self.base_url = base_url.rstrip('/')
        self.cache = None  # list[TicketRecord] once fetched
        self.api_calls = 0
        self.cache_hits = 0

        if session:
            self.session = session
        else:
            self.session = requests.Session()
            if JIRA_TOKEN:
                self.session.headers['Authorization'] = f'Bearer {JIRA_TOKEN}'
            self.session.headers['Accept'] = 'application/json'
            self.session.headers['User-Agent'] = 'Defect-Timeline'

    def _fetch_page(self, start_at: int) -> dict:
        """Fetch one page of search results"""
        url = f'{self.base_url}/rest/api/2/search'
        params = {
            'jql': BUG_JQL.format(project=self.project),
            'fields': JIRA_FIELDS,
            'startAt': start_at,
            'maxResults': JIRA_PAGE_SIZE,
        }
        try:
            resp = self.session.get(url, params=params, timeout=JIRA_TIMEOUT)
        except requests.RequestException as e:
            raise TrackerAccessError(f"Jira search failed for {self.project}: {e}") from e
        self.api_calls += 1

        if resp.status_code != 200:
            raise TrackerAccessError(
                f"Jira search failed for {self.project}: {resp.status_code} {resp.text[:200]}")
        try:
            return resp.json()
        except ValueError as e:
            raise TrackerAccessError(
                f"Jira search for {self.project} returned no JSON: {resp.text[:200]}") from e

    def get_tickets(self) -> list[TicketRecord]:
        """All fixed bug tickets of the project, ordered by key"""
        if self.cache is not None:
            self.cache_hits += 1
            return self.cache

        print(f"  Retrieving tickets for {self.project}...", flush=True)
        records = []
        start_at = 0
        while True:
            page = self._fetch_page(start_at)
            issues = page.get('issues', [])
            records.extend(parse_issue(issue) for issue in issues)
            start_at += len(issues)
            if not issues or start_at >= page.get('total', 0):
                break

        print(f"  Retrieved {len(records)} tickets", flush=True)
        self.cache = records
        return records

    def get_stats(self) -> dict:
        """Return API usage statistics"""
        return {
            'api_calls': self.api_calls,
            'cache_hits': self.cache_hits,
            'cached_tickets': len(self.cache or []),
            'with_affected_versions': sum(1 for r in self.cache or [] if r.affected_version_names),
        }
