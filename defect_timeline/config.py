"""
Configuration and constants for Defect Timeline.
"""

import os

# =============================================================================
# COMMIT HISTORY SETTINGS
# =============================================================================

# Marker line git writes into the message of a `git revert` commit
REVERT_MARKER = 'This reverts commit'

# Length of a full SHA-1 commit id
COMMIT_HASH_LENGTH = 40

# =============================================================================
# ISSUE TRACKER SETTINGS
# =============================================================================

JIRA_BASE_URL = os.environ.get('JIRA_BASE_URL', 'https://issues.apache.org/jira')
JIRA_TOKEN = os.environ.get('JIRA_TOKEN', '')
JIRA_PAGE_SIZE = 1000
JIRA_TIMEOUT = 30  # seconds

# Fixed bugs only: these are the tickets that can be placed on the timeline
BUG_JQL = (
    'project = "{project}" AND issuetype = Bug '
    'AND (status = closed OR status = resolved) '
    'AND resolution = fixed ORDER BY key ASC'
)
JIRA_FIELDS = 'created,versions'

# =============================================================================
# DATASET SETTINGS
# =============================================================================

# Bugginess estimation algorithms run downstream on the linked dataset
ALGORITHMS = ('proportion', 'increment')

# Column order of the per-release output table
DATASET_COLS = [
    'project', 'algorithm',
    'release_index', 'version_name', 'release_date',
    'num_commits', 'files_touched', 'new_files',
    'bugs_fixed', 'bugs_opened', 'bugs_affecting',
]
