"""Match entry: payload checks and storage for the add-match endpoint.

Results are stored in data/weekly_results.json in the GitHub repo, updated
through the contents API so the static site rebuilds from the new file.
"""

import base64
import copy
import hmac
import json
import logging
import os
import time
import urllib.request
from typing import Any, Optional
from urllib.error import HTTPError

from pydantic import ValidationError

from .schemas import MatchSubmission

logger = logging.getLogger('bowlstats.match_entry')

GITHUB_OWNER = os.environ.get('REPO_OWNER') or os.environ.get('GITHUB_OWNER', 'bowlstats')
GITHUB_REPO = os.environ.get('GITHUB_REPO', 'league')
GITHUB_BRANCH = os.environ.get('GITHUB_BRANCH', 'main')
RESULTS_FILE_PATH = 'data/weekly_results.json'


def get_admin_password() -> str | None:
    """Get the shared admin password from the environment."""
    return os.environ.get('ADMIN_PASSWORD')


def check_password(supplied: Any, expected: str) -> bool:
    """Compare a submitted password against the configured one.

    Anything other than a non-empty string is a wrong password.
    """
    if not supplied or not isinstance(supplied, str):
        return False
    return hmac.compare_digest(supplied.encode(), expected.encode())


def parse_submission(data: Any) -> tuple[Optional[MatchSubmission], list[str]]:
    """
    Validate an add-match payload.

    Week must be an integer (numeric strings are accepted) and each score
    list must hold exactly 3 whole numbers.

    Returns:
        Tuple of (submission, errors); submission is None when invalid
    """
    if not isinstance(data, dict):
        return None, ['Payload must be a JSON object']
    try:
        return MatchSubmission.model_validate(data), []
    except ValidationError as e:
        return None, [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        ]


def append_match(content: dict[str, list[dict]], submission: MatchSubmission) -> dict[str, list[dict]]:
    """Return a copy of the weekly results document with the match added."""
    updated = copy.deepcopy(content) if content else {}
    week_key = str(submission.week)
    updated.setdefault(week_key, []).append(
        {
            'bowler1': submission.bowler1,
            'scores1': list(submission.scores1),
            'bowler2': submission.bowler2,
            'scores2': list(submission.scores2),
        }
    )
    return updated


def update_results_file(
    submission: MatchSubmission, github_token: str, max_retries: int = 3
) -> tuple[bool, str]:
    """Append a match to the results file in the GitHub repo.

    Retries with a fresh sha when another update lands first (409).
    """
    api_url = (
        f'https://api.github.com/repos/{GITHUB_OWNER}/{GITHUB_REPO}/contents/{RESULTS_FILE_PATH}'
    )
    headers = {
        'Authorization': f'Bearer {github_token}',
        'Accept': 'application/vnd.github.v3+json',
        'Content-Type': 'application/json',
        'User-Agent': 'Bowlstats-Match-Bot',
    }

    for attempt in range(max_retries):
        current_sha = None
        content: dict[str, list[dict]] = {}

        try:
            req = urllib.request.Request(f'{api_url}?ref={GITHUB_BRANCH}', headers=headers)
            with urllib.request.urlopen(req) as response:
                current_data = json.loads(response.read().decode())
                current_sha = current_data['sha']
                content = json.loads(base64.b64decode(current_data['content']).decode())
        except HTTPError as e:
            if e.code != 404:
                return False, f'Failed to fetch current results: {e}'

        updated = append_match(content, submission)
        new_content = base64.b64encode(json.dumps(updated, indent=2).encode()).decode()

        update_data = {
            'message': (
                f'Add week {submission.week} result: '
                f'{submission.bowler1} vs {submission.bowler2}'
            ),
            'content': new_content,
            'branch': GITHUB_BRANCH,
        }
        if current_sha:
            update_data['sha'] = current_sha

        try:
            req = urllib.request.Request(
                api_url, data=json.dumps(update_data).encode(), headers=headers, method='PUT'
            )
            with urllib.request.urlopen(req) as response:
                if response.status in [200, 201]:
                    logger.info(f'Stored week {submission.week} match in {RESULTS_FILE_PATH}')
                    return True, 'Match result added'
                return False, f'GitHub API returned status {response.status}'
        except HTTPError as e:
            if e.code == 409 and attempt < max_retries - 1:
                logger.warning(f'Conflict updating results, retrying ({attempt + 1}/{max_retries})')
                time.sleep(0.5 * (attempt + 1))
                continue
            error_body = e.read().decode() if hasattr(e, 'read') else str(e)
            return False, f'Failed to update results: {error_body}'

    return False, 'Failed to update results after max retries'
