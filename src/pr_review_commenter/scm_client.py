# src/pr_review_commenter/scm_client.py
import logging
import requests  # Using requests library for HTTP calls
from typing import List, Dict, Any, Optional, TYPE_CHECKING

from .exceptions import SCMAPIError
from .models import ChangedFile, PullRequestDetails

if TYPE_CHECKING:
    from .reviewer_config import ReviewerConfig
    from .models import ReviewComment

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
FILES_PER_PAGE = 100


class GitHubSCMClient:
    """
    Minimal GitHub REST v3 client covering the calls a review run needs:
    listing the files of a pull request, reading its head commit and
    creating inline review comments.
    """
    def __init__(self, config: 'ReviewerConfig', session: Optional[requests.Session] = None):
        self.config = config
        self.api_base_url = config.github_api_url
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "Authorization": f"token {self.config.repo_token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        logger.info(f"SCM Client initialized for base URL: {self.api_base_url}")

    def _request(self, method: str, endpoint: str, params: Optional[Dict] = None,
                 json_data: Optional[Dict] = None, expected_status: int = 200) -> Any:
        """
        Helper method to make HTTP requests.

        Raises:
            SCMAPIError: On transport failures or an unexpected status code,
                carrying GitHub's error message when there is one.
        """
        url = f"{self.api_base_url}{endpoint}"
        try:
            logger.debug(f"Making SCM API {method} request to {url} with params {params} and data {json_data}")
            response = self.session.request(method, url, headers=self.headers, params=params,
                                            json=json_data, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise SCMAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code != expected_status:
            raise SCMAPIError(self._error_message(response), status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise SCMAPIError(f"Invalid JSON in response from {url}: {response.text[:200]}",
                              status_code=response.status_code) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text[:500] or response.reason or "unknown error"
        if isinstance(data, dict) and data.get("message"):
            message = data["message"]
            errors = data.get("errors")
            if errors:
                message = f"{message} {errors}"
            return message
        return response.text[:500]

    def list_changed_files(self, owner: str, repo: str, pr_number: int) -> List[ChangedFile]:
        """
        Lists every file changed by the pull request, following pagination.
        """
        endpoint = f"/repos/{owner}/{repo}/pulls/{pr_number}/files"
        logger.info(f"Listing changed files for PR #{pr_number}: {endpoint}")

        files: List[ChangedFile] = []
        page = 1
        while True:
            data = self._request("GET", endpoint, params={"per_page": FILES_PER_PAGE, "page": page})
            if not isinstance(data, list):
                raise SCMAPIError(f"Unexpected response listing files for PR #{pr_number}: {data!r}")
            files.extend(ChangedFile.from_api(item) for item in data)
            if len(data) < FILES_PER_PAGE:
                break
            page += 1

        logger.info(f"PR #{pr_number} changes {len(files)} file(s).")
        return files

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> PullRequestDetails:
        endpoint = f"/repos/{owner}/{repo}/pulls/{pr_number}"
        logger.info(f"Fetching PR details from SCM: {endpoint}")

        data = self._request("GET", endpoint)
        try:
            head_sha = data["head"]["sha"]
        except (KeyError, TypeError) as e:
            raise SCMAPIError(f"PR #{pr_number} response has no head commit SHA") from e

        return PullRequestDetails(number=pr_number, head_sha=head_sha, title=data.get("title") or "")

    def create_review_comment(self, owner: str, repo: str, pr_number: int,
                              comment: 'ReviewComment', commit_id: str) -> Dict[str, Any]:
        """
        Creates a single inline review comment.

        `line` is the line number in the new version of the file; `side` RIGHT
        anchors it to that version, and `commit_id` pins it to the PR head.
        """
        endpoint = f"/repos/{owner}/{repo}/pulls/{pr_number}/comments"
        payload = {
            "body": comment.body,
            "path": comment.path,
            "line": comment.line,
            "side": "RIGHT",
            "commit_id": commit_id,
        }
        return self._request("POST", endpoint, json_data=payload, expected_status=201)
