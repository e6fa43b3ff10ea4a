# src/pr_review_commenter/main.py
import os
import sys
import asyncio  # For awaiting the LLM calls
import logging
from typing import List
from dotenv import load_dotenv  # For local development using .env file

from . import __version__

from .reviewer_config import load_reviewer_config, validate_config, ReviewerConfig
from .llm_reviewer import LLMReviewer
from .scm_client import GitHubSCMClient
from .comment_parser import extract_comments, validate_comment
from .exceptions import CommentValidationError, ConfigurationError, ReviewerError, SCMAPIError
from .models import ChangedFile, ReviewComment, ReviewSummary
from .utils.file_filter import filter_changed_files

# Global logger for the module
logger = logging.getLogger("pr_review_commenter")  # Use a named logger


def setup_logging(log_level_str: str):
    """Configures basic logging for the reviewer."""
    numeric_level = getattr(logging, log_level_str.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        logger.warning(f"Invalid log level '{log_level_str}'. Defaulting to INFO.")

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def select_files_for_review(config: ReviewerConfig, changed_files: List[ChangedFile], summary: ReviewSummary) -> List[ChangedFile]:
    """Drops files without a patch and files filtered out by the include/exclude patterns."""
    with_patch: List[ChangedFile] = []
    for changed_file in changed_files:
        if changed_file.patch:
            with_patch.append(changed_file)
        else:
            logger.info(f"Skipping {changed_file.filename}: no patch (binary, renamed without changes, or too large).")
            summary.files_skipped += 1
            summary.skipped_paths.append(changed_file.filename)

    selected, excluded = filter_changed_files(
        with_patch,
        include_patterns=config.include_patterns,
        exclude_patterns=config.exclude_patterns,
    )
    for changed_file in excluded:
        logger.info(f"Excluding file due to pattern match: {changed_file.filename}")
        summary.files_skipped += 1
        summary.skipped_paths.append(changed_file.filename)
    return selected


def post_comment(config: ReviewerConfig, scm_client: GitHubSCMClient, comment: ReviewComment,
                 patch: str, commit_id: str, summary: ReviewSummary) -> None:
    """
    Validates and posts one comment. Failures are logged and counted, never raised,
    so one bad comment does not stop the others.
    """
    owner, repo = config.repo_owner_and_name
    try:
        validate_comment(comment, patch)
        scm_client.create_review_comment(owner, repo, config.pr_number, comment, commit_id)
    except CommentValidationError as e:
        logger.error(f"Failed to add comment: {comment.body}")
        logger.error(f"Error details: {e}")
        summary.comments_rejected += 1
        return
    except SCMAPIError as e:
        logger.error(f"Failed to add comment: {comment.body}")
        logger.error(f"Error details: {e}")
        summary.comments_failed += 1
        return

    logger.info(f"Comment added successfully on {comment.path}:{comment.line}: {comment.body}")
    summary.comments_posted += 1


async def review_pr(config: ReviewerConfig, scm_client: GitHubSCMClient, llm_reviewer: LLMReviewer) -> ReviewSummary:
    """
    Main Pull Request review process.

    Files are reviewed one at a time and each file's comments are posted
    before the next file is sent to the model.

    Raises:
        SCMAPIError: If the changed files or the PR itself cannot be fetched.
        LLMBackendError: If the model call fails.
    """
    owner, repo = config.repo_owner_and_name
    pr_number = config.pr_number
    summary = ReviewSummary()

    changed_files = scm_client.list_changed_files(owner, repo, pr_number)
    pull_request = scm_client.get_pull_request(owner, repo, pr_number)
    logger.info(f"Reviewing PR #{pr_number} at head commit {pull_request.head_sha}")

    files_to_review = select_files_for_review(config, changed_files, summary)
    logger.info(f"Found {len(files_to_review)} files to review after filtering.")

    for changed_file in files_to_review:
        logger.info(f"Processing file for review: {changed_file.filename}")
        review_text = await llm_reviewer.review_patch(changed_file.filename, changed_file.patch)
        summary.files_reviewed += 1

        comments = extract_comments(review_text, changed_file.filename)
        if not comments:
            logger.info(f"No line comments found in the review for {changed_file.filename}.")
            continue

        logger.info(f"Extracted {len(comments)} comment(s) for {changed_file.filename}.")
        for comment in comments:
            post_comment(config, scm_client, comment, changed_file.patch, pull_request.head_sha, summary)

    return summary


async def async_main() -> int:
    """
    Asynchronous main function to orchestrate a review run.
    """
    try:
        config = load_reviewer_config()
    except ConfigurationError as e:
        setup_logging("INFO")
        logger.critical(str(e))
        return 1
    setup_logging(config.log_level)  # Configure logging early

    logger.info("Starting AI PR review commenter...")
    logger.info(f"Version: {__version__}")

    try:
        validate_config(config)
    except ConfigurationError as e:
        logger.critical(str(e))
        return 1

    logger.info(f"Repository: {config.repository}, PR: #{config.pr_number}, provider: {config.api_provider}")

    try:
        scm_client = GitHubSCMClient(config)
        llm_reviewer = LLMReviewer(config)
        summary = await review_pr(config, scm_client, llm_reviewer)
    except ReviewerError as e:
        logger.critical(f"Error running code review: {e}")
        return 1
    except Exception as e:
        logger.critical(f"Unhandled exception in review run: {e}", exc_info=True)
        return 1

    logger.info(
        f"Review finished. Files reviewed: {summary.files_reviewed}, skipped: {summary.files_skipped}; "
        f"comments posted: {summary.comments_posted}, rejected: {summary.comments_rejected}, "
        f"failed: {summary.comments_failed}."
    )
    return 0


def main_cli():
    """
    CLI entry point. Loads .env for local dev.
    """
    # In CI the variables are injected by the workflow; .env is only for local runs.
    if os.path.exists(".env"):
        logger.info("Found .env file, loading environment variables for local development.")
        load_dotenv(override=True)

    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Review interrupted by user (KeyboardInterrupt).")
        return 130  # Standard exit code for Ctrl+C


if __name__ == "__main__":
    sys.exit(main_cli())
