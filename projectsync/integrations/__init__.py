"""Integration modules"""
from .github_client import GitHubAPIError, GitHubIssueAPI, issue_payload

__all__ = ["GitHubAPIError", "GitHubIssueAPI", "issue_payload"]
