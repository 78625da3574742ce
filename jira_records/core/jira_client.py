"""Jira API client wrapper (REST v3 single-issue reads)."""

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any

from jira import JIRA, JIRAError

from .config import ISSUE_FETCH_EXPAND, ISSUE_FETCH_FIELDS, SETTINGS, AppSettings
from .records import HydrateStrategy


class JiraAPI:
    def __init__(
        self,
        server: str,
        email: str,
        token: str,
        *,
        executor: Executor | None = None,
        rest_api_version: str = SETTINGS.rest_api_version,
    ):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token),
            options={"server": self.server, "rest_api_version": rest_api_version},
        )
        # When set, hydration runs on the executor and returns futures
        self.executor = executor

    @classmethod
    def from_settings(
        cls,
        email: str,
        token: str,
        *,
        settings: AppSettings | None = None,
        concurrent: bool = False,
    ) -> JiraAPI:
        """Build a client for ``settings.server``.

        With ``concurrent=True`` issue hydration runs on a thread pool sized by
        ``settings.hydrate_max_workers``; the caller owns the pool via
        ``api.executor``.
        """
        settings = settings or SETTINGS
        executor = ThreadPoolExecutor(max_workers=settings.hydrate_max_workers) if concurrent else None
        return cls(
            settings.server,
            email,
            token,
            executor=executor,
            rest_api_version=settings.rest_api_version,
        )

    def fetch_issue_raw(self, issue_key: str) -> dict[str, Any]:
        try:
            issue = self.client.issue(
                issue_key,
                fields=",".join(ISSUE_FETCH_FIELDS),
                expand=",".join(ISSUE_FETCH_EXPAND),
            )
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to fetch issue {issue_key}: {exc}") from exc
        if hasattr(issue, "raw"):
            return issue.raw
        if isinstance(issue, dict):
            return issue
        raise RuntimeError(f"Unexpected issue payload type for {issue_key}: {type(issue)!r}")

    def fetch_issue_async(self, issue_key: str) -> Future[dict[str, Any]]:
        if self.executor is None:
            raise RuntimeError("JiraAPI was created without an executor")
        return self.executor.submit(self.fetch_issue_raw, issue_key)

    def issue_strategy(self) -> HydrateStrategy:
        """Hydrate strategy for issue records bound to this client."""
        if self.executor is not None:
            return self.fetch_issue_async
        return self.fetch_issue_raw
