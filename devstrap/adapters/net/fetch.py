"""
Fetch adapter — downloads over HTTP(S), no git needed.

Materializes both resource shapes:

    {"remote": RemoteResource}  a file or an archive at a URL
    {"repo": RepoResource}      a repository as a release archive
                                (stripped, swapped in) plus raw files
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from devstrap.adapters.base import Adapter, ExecutionContext
from devstrap.core.context import RunContext
from devstrap.core.errors import FetchError
from devstrap.core.fetch import fetch
from devstrap.core.models.action import Receipt
from devstrap.core.models.resource import RemoteResource, RepoResource

logger = logging.getLogger(__name__)


class FetchAdapter(Adapter):
    """Download remote resources with the stdlib HTTP client.

    Action params (exactly one of):
        remote (dict): A serialized RemoteResource.
        repo (dict): A serialized RepoResource.
    """

    @property
    def name(self) -> str:
        return "fetch"

    def is_available(self, run: RunContext) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.params
        if ("remote" in params) == ("repo" in params):
            return False, "Exactly one of 'remote' or 'repo' is required"
        try:
            if "remote" in params:
                RemoteResource.model_validate(params["remote"])
            else:
                repo = RepoResource.model_validate(params["repo"])
                if repo.destination is None and not repo.files:
                    return False, f"{repo.repo}: nothing to fetch"
        except ValidationError as e:
            return False, f"Invalid resource: {e}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.params
        if "remote" in params:
            resources = [RemoteResource.model_validate(params["remote"])]
        else:
            repo = RepoResource.model_validate(params["repo"])
            resources = []
            if repo.destination is not None:
                resources.append(repo.tree_resource())
            resources.extend(repo.file_resources())

        fetched: list[str] = []
        for resource in resources:
            try:
                fetch(resource)
            except (FetchError, OSError) as e:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=str(e),
                    metadata={"url": resource.url, "fetched": fetched},
                )
            fetched.append(resource.destination)

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Fetched {len(fetched)} resource(s)",
            metadata={"fetched": fetched},
        )
