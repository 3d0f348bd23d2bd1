"""Handler interface for repository hosting providers."""

from __future__ import annotations

from typing import ClassVar

from repo_bootstrap.domain.models import InitializedSource


class RepoHandler:
    """Abstract provider handler.

    Each implementation serves one provider. ``params_type`` and ``repo_type``
    are the variant types the service dispatches to it.
    """

    params_type: ClassVar[type]
    repo_type: ClassVar[type]

    async def create(self, params):
        """Creates the remote repository described by ``params``.

        Returns:
            The provider's initialized repo value, only after the provider confirmed creation.
        """

        raise NotImplementedError

    def clone_local(self, repo, path: str) -> InitializedSource:
        """Clones ``repo`` into a new directory under ``path``."""

        raise NotImplementedError
