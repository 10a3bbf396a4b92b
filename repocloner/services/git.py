"""
Clone executor: runs one `git clone` for one repository.
"""

import asyncio
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote, urlsplit, urlunsplit

from ..models import RepositoryRecord
from ..infrastructure.error_handler import CloneError, redact
from repocloner.infrastructure.logger import logger


# Exit code reported when the git executable cannot be started
GIT_NOT_FOUND_EXIT_CODE = 127


def embed_credentials(url: str, username: str, token: str) -> str:
    """Return ``url`` with percent-encoded ``username:token`` as its user-info."""

    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    userinfo = f"{quote(username, safe='')}:{quote(token, safe='')}"
    return urlunsplit(parts._replace(netloc=f"{userinfo}@{host}"))


class GitCloneService:
    """Performs clone operations through the external git executable."""

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    def build_command(self, url: str, shallow: bool = False) -> List[str]:
        command = [self.git_executable, "clone", url]
        if shallow:
            command.append("--depth=1")
        return command

    def resolve_url(
        self,
        record: RepositoryRecord,
        username: Optional[str],
        token: Optional[str]
    ) -> str:
        """The URL to hand to git; private repositories get credentials embedded."""

        if not record.is_private:
            return record.clone_url

        logger.warning(
            f"Cloning private repository '{record.name}'. Credentials are being "
            "used in the clone URL; ensure the output is not shared."
        )
        return embed_credentials(record.clone_url, username or "", token or "")

    async def clone(
        self,
        record: RepositoryRecord,
        destination: Path,
        username: Optional[str] = None,
        token: Optional[str] = None,
        shallow: bool = False
    ) -> None:
        """
        Clone ``record`` into ``destination / record.name``.

        Args:
            record: Repository to clone
            destination: Directory git runs in
            username: Account name embedded for private repositories
            token: Access token embedded for private repositories
            shallow: Request only the latest commit

        Raises:
            CloneError: If git cannot be started or exits non-zero
        """
        secrets = (token, quote(token, safe="") if token else None)
        command = self.build_command(self.resolve_url(record, username, token), shallow)
        logger.debug(f"Running {redact(' '.join(command), secrets)} in {destination}")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(destination),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise CloneError(GIT_NOT_FOUND_EXIT_CODE, str(e)) from e

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            error_text = stderr.decode("utf-8", errors="replace")
            raise CloneError(process.returncode, redact(error_text, secrets))

        logger.debug(
            f"git clone of '{record.name}' finished: "
            f"{redact(stdout.decode('utf-8', errors='replace').strip(), secrets)}"
        )


__all__ = [
    "GIT_NOT_FOUND_EXIT_CODE",
    "embed_credentials",
    "GitCloneService",
]
