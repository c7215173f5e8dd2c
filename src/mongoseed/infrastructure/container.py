"""testcontainers-backed MongoDB service handle.

Files are staged with ``put_archive`` (a single-member tar extracted at
``/``, which creates any missing parent directories) and scripts run with
``exec_run``. The container must be started before either is called.
"""

from __future__ import annotations

import io
import logging
import tarfile
import time
from typing import Any

from testcontainers.mongodb import MongoDbContainer

from mongoseed.infrastructure.handles import CommandResult

logger = logging.getLogger(__name__)

MONGO_IMAGE = "mongo"


def _single_file_archive(content: bytes, arcname: str) -> bytes:
    """Build an in-memory tar holding one file at *arcname*."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        info = tarfile.TarInfo(name=arcname)
        info.size = len(content)
        info.mode = 0o744
        info.mtime = int(time.time())
        tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def _decode(stream: bytes | None) -> str:
    return stream.decode("utf-8", errors="replace") if stream else ""


class MongoContainerHandle:
    """ServiceHandle wrapping a ``MongoDbContainer``.

    Usage::

        with MongoContainerHandle("7.0") as handle:
            loader = FixtureLoader.create(service=handle)
            loader.before_all()
            client = MongoClient(handle.connection_url)
    """

    def __init__(
        self,
        version: str = "latest",
        *,
        container: MongoDbContainer | None = None,
        **container_kwargs: Any,
    ) -> None:
        self._container = container or MongoDbContainer(
            f"{MONGO_IMAGE}:{version}", **container_kwargs
        )

    @property
    def container(self) -> MongoDbContainer:
        return self._container

    @property
    def connection_url(self) -> str:
        return self._container.get_connection_url()

    @property
    def import_options(self) -> tuple[str, ...]:
        """Credentials ``mongoimport`` needs inside the container."""
        username = getattr(self._container, "username", None)
        password = getattr(self._container, "password", None)
        if not username:
            return ()
        return (
            "--username",
            username,
            "--password",
            password or "",
            "--authenticationDatabase",
            "admin",
        )

    def start(self) -> MongoContainerHandle:
        self._container.start()
        logger.debug("Started MongoDB container %s", self._container.image)
        return self

    def stop(self) -> None:
        self._container.stop()

    def __enter__(self) -> MongoContainerHandle:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def stage_file(self, content: bytes, destination: str) -> None:
        """Copy *content* into the container at the absolute *destination*."""
        archive = _single_file_archive(content, destination.lstrip("/"))
        wrapped = self._container.get_wrapped_container()
        if not wrapped.put_archive("/", archive):
            msg = f"Failed to copy file into container: {destination}"
            raise OSError(msg)

    def run_command(self, shell: str, script_path: str) -> CommandResult:
        wrapped = self._container.get_wrapped_container()
        result = wrapped.exec_run([shell, script_path], demux=True)
        stdout, stderr = result.output or (None, None)
        return CommandResult(result.exit_code, _decode(stdout), _decode(stderr))
