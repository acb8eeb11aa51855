"""Access to the Transmission daemon holding the torrents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import transmission_rpc
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)
from transmission_rpc.error import (
    TransmissionConnectError,
    TransmissionError,
    TransmissionTimeoutError,
)

from trdup.model import FileEntry, Item, ManifestUnavailable, SourceError

log = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_WAIT_S = 5.0
LIST_TIMEOUT_S = 60.0

_LIST_FIELDS = ["id", "name", "sizeWhenDone"]
_TRANSIENT = (TransmissionConnectError, TransmissionTimeoutError)


@dataclass(slots=True)
class PauseResult:
    succeeded: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


class ItemSource(Protocol):
    def list_items(self) -> list[Item]: ...

    def get_file_manifest(self, item_id: int) -> list[FileEntry]: ...

    def pause_items(self, ids: list[int]) -> PauseResult: ...


def _to_item(torrent: Any) -> Item:
    fields = torrent.fields
    return Item(
        id=int(fields["id"]),
        name=fields.get("name"),
        size_bytes=fields.get("sizeWhenDone"),
    )


class TransmissionSource:
    """ItemSource backed by a Transmission RPC client.

    Listing is retried on connection and timeout errors; everything else
    is translated into SourceError or ManifestUnavailable at this boundary.
    """

    def __init__(
        self,
        client: Any,
        *,
        retries: int = MAX_RETRIES,
        retry_wait: float = RETRY_WAIT_S,
    ) -> None:
        self.client = client
        self.retries = retries
        self.retry_wait = retry_wait

    @classmethod
    def connect(
        cls,
        host: str = "127.0.0.1",
        port: int = 9091,
        *,
        https: bool = False,
        username: str = "",
        password: str = "",
        **kwargs: Any,
    ) -> TransmissionSource:
        """Open a client session, raising SourceError when it can't be established."""
        try:
            client = transmission_rpc.Client(
                protocol="https" if https else "http",
                host=host,
                port=port,
                username=username or None,
                password=password or None,
                timeout=LIST_TIMEOUT_S,
            )
        except TransmissionError as e:
            raise SourceError(f"Cannot connect to Transmission at {host}:{port}: {e}") from e
        return cls(client, **kwargs)

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_fixed(self.retry_wait),
            retry=retry_if_exception_type(_TRANSIENT),
            before_sleep=before_sleep_log(log, logging.WARNING),
            reraise=True,
        )

    def list_items(self) -> list[Item]:
        try:
            torrents = self._retrying()(self.client.get_torrents, arguments=_LIST_FIELDS)
        except TransmissionError as e:
            raise SourceError(f"Failed to list torrents: {e}") from e
        items = [_to_item(t) for t in torrents]
        log.debug("Listed %d torrent(s)", len(items))
        return items

    def get_file_manifest(self, item_id: int) -> list[FileEntry]:
        try:
            torrent = self.client.get_torrent(item_id, arguments=["id", "files"])
        except KeyError as e:
            raise ManifestUnavailable(item_id, "torrent not found") from e
        except TransmissionError as e:
            raise ManifestUnavailable(item_id, str(e)) from e
        files = torrent.get_files()
        if not files:
            raise ManifestUnavailable(item_id, "empty file list")
        return [FileEntry(path=f.name, size=f.size) for f in files]

    def pause_items(self, ids: list[int]) -> PauseResult:
        """Stop *ids* in one call, falling back to one call per id on failure."""
        result = PauseResult()
        if not ids:
            return result
        try:
            self.client.stop_torrent(ids)
        except TransmissionError:
            log.warning("Pausing %d torrent(s) at once failed, retrying one by one", len(ids))
        else:
            result.succeeded.extend(ids)
            return result

        for item_id in ids:
            try:
                self.client.stop_torrent([item_id])
            except TransmissionError:
                log.warning("Failed to pause torrent %d", item_id, exc_info=True)
                result.failed.append(item_id)
            else:
                result.succeeded.append(item_id)
        return result
