"""StdioServer — newline-delimited JSON-RPC over a pair of byte streams."""

from __future__ import annotations

import json
import logging
from typing import IO, Any

from imago_mcp.protocol.errors import INTERNAL_ERROR, PARSE_ERROR, InvalidRequestError
from imago_mcp.protocol.models import JsonRpcResponse
from imago_mcp.server.router import RequestRouter

logger = logging.getLogger(__name__)


class StdioServer:
    """Reads one request per line and writes at most one response per line.

    The loop is strictly sequential: a line is fully answered and flushed
    before the next one is read. It stops cleanly at end of input.
    """

    def __init__(
        self,
        input: IO[bytes],
        output: IO[bytes],
        router: RequestRouter | None = None,
    ) -> None:
        self._input = input
        self._output = output
        self._router = router or RequestRouter()
        self._running = False

    def run(self) -> None:
        """Serve until end of input or :meth:`stop`."""
        self._running = True
        while self._running:
            line = self._input.readline()
            if not line:
                logger.debug("End of input, stopping")
                break
            self.handle_line(line)
        self._running = False

    def stop(self) -> None:
        self._running = False

    def handle_line(self, line: bytes | str) -> None:
        """Answer a single raw input line."""
        if not line.strip():
            return

        try:
            text = line.decode("utf-8") if isinstance(line, bytes) else line
            message = json.loads(text)
        except ValueError as exc:
            self._send(JsonRpcResponse.failure(None, PARSE_ERROR, f"Parse error: {exc}"))
            return

        if not isinstance(message, dict):
            invalid = InvalidRequestError("expected a JSON object")
            self._send(JsonRpcResponse.failure(None, invalid.code, str(invalid)))
            return

        try:
            response = self._router.route(message)
        except Exception as exc:
            logger.exception("Internal error handling %r", message.get("method"))
            response = JsonRpcResponse.failure(message.get("id"), INTERNAL_ERROR, f"Internal error: {exc}")

        if response is not None:
            self._send(response)

    def _send(self, response: JsonRpcResponse) -> None:
        self._output.write(_encode(response.to_wire()))
        self._output.flush()


def _encode(payload: dict[str, Any]) -> bytes:
    return (json.dumps(payload, separators=(",", ":")) + "\n").encode("utf-8")
