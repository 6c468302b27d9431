"""Thin wrapper around the Compiler Explorer REST API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from .models import CompileRequest, CompileResponse, CompilerInfo

_LOGGER = logging.getLogger(__name__)

_BODY_PREVIEW_CHARS = 500
_JSON_HEADERS = {"Accept": "application/json"}

_M = TypeVar("_M")


class CompilerExplorerError(Exception):
    """Wrapper for transport and decoding failures with clean messages."""
    pass


class CompilerExplorerClient:
    """Blocking client for a Compiler Explorer instance (godbolt.org or self-hosted)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def compile_url(self, compiler_id: str) -> str:
        return f"{self.base_url}/api/compiler/{compiler_id}/compile"

    def compile(self, compiler_id: str, request: CompileRequest) -> CompileResponse:
        """Compile ``request`` with ``compiler_id`` and return the parsed result.

        Compilation failures are not errors here: the service reports them in
        ``CompileResponse.code`` and ``stderr``.
        """
        url = self.compile_url(compiler_id)
        payload = request.to_payload()
        _LOGGER.debug(
            "POST %s (%d extra file(s), args=%r)",
            url,
            len(payload.get("files", [])),
            request.options.user_arguments,
        )
        try:
            response = self._session.post(
                url,
                json=payload,
                headers={**_JSON_HEADERS, "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise CompilerExplorerError(f"failed to send request: {exc}") from exc

        return self._decode(response, TypeAdapter(CompileResponse))

    def list_compilers(self, language: str | None = None) -> list[CompilerInfo]:
        """Return the compilers known to the server, optionally for one language."""
        url = f"{self.base_url}/api/compilers"
        if language:
            url = f"{url}/{language}"
        _LOGGER.debug("GET %s", url)
        try:
            response = self._session.get(url, headers=_JSON_HEADERS, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CompilerExplorerError(f"failed to send request: {exc}") from exc

        return self._decode(response, TypeAdapter(list[CompilerInfo]))

    def close(self) -> None:
        self._session.close()

    def _decode(self, response: requests.Response, adapter: TypeAdapter[_M]) -> _M:
        try:
            data: Any = response.json()
            return adapter.validate_python(data)
        except (ValueError, ValidationError) as exc:
            body = response.text[:_BODY_PREVIEW_CHARS]
            raise CompilerExplorerError(
                f"failed to parse response (HTTP {response.status_code}): {exc}\nBody: {body}"
            ) from exc


__all__ = ["CompilerExplorerClient", "CompilerExplorerError"]
