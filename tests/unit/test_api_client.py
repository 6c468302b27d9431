"""Tests for the Compiler Explorer HTTP client."""

import pytest
import requests

from cet.api.client import CompilerExplorerClient, CompilerExplorerError
from cet.api.models import CompileRequest, FileEntry


class TestCompile:
    """POST /api/compiler/<id>/compile."""

    def test_posts_json_to_compiler_endpoint(self, client, mock_session):
        request = CompileRequest(source="pub fn main() void {}")

        client.compile("ztrunk", request)

        mock_session.post.assert_called_once()
        args, kwargs = mock_session.post.call_args
        assert args[0] == "https://ce.example.test/api/compiler/ztrunk/compile"
        assert kwargs["json"] == request.to_payload()
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert kwargs["timeout"] == 5

    def test_sends_project_files(self, client, mock_session):
        request = CompileRequest(source="x", files=[FileEntry(filename="a.zig", contents="a")])

        client.compile("ztrunk", request)

        payload = mock_session.post.call_args.kwargs["json"]
        assert payload["files"] == [{"filename": "a.zig", "contents": "a"}]

    def test_returns_parsed_response(self, client):
        result = client.compile("ztrunk", CompileRequest(source="x"))

        assert result.code == 0
        assert len(result.asm) == 3

    def test_compile_failure_is_not_an_error(self, client, mock_session, make_response):
        mock_session.post.return_value = make_response(
            {"code": 1, "stderr": [{"text": "error: expected ';'"}], "asm": []}
        )

        result = client.compile("ztrunk", CompileRequest(source="x"))

        assert result.code == 1
        assert result.stderr[0].text == "error: expected ';'"

    def test_transport_error_raises(self, client, mock_session):
        mock_session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(CompilerExplorerError, match="failed to send request"):
            client.compile("ztrunk", CompileRequest(source="x"))

    def test_non_json_body_raises_with_preview(self, client, mock_session, make_response):
        mock_session.post.return_value = make_response(status=404, text="Compiler not found " + "x" * 1000)

        with pytest.raises(CompilerExplorerError) as excinfo:
            client.compile("nope", CompileRequest(source="x"))

        message = str(excinfo.value)
        assert message.startswith("failed to parse response (HTTP 404)")
        assert "Body: Compiler not found" in message
        body = message.split("Body: ", 1)[1]
        assert len(body) == 500

    def test_unexpected_json_shape_raises(self, client, mock_session, make_response):
        mock_session.post.return_value = make_response({"asm": "not a list"})

        with pytest.raises(CompilerExplorerError, match="failed to parse response"):
            client.compile("ztrunk", CompileRequest(source="x"))


class TestListCompilers:
    def test_lists_all_compilers(self, client, mock_session):
        compilers = client.list_compilers()

        assert [c.id for c in compilers] == ["ztrunk", "z0140"]
        assert mock_session.get.call_args.args[0] == "https://ce.example.test/api/compilers"

    def test_lists_compilers_for_language(self, client, mock_session):
        client.list_compilers("zig")

        assert mock_session.get.call_args.args[0] == "https://ce.example.test/api/compilers/zig"
        assert mock_session.get.call_args.kwargs["headers"]["Accept"] == "application/json"

    def test_transport_error_raises(self, client, mock_session):
        mock_session.get.side_effect = requests.Timeout("timed out")

        with pytest.raises(CompilerExplorerError, match="failed to send request"):
            client.list_compilers()


class TestClientSetup:
    def test_trailing_slash_is_stripped(self):
        client = CompilerExplorerClient("https://godbolt.org/")

        assert client.compile_url("g141") == "https://godbolt.org/api/compiler/g141/compile"

    def test_creates_session_when_none_given(self):
        client = CompilerExplorerClient("https://godbolt.org")

        assert isinstance(client._session, requests.Session)
        client.close()
