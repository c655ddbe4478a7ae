import json

import httpx
import pytest

from studio_eighty7.app_shell import cli


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("offline", request=request)


class TestParser:
    def test_serve_defaults(self):
        args = cli.build_parser().parse_args(["serve"])

        assert args.command == "serve"
        assert args.host == "0.0.0.0"
        assert args.port is None

    def test_fetch_rejects_unknown_resource(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["fetch", "mixtapes"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestCheckConfig:
    def test_passes_with_key(self, monkeypatch, capsys):
        monkeypatch.setenv("GEMINI_API_KEY", "k")

        cli.main(["check-config"])

        assert "Configuration Validated" in capsys.readouterr().out

    def test_missing_key_exits(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with pytest.raises(SystemExit) as exc:
            cli.main(["check-config"])

        assert exc.value.code == 1

    def test_bad_port_exits(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")

        with pytest.raises(SystemExit) as exc:
            cli.main(["check-config"])

        assert exc.value.code == 1


class TestFetch:
    def test_prints_fallback_albums(self, monkeypatch, capsys):
        monkeypatch.setattr(
            cli,
            "build_async_client",
            lambda: httpx.AsyncClient(transport=httpx.MockTransport(unreachable)),
        )

        cli.main(["fetch", "albums"])

        out = capsys.readouterr()
        albums = json.loads(out.out)
        assert [a["title"] for a in albums][0] == "Katana Dreams"
        assert "trackCount" in albums[0]
        assert "(fallback)" in out.err
