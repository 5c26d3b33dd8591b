"""Tests for the GitHub releases client against a local HTTP server"""

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from promote_tool.api.exceptions import ReleaseNotFoundError, TransientFetchError
from promote_tool.models.release import Asset
from promote_tool.repository.github import GitHubRepository

TAG = "v1.2.3-build.4"
PAYLOAD = b"PK-not-really-a-zip" * 100


def build_app():
    app = web.Application()
    app["requests"] = []

    async def release(request):
        app["requests"].append(dict(request.headers))
        tag = request.match_info["tag"]
        if tag == "v5.0.0-build.1":
            return web.Response(status=500, text="boom")
        if tag == "v6.0.0-build.1":
            return web.Response(text="<html>proxy login</html>", content_type="text/html")
        if tag == "v7.0.0-build.1":
            return web.json_response({"tag_name": tag, "assets": [{"name": "shop-api.zip"}]})
        if tag != TAG:
            return web.json_response({"message": "Not Found"}, status=404)
        base = str(request.url.with_path("/assets"))
        return web.json_response({
            "tag_name": TAG,
            "name": "Release 1.2.3",
            "assets": [
                {"name": f"shop-jobs-{TAG}.zip", "url": f"{base}/jobs", "size": len(PAYLOAD)},
                {"name": f"shop-api-{TAG}.zip", "url": f"{base}/api", "size": len(PAYLOAD)},
            ],
        })

    async def asset(request):
        app["requests"].append(dict(request.headers))
        name = request.match_info["name"]
        if name == "broken":
            return web.Response(status=502)
        return web.Response(body=PAYLOAD, content_type="application/octet-stream")

    app.router.add_get("/repos/acme/shop/releases/tags/{tag}", release)
    app.router.add_get("/assets/{name}", asset)
    return app


@pytest_asyncio.fixture
async def server():
    test_server = TestServer(build_app())
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest_asyncio.fixture
async def repo(server):
    repository = GitHubRepository("acme", "shop", "secret", api_url=str(server.make_url("/")))
    yield repository
    await repository.close()


@pytest.mark.asyncio
async def test_get_release(repo, server):
    release = await repo.get_release(TAG)

    assert release.tag == TAG
    assert [a.name for a in release.assets] == [f"shop-jobs-{TAG}.zip", f"shop-api-{TAG}.zip"]
    assert release.assets[0].size == len(PAYLOAD)

    headers = server.app["requests"][0]
    assert headers["Authorization"] == "Bearer secret"
    assert headers["Accept"] == "application/vnd.github+json"


@pytest.mark.asyncio
async def test_release_not_found(repo):
    with pytest.raises(ReleaseNotFoundError) as exc_info:
        await repo.get_release("v0.0.1-build.1")

    assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_server_error_is_transient(repo):
    with pytest.raises(TransientFetchError) as exc_info:
        await repo.get_release("v5.0.0-build.1")

    assert exc_info.value.status == 500


@pytest.mark.asyncio
async def test_non_json_release_body_is_transient(repo):
    with pytest.raises(TransientFetchError) as exc_info:
        await repo.get_release("v6.0.0-build.1")

    assert exc_info.value.status == 200
    assert "Invalid release metadata" in str(exc_info.value)


@pytest.mark.asyncio
async def test_malformed_asset_entry_is_transient(repo):
    with pytest.raises(TransientFetchError) as exc_info:
        await repo.get_release("v7.0.0-build.1")

    assert "Invalid release metadata for v7.0.0-build.1" in str(exc_info.value)


@pytest.mark.asyncio
async def test_download_asset(repo, server, tmp_path):
    release = await repo.get_release(TAG)
    destination = tmp_path / ".temp" / release.assets[1].name

    written = await repo.download_asset(release.assets[1], destination)

    assert written == len(PAYLOAD)
    assert destination.read_bytes() == PAYLOAD
    assert server.app["requests"][-1]["Accept"] == "application/octet-stream"


@pytest.mark.asyncio
async def test_failed_download_leaves_no_file(repo, server, tmp_path):
    asset = Asset(name="broken.zip", url=str(server.make_url("/assets/broken")), size=10)
    destination = tmp_path / "broken.zip"

    with pytest.raises(TransientFetchError) as exc_info:
        await repo.download_asset(asset, destination)

    assert exc_info.value.status == 502
    assert not destination.exists()


@pytest.mark.asyncio
async def test_truncated_download_rejected(repo, server, tmp_path):
    asset = Asset(name="api.zip", url=str(server.make_url("/assets/api")), size=len(PAYLOAD) + 1)
    destination = tmp_path / "api.zip"

    with pytest.raises(TransientFetchError, match="Incomplete download"):
        await repo.download_asset(asset, destination)

    assert not destination.exists()


@pytest.mark.asyncio
async def test_unreachable_api(tmp_path):
    server = TestServer(build_app())
    await server.start_server()
    url = str(server.make_url("/"))
    await server.close()

    repository = GitHubRepository("acme", "shop", "secret", api_url=url)
    try:
        with pytest.raises(TransientFetchError):
            await repository.get_release(TAG)
    finally:
        await repository.close()
