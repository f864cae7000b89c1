"""Tests for serving the built client and its single-page-app fallback."""

import pytest

INDEX_HTML = "<!doctype html><html><body><div id=\"root\"></div></body></html>"


@pytest.fixture
def build_dir(settings):
    build = settings.CLIENT_BUILD_DIR
    (build / "static").mkdir(parents=True)
    (build / "index.html").write_text(INDEX_HTML)
    (build / "static" / "main.js").write_text("console.log('memorial')")
    return build


def test_unmatched_path_serves_index(client, build_dir):
    for path in ["/", "/memories/3", "/some/deep/route"]:
        r = client.get(path)
        assert r.status_code == 200
        assert r.text == INDEX_HTML
        assert r.headers["content-type"].startswith("text/html")


def test_existing_build_file_is_served(client, build_dir):
    r = client.get("/static/main.js")
    assert r.status_code == 200
    assert "memorial" in r.text


def test_api_paths_do_not_fall_back(client, build_dir):
    r = client.get("/api/unknown")
    assert r.status_code == 404
    assert "error" in r.json()


def test_api_routes_take_precedence(client, build_dir):
    r = client.get("/api/memories")
    assert r.status_code == 200
    assert r.json() == []


def test_missing_build_is_not_found(client):
    r = client.get("/memories/3")
    assert r.status_code == 404
