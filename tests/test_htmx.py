"""HTMX page rendering, layouts, partials and asset fallback."""

import pytest


def test_home_page_full_render(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["vary"] == "HX-Request"

    html = response.text
    assert "<!DOCTYPE html>" in html
    assert "<title>Home Page</title>" in html
    assert "Welcome to Lokstra HTMX Demo" in html
    assert "Partial rendering support" in html


def test_partial_render_for_htmx_requests(client):
    response = client.get("/about", headers={"HX-Request": "true"})
    assert response.status_code == 200

    html = response.text
    assert "<!DOCTYPE html>" not in html
    assert "<nav" not in html
    assert "<title>About Us</title>" in html
    assert "Charlie" in html
    assert "Product Manager" in html


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/products", "Widget B"),
        ("/products/", "$49.99"),
        ("/contact", "+1-555-0123"),
        ("/about", "This is the about page with dynamic content"),
    ],
)
def test_pages_render_page_data(client, path, expected):
    response = client.get(path)
    assert response.status_code == 200
    assert expected in response.text


def test_admin_mount_uses_admin_layout(client):
    for path in ("/admin", "/admin/"):
        response = client.get(path)
        assert response.status_code == 200
        assert "<title>Admin Dashboard | Admin</title>" in response.text
        assert 'class="sidebar"' in response.text


def test_unknown_page_renders_not_found_page(client):
    response = client.get("/no-such-page")
    assert response.status_code == 404
    assert "Page Not Found" in response.text


def test_asset_fallback_from_mount_sources(client):
    response = client.get("/robots.txt")
    assert response.status_code == 200
    assert "Disallow: /admin" in response.text


@pytest.mark.parametrize(
    "path",
    ["/layouts/base.html", "/pages/index.html", "/missing.png", "/admin/robots.txt"],
)
def test_asset_fallback_misses(client, path):
    assert client.get(path).status_code == 404


def test_static_mount(client):
    response = client.get("/static/app.js")
    assert response.status_code == 200
    assert "showMessage" in response.text
    assert client.get("/static/nope.js").status_code == 404


def test_routes_are_not_shadowed_by_root_mount(client):
    assert client.get("/health").json()["data"] == "OK"
    assert client.get("/page-data/about").json()["title"] == "About Us"


def test_sources_priority(tmp_path, make_client):
    override = tmp_path / "htmx_content"
    (override / "pages").mkdir(parents=True)
    (override / "pages" / "about.html").write_text(
        "{% extends layout %}{% block content %}Custom about for {{ data.team|length }} people{% endblock %}"
    )
    (override / "robots.txt").write_text("overridden")

    client = make_client(
        htmx=[{"path": "/", "layout": "base.html", "sources": [str(override), "./missing", "@web_app"]}],
    )

    about = client.get("/about")
    assert about.status_code == 200
    assert "Custom about for 3 people" in about.text
    assert "<nav" in about.text

    # pages missing from the override come from the bundled web_app
    assert "Widget A" in client.get("/products").text
    assert client.get("/robots.txt").text == "overridden"


def test_disk_assets_mode(tmp_path, make_client):
    web_app = tmp_path / "web_app"
    (web_app / "layouts").mkdir(parents=True)
    (web_app / "pages").mkdir()
    (web_app / "layouts" / "plain.html").write_text(
        "<html><title>{{ title }}</title>{% block content %}{% endblock %}</html>"
    )
    (web_app / "pages" / "index.html").write_text(
        "{% extends layout %}{% block content %}disk home{% endblock %}"
    )

    client = make_client(
        htmx=[{"path": "/", "layout": "plain.html", "sources": ["@web_app"]}],
        embedded=False,
    )

    response = client.get("/")
    assert response.status_code == 200
    assert "disk home" in response.text
    assert "<title>Home Page</title>" in response.text

    # no 404 page on disk: plain fallback
    missing = client.get("/nothing")
    assert missing.status_code == 404
    assert "404 Not Found" in missing.text


def test_spa_static_mount(tmp_path, make_client):
    spa = tmp_path / "spa"
    spa.mkdir()
    (spa / "index.html").write_text("<div id=app></div>")
    (spa / "main.js").write_text("console.log(1)")

    client = make_client(static=[{"path": "/app", "spa": True, "sources": [str(spa)]}])

    assert client.get("/app/main.js").text == "console.log(1)"
    deep = client.get("/app/some/client/route")
    assert deep.status_code == 200
    assert deep.text == "<div id=app></div>"


@pytest.mark.parametrize(
    "path",
    [
        "/x/%2e%2e/layouts/base.html",
        "/x/%2e%2e/pages/index.html",
        "/%2e/layouts/base.html",
        "/admin/x/%2e%2e/layouts/admin.html",
    ],
)
def test_reserved_dirs_not_reachable_through_dot_segments(client, path):
    response = client.get(path)
    assert response.status_code == 404
    assert "{% block" not in response.text


@pytest.mark.parametrize(
    "path",
    ["/x/%2e%2e/%2e%2e/pages/about", "/x/%2e%2e/about", "/about/%2e", "/admin/%2e%2e/about"],
)
def test_dot_segment_pages_are_not_found(client, path):
    assert client.get(path).status_code == 404


def test_head_on_pages(client):
    assert client.head("/").status_code == 200
    assert client.head("/admin/").status_code == 200
