"""Front-end bundle serving tests."""

import pytest

from studio_api.main import create_app


@pytest.fixture
def bundle(tmp_path):
    (tmp_path / "index.html").write_text("<html><body>studio</body></html>")
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "app.js").write_text("console.log('studio');")
    return tmp_path


@pytest.fixture
def site(make_client, bundle):
    return make_client(static_dir=str(bundle))


def test_root_serves_index(site):
    response = site.get("/")
    assert response.status_code == 200
    assert "studio" in response.text
    assert response.headers["content-type"].startswith("text/html")


def test_asset_is_served(site):
    response = site.get("/assets/app.js")
    assert response.status_code == 200
    assert response.text == "console.log('studio');"


def test_client_side_route_falls_back_to_index(site):
    response = site.get("/blog/some-post")
    assert response.status_code == 200
    assert "<body>studio</body>" in response.text


def test_unknown_api_path_is_json_not_index(site):
    response = site.get("/api/not-a-route")
    assert response.status_code == 404
    assert response.json() == {"message": "API endpoint not found"}


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
def test_unknown_api_path_is_json_for_any_method(site, method):
    response = site.request(method, "/api/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "API endpoint not found"}


def test_write_to_page_path_is_not_found(site):
    response = site.post("/some-page")
    assert response.status_code == 404
    assert "studio" not in response.text


def test_head_root(site):
    assert site.head("/").status_code == 200


def test_api_routes_still_win(site):
    assert site.get("/api/health").json()["status"] == "healthy"
    assert site.get("/api/blog/tags").json() == []


def test_path_traversal_serves_index(site, bundle):
    (bundle.parent / "secret.txt").write_text("top secret")

    response = site.get("/..%2Fsecret.txt")
    assert response.status_code == 200
    assert "top secret" not in response.text


def test_missing_bundle_fails_at_startup(tmp_path, settings_factory, test_database):
    with pytest.raises(RuntimeError, match="Could not find the build directory"):
        create_app(settings_factory(static_dir=str(tmp_path)), test_database)
