"""Static front-end serving."""

import pytest


@pytest.fixture
def site(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "robots.txt").write_text("User-agent: *")

    build = tmp_path / "build"
    (build / "static").mkdir(parents=True)
    (build / "index.html").write_text("<html>spa</html>")
    (build / "static" / "app.js").write_text("console.log('app')")
    return tmp_path


async def test_public_files_served_in_development(site, client_factory):
    client = await client_factory()

    response = await client.get("/robots.txt")

    assert response.status_code == 200
    assert response.text == "User-agent: *"


async def test_build_not_served_in_development(site, client_factory):
    client = await client_factory()

    response = await client.get("/static/app.js")

    assert response.status_code == 404


async def test_build_assets_served_in_production(site, client_factory):
    client = await client_factory(env_mode="production")

    response = await client.get("/static/app.js")

    assert response.status_code == 200
    assert "console.log" in response.text


async def test_unknown_path_falls_back_to_index_in_production(site, client_factory):
    client = await client_factory(env_mode="production")

    for path in ("/", "/orders/17", "/checkout"):
        response = await client.get(path)
        assert response.status_code == 200
        assert response.text == "<html>spa</html>"


async def test_api_paths_never_fall_back_to_index(site, client_factory):
    client = await client_factory(env_mode="production")

    response = await client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


async def test_api_routes_still_win_over_catch_all(site, client_factory):
    client = await client_factory(env_mode="production")

    response = await client.get("/api/orders")

    assert response.json() == {"message": "success", "data": []}


async def test_path_traversal_is_refused(site, client_factory):
    (site / "secret.txt").write_text("nope")
    client = await client_factory(env_mode="production")

    response = await client.get("/..%2Fsecret.txt")

    assert "nope" not in response.text
