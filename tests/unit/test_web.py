from __future__ import annotations

from types import SimpleNamespace

from fastapi import APIRouter, FastAPI, Request
from fastapi.testclient import TestClient

from sane_permalinks.app.infra.db.memory_repo import InMemoryRecordFinder
from sane_permalinks.app.main import create_app
from sane_permalinks.app.services.registry import PermalinkRegistry
from sane_permalinks.app.web import install_permalink_handlers


class Post(SimpleNamespace):
    pass


def build_registry() -> PermalinkRegistry:
    registry = PermalinkRegistry()
    registry.register(
        Post,
        InMemoryRecordFinder([Post(id=23, title="Hello World")]),
        source_field="title",
        prepend_id=True,
        raise_on_wrong_permalink=True,
    )
    return registry


def build_router(registry: PermalinkRegistry) -> APIRouter:
    router = APIRouter()

    @router.get("/posts/{param}")
    def show_post(param: str):
        post = registry.get_by_param(Post, param)
        return {"id": post.id, "title": post.title, "param": registry.to_param(post)}

    return router


def post_url(request: Request, record: Post, canonical_param: str) -> str:
    return f"/posts/{canonical_param}"


class TestCreateApp:
    def test_health(self) -> None:
        client = TestClient(create_app(post_url))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_canonical_permalink_is_served(self) -> None:
        app = create_app(post_url, routers=[build_router(build_registry())])
        client = TestClient(app)

        response = client.get("/posts/23-hello-world")

        assert response.status_code == 200
        assert response.json()["param"] == "23-hello-world"

    def test_bare_id_is_served(self) -> None:
        app = create_app(post_url, routers=[build_router(build_registry())])
        client = TestClient(app)

        response = client.get("/posts/23")

        assert response.status_code == 200
        assert response.json()["title"] == "Hello World"

    def test_stale_permalink_redirects(self) -> None:
        app = create_app(post_url, routers=[build_router(build_registry())])
        client = TestClient(app)

        response = client.get("/posts/23-old-title", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "/posts/23-hello-world"

    def test_unknown_record_is_404(self) -> None:
        app = create_app(post_url, routers=[build_router(build_registry())])
        client = TestClient(app)

        response = client.get("/posts/99-nothing")

        assert response.status_code == 404
        assert "99-nothing" in response.json()["detail"]


class TestInstallPermalinkHandlers:
    def test_custom_redirect_status(self) -> None:
        app = FastAPI()
        app.include_router(build_router(build_registry()))
        install_permalink_handlers(app, post_url, redirect_status=302)
        client = TestClient(app)

        response = client.get("/posts/23-hello", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/posts/23-hello-world"
