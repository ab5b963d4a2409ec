import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from storefront.config import Settings
from storefront.database import create_storage_engine
from storefront.main import Storefront
from storefront.schemas.book_schemas import Book
from storefront.services.local_storage import LocalStorage
from tests.fake_backend import BackendState, create_app

BASE_URL = "http://testserver"


class ASGIAdapter(BaseAdapter):
    """Lets a requests.Session talk to an ASGI app through Starlette's TestClient."""

    def __init__(self, app):
        super().__init__()
        self.client = TestClient(app)

    def send(self, request, **kwargs):
        upstream = self.client.request(
            request.method,
            request.url,
            content=request.body,
            headers=dict(request.headers),
        )

        response = requests.Response()
        response.status_code = upstream.status_code
        response.reason = upstream.reason_phrase
        response.headers = CaseInsensitiveDict(dict(upstream.headers.items()))
        response._content = upstream.content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        self.client.close()


@pytest.fixture
def backend():
    return BackendState()


@pytest.fixture
def http_session(backend):
    session = requests.Session()
    session.mount(BASE_URL, ASGIAdapter(create_app(backend)))
    yield session
    session.close()


@pytest.fixture
def engine():
    return create_storage_engine("sqlite://")


@pytest.fixture
def storage(engine):
    return LocalStorage(engine)


@pytest.fixture
def config():
    return Settings(api_url=BASE_URL, auth_ready_timeout=0.1)


@pytest.fixture
def storefront(config, http_session, engine):
    store = Storefront(config, http_session=http_session, engine=engine)
    yield store
    store.close()


@pytest.fixture
def logged_in(storefront):
    storefront.auth.login("reader@example.com", "secret")
    return storefront


@pytest.fixture
def admin(storefront):
    storefront.auth.login("admin@example.com", "secret")
    return storefront


@pytest.fixture
def books(backend):
    return {book_id: Book.model_validate(data) for book_id, data in backend.books.items()}
