import pytest
from sqlalchemy.orm import Session

from categories.config import Settings
from categories.db.session import make_engine
from categories.models.base import Base
from categories.schemas.category import CategoryCreate
from categories.services import category_service
from categories.services.ledger import CategorizationLedger
from tests.entities import Article, Video


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def ledger(db, settings) -> CategorizationLedger:
    return CategorizationLedger(db, settings)


@pytest.fixture
def make_category(db, settings):
    def _make(name: str, parent=None, **fields):
        data = CategoryCreate(
            name={"en": name},
            parent_id=parent.id if parent is not None else None,
            **fields,
        )
        return category_service.create_category(db, settings, data)

    return _make


@pytest.fixture
def make_article(db):
    def _make(title: str = "Article", type=None) -> Article:
        article = Article(title=title, type=type)
        db.add(article)
        db.flush()
        return article

    return _make


@pytest.fixture
def make_video(db):
    def _make(title: str = "Video") -> Video:
        video = Video(title=title)
        db.add(video)
        db.flush()
        return video

    return _make
