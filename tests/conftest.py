"""
Pytest fixtures and configuration for Umami tests
"""
import os
import sys
import pytest
from unittest.mock import MagicMock

# Add app directory to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'app'))


@pytest.fixture(scope='session')
def app_config():
    """App configuration overrides for tests"""
    return {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'LOG_QUERY': False,
    }


@pytest.fixture
def app(app_config):
    """Fresh application bound to its own in-memory database"""
    from app import create_app
    from db import db

    _app = create_app(app_config)
    with _app.app_context():
        yield _app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.error = MagicMock()
    logger.warning = MagicMock()
    logger.debug = MagicMock()
    return logger


@pytest.fixture
def account(app):
    from db import db
    from models import Account

    item = Account(username='admin', password='$2b$10$hash', is_admin=True)
    db.session.add(item)
    db.session.commit()
    return item


@pytest.fixture
def website(app, account):
    from db import db
    from models import Website

    item = Website(user_id=account.user_id, name='Example', domain='example.com')
    db.session.add(item)
    db.session.commit()
    return item


@pytest.fixture
def session_row(app, website):
    from db import db
    from models import Session

    item = Session(website_id=website.website_id, hostname='example.com', browser='chrome', os='Linux')
    db.session.add(item)
    db.session.commit()
    return item


@pytest.fixture
def add_pageview(app):
    """Insert a pageview with an explicit created_at"""
    from db import db
    from models import Pageview

    def _add(website, session, created_at, url='/'):
        item = Pageview(
            website_id=website.website_id,
            session_id=session.session_id,
            url=url,
            created_at=created_at,
        )
        db.session.add(item)
        db.session.commit()
        return item

    return _add


@pytest.fixture
def add_session(app):
    from db import db
    from models import Session

    def _add(website, **data):
        item = Session(website_id=website.website_id, **data)
        db.session.add(item)
        db.session.commit()
        return item

    return _add
