"""
Tests for query timing logs
"""
from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError


@pytest.fixture
def logging_app(app_config):
    from app import create_app
    from db import db

    _app = create_app(dict(app_config, LOG_QUERY=True))
    with _app.app_context():
        yield _app
        db.session.remove()
        db.drop_all()


class TestQueryLogging:
    """Statements are logged with params and duration only when enabled"""

    def test_statements_are_logged_when_enabled(self, logging_app, mock_logger):
        from db import get_account

        with patch('db.query_logger', mock_logger):
            get_account('nobody')

        assert mock_logger.info.called
        message = mock_logger.info.call_args[0][0]
        assert 'FROM account' in message
        assert '->' in message
        assert 'ms' in message

    def test_statements_are_not_logged_by_default(self, app, mock_logger):
        from db import get_account

        with patch('db.query_logger', mock_logger):
            get_account('nobody')

        mock_logger.info.assert_not_called()

    def test_failed_statement_does_not_leave_start_time_behind(self, logging_app):
        from db import db

        with pytest.raises(OperationalError):
            db.session.execute(text('select * from missing_table'))
        db.session.rollback()

        assert db.session.connection().info.get('query_start_time') == []


class TestFormatQueryLog:
    """Tests for format_query_log"""

    def test_layout(self):
        from utils import format_query_log, YELLOW, BRIGHT_GREEN

        message = format_query_log('SELECT *\n   FROM pageview', (1, 2), 12.345)

        assert message.startswith(f'{YELLOW}(1, 2)')
        assert '-> SELECT * FROM pageview' in message
        assert f'{BRIGHT_GREEN}12.3ms' in message

    def test_password_parameters_are_masked(self):
        from utils import format_query_log

        message = format_query_log('INSERT INTO account', {'username': 'admin', 'password': 'hunter2'}, 1.0)

        assert 'hunter2' not in message
        assert 'admin' in message
