from app import create_app
from config import TestingConfig
from utils.security import RATE_LIMIT_REQUESTS, check_rate_limit, reset_rate_limits


def test_forwarded_header_is_ignored_without_proxy_fix(app, client):
    app.config['RATE_LIMIT_MAX_REQUESTS'] = 1
    form = {'name': 'Grace', 'email': 'grace@example.com', 'message': 'Hi'}

    client.post('/contact', data=form, headers={'X-Forwarded-For': '198.51.100.1'})
    client.post('/contact', data=form, headers={'X-Forwarded-For': '198.51.100.2'})

    assert list(RATE_LIMIT_REQUESTS) == ['127.0.0.1']
    with client.session_transaction() as sess:
        messages = [message for _, message in sess['_flashes']]
    assert 'Too many requests. Please try again later.' in messages


def test_proxy_fix_uses_forwarded_client(monkeypatch):
    monkeypatch.setattr(TestingConfig, 'PROXY_FIX_X_FOR', 1)
    app = create_app('testing')
    reset_rate_limits()

    app.test_client().post('/contact', data={}, headers={'X-Forwarded-For': '203.0.113.7'})

    assert '203.0.113.7' in RATE_LIMIT_REQUESTS
    reset_rate_limits()


def test_idle_clients_are_forgotten(app):
    RATE_LIMIT_REQUESTS['10.0.0.9'] = [(0.0, 'contact')]

    with app.test_request_context(environ_base={'REMOTE_ADDR': '10.0.0.1'}):
        assert check_rate_limit('contact')

    assert '10.0.0.9' not in RATE_LIMIT_REQUESTS
    assert len(RATE_LIMIT_REQUESTS['10.0.0.1']) == 1


def test_limit_is_per_endpoint(app):
    app.config['RATE_LIMIT_MAX_REQUESTS'] = 1

    with app.test_request_context():
        assert check_rate_limit('contact')
        assert not check_rate_limit('contact')
        assert check_rate_limit('login')
