import json

import httpx
import pytest

from wdsession.config.settings import SessionSettings, WebdriverSettings
from wdsession.core.capabilities import ProtocolDialect
from wdsession.core.session import Session, SessionState
from wdsession.transport.base import SessionRequest
from wdsession.transport.webdriver import (
    HttpTransport, build_session_payload, extract_error, parse_session_response,
)
from wdsession.utils.errors import CloseError, HandshakeError


def make_transport(handler):
    webdriver = WebdriverSettings(host='localhost', port=4444)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=webdriver.base_url)
    return HttpTransport(webdriver, client=client)


def test_legacy_payload():
    request = SessionRequest({'browserName': 'firefox'}, {'ignored': True}, ProtocolDialect.LEGACY)
    assert build_session_payload(request) == {'desiredCapabilities': {'browserName': 'firefox'}}


def test_w3c_payload():
    request = SessionRequest({'browserName': 'chrome'}, {'browserName': 'chrome', 'x': 1}, ProtocolDialect.W3C)
    payload = build_session_payload(request)
    assert payload['capabilities'] == {'alwaysMatch': {'browserName': 'chrome', 'x': 1}, 'firstMatch': [{}]}
    assert payload['desiredCapabilities'] == {'browserName': 'chrome'}


def test_parse_w3c_response():
    body = {'value': {'sessionId': 'abc', 'capabilities': {'browserName': 'chrome'}}}
    assert parse_session_response(body) == {'sessionId': 'abc', 'capabilities': {'browserName': 'chrome'}}


def test_parse_legacy_response():
    body = {'sessionId': 'abc', 'status': 0, 'value': {'browserName': 'firefox'}}
    assert parse_session_response(body) == {'sessionId': 'abc', 'capabilities': {'browserName': 'firefox'}}


@pytest.mark.parametrize('body, message', [
    ({'value': {'error': 'session not created', 'message': 'no chrome binary'}}, 'no chrome binary'),
    ({'status': 33, 'value': {'message': 'legacy failure'}}, 'legacy failure'),
    ({'status': 13}, 'status 13'),
    ({'status': 0, 'value': {}}, None),
])
def test_extract_error(body, message):
    assert extract_error(body) == message


@pytest.mark.asyncio
async def test_session_created_over_http():
    seen = {}

    def handler(request):
        seen['method'] = request.method
        seen['path'] = request.url.path
        seen['body'] = json.loads(request.content)
        return httpx.Response(200, json={
            'value': {'sessionId': 'abc123', 'capabilities': {'browserName': 'firefox', 'browserVersion': '121.0'}},
        })

    transport = make_transport(handler)
    session = Session(SessionSettings(output=False), transport)

    data = await session.create({'headless': True})

    assert data == {'sessionId': 'abc123', 'capabilities': {'browserName': 'firefox', 'browserVersion': '121.0'}}
    assert session.get_session_id() == 'abc123'
    assert seen['method'] == 'POST'
    assert seen['path'] == '/session'
    assert seen['body']['desiredCapabilities']['alwaysMatch']['moz:firefoxOptions']['args'] == ['-headless']
    await transport.aclose()


@pytest.mark.asyncio
async def test_driver_refusal_becomes_handshake_error():
    def handler(request):
        return httpx.Response(500, json={'value': {'error': 'session not created', 'message': 'no binary'}})

    transport = make_transport(handler)
    session = Session(SessionSettings(output=False), transport)

    with pytest.raises(HandshakeError) as exc_info:
        await session.create()

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == 'no binary'
    assert session.state is SessionState.IDLE
    await transport.aclose()


@pytest.mark.asyncio
async def test_connection_failure_becomes_handshake_error():
    def handler(request):
        raise httpx.ConnectError('ECONNREFUSED', request=request)

    transport = make_transport(handler)
    session = Session(SessionSettings(output=False), transport)

    with pytest.raises(HandshakeError) as exc_info:
        await session.create()

    assert isinstance(exc_info.value.error, httpx.ConnectError)
    await transport.aclose()


@pytest.mark.asyncio
async def test_missing_session_id_is_an_error():
    transport = make_transport(lambda request: httpx.Response(200, json={'value': {'browserName': 'firefox'}}))
    session = Session(SessionSettings(output=False), transport)

    with pytest.raises(HandshakeError):
        await session.create()
    await transport.aclose()


@pytest.mark.asyncio
async def test_close_deletes_session():
    calls = []

    def handler(request):
        calls.append((request.method, request.url.path))
        if request.method == 'POST':
            return httpx.Response(200, json={'value': {'sessionId': 'abc123', 'capabilities': {}}})
        return httpx.Response(200, json={'value': None})

    transport = make_transport(handler)
    session = Session(SessionSettings(output=False), transport)
    await session.create()

    assert await session.close('done') is None
    assert calls[-1] == ('DELETE', '/session/abc123')
    assert session.get_session_id() is None
    assert transport.session_id is None
    await transport.aclose()


@pytest.mark.asyncio
async def test_close_failure_raises_close_error():
    transport = make_transport(
        lambda request: httpx.Response(404, json={'value': {'error': 'invalid session id', 'message': 'gone'}}))

    with pytest.raises(CloseError) as exc_info:
        await transport.close_session('abc123')

    assert exc_info.value.status_code == 404
    assert exc_info.value.session_id == 'abc123'
    await transport.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize('session_id', [None, 0])
async def test_close_without_session_makes_no_request(session_id):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={'value': None})

    transport = make_transport(handler)

    with pytest.raises(CloseError):
        await transport.close_session(session_id)

    assert calls == []
    await transport.aclose()
