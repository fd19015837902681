# -*- coding: utf-8 -*-

import re
import time
import base64
import datetime

import pytest
from boltons.timeutils import UTC

from accesslog import common
from accesslog.context import AccessLogContext
from accesslog.capture import ResponseCapture
from accesslog.program import compile_format, common_program
from accesslog.render import render, RenderOptions, RESOLVER_MAP
from accesslog.request import RequestAttributes


FIXED_TIME = datetime.datetime(2013, 2, 3, 19, 54, tzinfo=UTC)
OPTIONS = RenderOptions(time=FIXED_TIME)


def _basic_auth(user, password):
    creds = ('%s:%s' % (user, password)).encode('utf-8')
    return 'Basic ' + base64.b64encode(creds).decode('ascii')


def _get_request(headers=None, **kw):
    kw.setdefault('method', 'GET')
    kw.setdefault('path', '/testing')
    kw.setdefault('protocol', 'HTTP/1.1')
    return RequestAttributes(headers=headers, **kw)


def _get_capture(status=200, chunks=(b'{"testing": true}',)):
    capture = ResponseCapture()
    capture.set_status(status)
    for chunk in chunks:
        capture.write(chunk)
    return capture


def _render(format_str, request=None, capture=None, options=OPTIONS):
    return render(compile_format(format_str),
                  request or _get_request(),
                  capture or _get_capture(),
                  options)


def test_common_line():
    res = render(common_program(), _get_request(), _get_capture(), OPTIONS)
    assert res == ('127.0.0.1 - - [03/02/2013:07:54:00 +0000]'
                   ' "GET /testing HTTP/1.1" 200 17')


def test_common_line_with_user():
    req = _get_request({'Authorization': _basic_auth('Frank', '<none>')})
    res = render(common_program(), req, _get_capture(), OPTIONS)
    assert res == ('127.0.0.1 - Frank [03/02/2013:07:54:00 +0000]'
                   ' "GET /testing HTTP/1.1" 200 17')


def test_user_fallbacks():
    bad_values = ['Basic !!!notbase64',
                  'Bearer ' + base64.b64encode(b'Frank:pw').decode('ascii'),
                  'Basic ' + base64.b64encode(b'nocolon').decode('ascii'),
                  'Basic ' + base64.b64encode(b'\xff\xfe:pw').decode('ascii'),
                  'Basic',
                  '']
    for value in bad_values:
        req = _get_request({'Authorization': value})
        assert _render('%u', req) == '-', value

    req = _get_request({'authorization': _basic_auth('Frank', 'a:b:c')})
    assert _render('%u', req) == 'Frank'


def test_remote_host_and_identity():
    assert _render('%h %l') == '127.0.0.1 -'
    req = _get_request(host='10.1.2.3')
    assert _render('%h %l', req) == '10.1.2.3 -'


def test_request_line():
    req = _get_request(method='post', path='/a/b', protocol='HTTP/2')
    assert _render('%r', req) == 'POST /a/b HTTP/2'


def test_headers():
    req = _get_request([('Referer', 'http://localhost/test'),
                        ('user-agent', 'pytest')])
    res = _render('"%{referer}i" "%{User-Agent}i" "%{X-Missing}i"', req)
    assert res == '"http://localhost/test" "pytest" ""'


def test_status_forms_match():
    for status in (200, 404, 503):
        capture = _get_capture(status)
        assert _render('%s|%>s', capture=capture) == '%s|%s' % (status,
                                                                status)


def test_first_status_rendered():
    capture = ResponseCapture()
    capture.set_status(401)
    capture.set_status(200)
    assert _render('%s', capture=capture) == '401'


def test_unset_status():
    assert _render('%s %b', capture=ResponseCapture()) == '0 0'


def test_bytes_written():
    capture = _get_capture(chunks=[b'a' * 5, b'b' * 7, b''])
    assert _render('%b', capture=capture) == '12'


def test_percent():
    assert _render('%%') == '%'
    assert _render('100%% %s%%') == '100% 200%'
    assert _render('%%%h%%') == '%127.0.0.1%'


def test_repeated_directive_same_value():
    assert _render('%s %s') == '200 200'
    res = _render('%t%t')
    assert res == '[03/02/2013:07:54:00 +0000]' * 2


def test_resolved_once_per_slot(monkeypatch):
    calls = []

    def counting_user(request, capture, now, key):
        calls.append(key)
        return 'someone'

    monkeypatch.setitem(RESOLVER_MAP, common.USER, counting_user)
    assert _render('%u %u %u') == 'someone someone someone'
    assert len(calls) == 1


def test_time_subformat():
    assert _render('%{%s}t') == '1359921240'
    assert _render('%{%w}t') == '7'
    assert _render('[%{%d/%b/%Y:%H:%M:%S %z}t]') == '[03/Feb/2013:19:54:00 +0000]'
    assert _render('%{%c}t') == '?'


def test_elapsed():
    capture = _get_capture()
    capture.start_time = time.monotonic() - 0.5
    elapsed = int(_render('%D', capture=capture))
    assert 500000 <= elapsed < 60 * 1000000


def test_elapsed_ignores_wall_clock(monkeypatch):
    capture = _get_capture()
    capture.start_time = time.monotonic() - 0.5
    # wall clock set back a day mid-request
    monkeypatch.setattr(time, 'time', lambda: 0.0)
    elapsed = int(_render('%D', capture=capture))
    assert 500000 <= elapsed < 60 * 1000000


def test_resolver_error_noted(monkeypatch):
    notes = []
    ctx = AccessLogContext(note_handlers=[lambda n, m: notes.append((n, m))])
    monkeypatch.setattr('accesslog.context.ACCESSLOG_CONTEXT', ctx)

    def broken(request, capture, now, key):
        raise RuntimeError('whoops')

    monkeypatch.setitem(RESOLVER_MAP, common.REQUEST_LINE, broken)
    assert _render('[%r] %s') == '[] 200'
    assert notes and notes[0][0] == 'render'
    assert 'whoops' in notes[0][1]


def test_wall_clock():
    res = _render('%t', options=RenderOptions())
    assert re.match(r'^\[\d{2}/\d{2}/\d{4}:\d{2}:\d{2}:\d{2} [+-]\d{4}\]$',
                    res)


def test_render_options():
    naive = RenderOptions(time=datetime.datetime(2013, 2, 3, 19, 54))
    assert naive.time == FIXED_TIME
    assert naive.get_time() is naive.time
    assert 'time=' in repr(naive)

    with pytest.raises(TypeError):
        RenderOptions(clock=FIXED_TIME)
    with pytest.raises(TypeError):
        RenderOptions(time=1359921240)
