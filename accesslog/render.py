# -*- coding: utf-8 -*-
"""Renders a compiled :class:`~accesslog.program.FormatProgram` into
one access log line.

Each distinct slot in the program is resolved exactly once per render,
through the resolver registered for its directive kind, and the value
is reused at every position the slot appears. Resolvers receive the
request, the response capture, the render instant, and the slot's key.
"""

import time
import base64
import datetime

from boltons.timeutils import UTC, LocalTZ

from accesslog import common
from accesslog.common import LOOPBACK_HOST, EMPTY_VALUE, DEFAULT_TIME_FORMAT
from accesslog.context import note
from accesslog.emitters import StreamEmitter
from accesslog.program import DirectiveSlot
from accesslog.timefmt import translate


__all__ = ['render', 'RenderOptions', 'RESOLVER_MAP']


class RenderOptions(object):
    """Options shared by every render of a program.

    Args:
        emitter: Where rendered lines go; any object with an
            ``emit_entry(entry)`` method. Defaults to a
            :class:`~accesslog.emitters.StreamEmitter` on stdout,
            created on first use.
        time (datetime): A fixed instant to render instead of the
            current time. Naive datetimes are taken to be UTC.
    """
    def __init__(self, **kwargs):
        self._emitter = kwargs.pop('emitter', None)
        fixed_time = kwargs.pop('time', None)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))
        if fixed_time is not None:
            if not isinstance(fixed_time, datetime.datetime):
                raise TypeError('expected datetime for time, not %r'
                                % (fixed_time,))
            if fixed_time.tzinfo is None:
                fixed_time = fixed_time.replace(tzinfo=UTC)
        self.time = fixed_time

    @property
    def emitter(self):
        if self._emitter is None:
            self._emitter = StreamEmitter('stdout')
        return self._emitter

    def get_time(self):
        if self.time is not None:
            return self.time
        return datetime.datetime.now(LocalTZ)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s emitter=%r time=%r>' % (cn, self._emitter, self.time)


def _remote_host(request, capture, now, key):
    return request.host or LOOPBACK_HOST


def _identity(request, capture, now, key):
    return EMPTY_VALUE


def _user(request, capture, now, key):
    scheme, _, credentials = request.get_header('Authorization').partition(' ')
    if scheme.lower() != 'basic' or not credentials:
        return EMPTY_VALUE
    try:
        decoded = base64.b64decode(credentials.strip(), validate=True)
        decoded = decoded.decode('utf-8')
    except ValueError:
        # covers binascii.Error and UnicodeDecodeError
        return EMPTY_VALUE
    user, sep, _ = decoded.partition(':')
    if not sep:
        return EMPTY_VALUE
    return user or EMPTY_VALUE


def _timestamp(request, capture, now, key):
    if key is None:
        return now.strftime(DEFAULT_TIME_FORMAT)
    return translate(now, key)


def _request_line(request, capture, now, key):
    return ' '.join([request.method.upper(), request.path, request.protocol])


def _status(request, capture, now, key):
    return str(capture.status)


def _bytes_written(request, capture, now, key):
    return str(capture.bytes_written)


def _elapsed(request, capture, now, key):
    # microseconds, as with Apache's %D
    return str(int((time.monotonic() - capture.start_time) * 1e6))


def _header(request, capture, now, key):
    return request.get_header(key)


def _percent(request, capture, now, key):
    return '%'


RESOLVER_MAP = {common.REMOTE_HOST: _remote_host,
                common.IDENTITY: _identity,
                common.USER: _user,
                common.TIMESTAMP: _timestamp,
                common.REQUEST_LINE: _request_line,
                common.STATUS: _status,
                common.BYTES_WRITTEN: _bytes_written,
                common.ELAPSED: _elapsed,
                common.HEADER: _header,
                common.PERCENT: _percent}


def render(program, request, capture, options=None):
    """Render *program* for one request. *request* is a
    :class:`~accesslog.request.RequestAttributes` and *capture* the
    request's :class:`~accesslog.capture.ResponseCapture`, fully
    populated by the time this is called.

    A resolver that raises is noted and renders as the empty string.
    """
    if options is None:
        options = RenderOptions()
    now = options.get_time()
    values = {}
    for slot in program.slots:
        resolver = RESOLVER_MAP[slot.kind]
        try:
            values[slot] = resolver(request, capture, now, slot.key)
        except Exception as e:
            note('render', 'got %r resolving %r for %r', e, slot, request)
            values[slot] = ''
    return ''.join([values[seg] if isinstance(seg, DirectiveSlot) else seg
                    for seg in program.segments])
