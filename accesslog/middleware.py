# -*- coding: utf-8 -*-
"""WSGI middleware that writes one access log line per request.

>>> from accesslog import AccessLogMiddleware, COMBINED_LOG_FORMAT
>>> app = AccessLogMiddleware(wsgi_app, COMBINED_LOG_FORMAT)  # doctest: +SKIP

The format is compiled once, when the middleware is built. For each
request, the status and body size are captured as the application
responds, and the line is rendered and emitted when the server closes
the response, after the whole body has been produced. If the
application raises, the exception propagates and nothing is logged
for that request.
"""

from accesslog.common import COMMON_LOG_FORMAT, COMBINED_LOG_FORMAT
from accesslog.context import note
from accesslog.capture import ResponseCapture
from accesslog.program import compile_format, FormatProgram
from accesslog.render import render, RenderOptions
from accesslog.request import RequestAttributes


__all__ = ['AccessLogMiddleware', 'format_with', 'common_log', 'combined_log']


def parse_status_code(status):
    try:
        return int(status.split(None, 1)[0])
    except (AttributeError, IndexError, ValueError):
        note('parse_status', 'could not parse status line %r', status)
        return 0


class LoggingIterator(object):
    """Wraps the application's response iterable, counting each chunk
    into the capture as it goes by, and logging on :meth:`close` once
    the iterable has been fully consumed.
    """
    def __init__(self, iterable, capture, on_complete):
        self._iterable = iterable
        self._capture = capture
        self._on_complete = on_complete
        self._exhausted = False
        self._closed = False

    def __iter__(self):
        for chunk in self._iterable:
            self._capture.write(chunk)
            yield chunk
        self._exhausted = True

    def close(self):
        if self._closed:
            return
        self._closed = True
        try:
            iterable_close = getattr(self._iterable, 'close', None)
            if callable(iterable_close):
                iterable_close()
        finally:
            if self._exhausted:
                self._on_complete()


class AccessLogMiddleware(object):
    """Wraps the WSGI application *app*, logging each request with the
    Apache-style *format*, which may be a format string or an already
    compiled :class:`~accesslog.program.FormatProgram`.

    Keyword arguments are passed on to
    :class:`~accesslog.render.RenderOptions`: *emitter* for where
    lines go, and *time* to pin the clock.
    """
    def __init__(self, app, format=COMMON_LOG_FORMAT, **kwargs):
        self.app = app
        if isinstance(format, FormatProgram):
            self.program = format
        else:
            self.program = compile_format(format)
        self.options = RenderOptions(**kwargs)

    def __call__(self, environ, start_response):
        capture = ResponseCapture()

        def capturing_start_response(status, headers, exc_info=None):
            capture.set_status(parse_status_code(status))
            write = start_response(status, headers, exc_info)

            def capturing_write(data):
                capture.write(data)
                return write(data)
            return capturing_write

        def log_request():
            request = RequestAttributes.from_environ(environ)
            entry = render(self.program, request, capture, self.options)
            self.options.emitter.emit_entry(entry)

        iterable = self.app(environ, capturing_start_response)
        return LoggingIterator(iterable, capture, log_request)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s app=%r program=%r>' % (cn, self.app, self.program)


def format_with(format, **kwargs):
    """Returns a decorator which wraps a WSGI application in an
    :class:`AccessLogMiddleware` using *format* and *kwargs*. The
    format is compiled once, here, and shared by every application the
    decorator wraps.
    """
    program = compile_format(format)

    def wrap_app(app):
        return AccessLogMiddleware(app, program, **kwargs)
    return wrap_app


def common_log(**kwargs):
    return format_with(COMMON_LOG_FORMAT, **kwargs)


def combined_log(**kwargs):
    return format_with(COMBINED_LOG_FORMAT, **kwargs)
