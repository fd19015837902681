# -*- coding: utf-8 -*-

import time


OK_STATUS = 200


class ResponseCapture(object):
    """Wraps the response stream of a single request and records what
    the access log needs: the status code and the number of bytes
    written.

    Only :meth:`set_status` and :meth:`write` are intercepted; every
    other attribute is looked up on the *wrapped* stream. *wrapped*
    may be None, in which case the capture only records.

    Only the first status takes effect, and writing before any status
    has been set fixes the status at 200. A status of 0 means none has
    been set yet, so setting it does not fix the status.
    """
    def __init__(self, wrapped=None):
        self.wrapped = wrapped
        self.status = 0
        self.bytes_written = 0
        self.status_fixed = False
        self.start_time = time.monotonic()

    def set_status(self, code, *a, **kw):
        if not self.status_fixed and code:
            self.status = code
            self.status_fixed = True
        if self.wrapped is not None:
            return self.wrapped.set_status(code, *a, **kw)
        return None

    def write(self, data):
        if not self.status_fixed:
            self.status = OK_STATUS
            self.status_fixed = True
        written = None
        if self.wrapped is not None:
            written = self.wrapped.write(data)
        if not isinstance(written, int):
            written = len(data)
        self.bytes_written += written
        return written

    def __getattr__(self, name):
        wrapped = self.__dict__.get('wrapped')
        if wrapped is None:
            raise AttributeError(name)
        return getattr(wrapped, name)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s status=%r bytes_written=%r wrapped=%r>'
                % (cn, self.status, self.bytes_written, self.wrapped))
