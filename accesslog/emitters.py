# -*- coding: utf-8 -*-
"""Emitters are the byte sinks rendered access log lines are written
to. Each takes a line in *text-form* and appends it, plus a line
terminator, to a persistence resource such as stdout, a file, or
memory.

Emitters do no locking. Each line goes out in a single ``write()``
call, so a stream that is safe for one writer, or that the
application synchronizes, never sees a line split by another.
"""

import io
import sys
import errno
from collections import deque

from accesslog.context import note


__all__ = ['StreamEmitter', 'FileEmitter', 'AggregateEmitter']


DEFAULT_SEP = '\n'

stream_types = (io.BytesIO, io.BufferedWriter, io.RawIOBase)


class EncodingLookupError(LookupError):
    pass


class ErrorBehaviorLookupError(LookupError):
    pass


def check_encoding_settings(encoding, errors):
    try:
        ''.encode(encoding)
    except LookupError as le:
        raise EncodingLookupError(le.args[0])
    try:
        '\xdd'.encode('ascii', errors)
    except LookupError as le:
        raise ErrorBehaviorLookupError(le.args[0])
    except UnicodeError:
        # strict handlers are expected to fail here
        pass
    return


class AggregateEmitter(object):
    def __init__(self, limit=None):
        self._limit = limit
        self.items = deque(maxlen=limit)

    def get_entries(self):
        return list(self.items)

    def get_entry(self, idx):
        return self.items[idx]

    def clear(self):
        self.items.clear()

    def emit_entry(self, entry):
        self.items.append(entry)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s limit=%r entry_count=%r>' % (cn, self._limit,
                                                 len(self.items))


class StreamEmitter(object):
    '''Writes access log lines to a binary stream, be it a BytesIO or
    the console (the shortcuts ``"stdout"`` and ``"stderr"``).

    Avoid using StreamEmitter directly when you have a file path for
    your log file. Use FileEmitter instead.
    '''
    def __init__(self, stream, encoding=None, **kwargs):
        if encoding is None:
            encoding = getattr(stream, 'encoding', None) or 'UTF-8'
        errors = kwargs.pop('errors', 'backslashreplace')

        check_encoding_settings(encoding, errors)  # raises on error

        if stream in ('stdout', 'stderr'):
            stream = getattr(sys, stream).buffer

        if not isinstance(stream, stream_types):
            st_names = ', '.join([st.__name__.lstrip('_')
                                  for st in stream_types])
            raise TypeError('%s expected instance of %s, or shortcut'
                            ' values "stderr" or "stdout", not: %r'
                            % (self.__class__.__name__, st_names, stream))
        _mode = getattr(stream, 'mode', None)
        if _mode and 'b' not in _mode:
            raise ValueError('expected stream opened in binary mode,'
                             ' not: %r (mode %s)' % (stream, _mode))
        self.stream = stream
        self._stream_name = getattr(self.stream, 'name', None)

        self.sep = kwargs.pop('sep', DEFAULT_SEP)
        if isinstance(self.sep, str):
            self.sep = self.sep.encode(encoding)
        self.errors = errors
        self.encoding = encoding
        self._reopen_stale = kwargs.pop('reopen_stale', True)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))

    def emit_entry(self, entry):
        entry = entry.encode(self.encoding, self.errors)
        if self.sep:
            entry += self.sep
        try:
            self.stream.write(entry)
            self.flush()
        except Exception as e:
            note('stream_emit', 'got %r on %r.emit_entry()', e, self)
            if (isinstance(e, OSError)
                    and self._reopen_stale
                    and e.errno == errno.ESTALE):
                name = self._stream_name
                if name and name not in ('<stdout>', '<stderr>'):
                    # NB: Stale file handles are pretty common on
                    # network file systems, so we try to reopen the file
                    note('stream_emit', 'reopening stale stream to %r', name)
                    self.stream = open(name, 'ab')

                    # retry writing once
                    self.stream.write(entry)
                    self.flush()
        return

    def flush(self):
        stream_flush = getattr(self.stream, 'flush', None)
        if not callable(stream_flush):
            return
        try:
            stream_flush()
        except Exception as e:
            note('stream_flush', 'got %r on %r.flush()', e, self)

    def __repr__(self):
        return '<%s stream=%r>' % (self.__class__.__name__, self.stream)


class FileEmitter(StreamEmitter):
    """
    The convenient and correct way to write access logs to a file when
    you have a path available.
    """
    def __init__(self, filepath, encoding='utf-8', **kwargs):
        self.filepath = filepath
        mode = 'ab' if not kwargs.pop('overwrite', False) else 'wb'
        stream = io.open(self.filepath, mode)
        super(FileEmitter, self).__init__(stream, encoding=encoding, **kwargs)

    def close(self):
        if self.stream is None:
            return
        try:
            self.flush()
            if self.stream:
                self.stream.close()
                self.stream = None
        except Exception as e:
            note('file_close', 'got %r on %r.close()', e, self)
