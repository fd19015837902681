# -*- coding: utf-8 -*-
"""A read-only view of the request attributes the access log renders.
"""

# CGI-style environ keys which carry headers without the HTTP_ prefix
_UNPREFIXED_HEADERS = {'CONTENT_TYPE': 'content-type',
                       'CONTENT_LENGTH': 'content-length'}


def wsgi_to_text(value):
    """WSGI servers hand over paths and header values as latin-1-decoded
    native strings (PEP 3333). Recover the text the client sent,
    assuming UTF-8, without failing on bytes that aren't.
    """
    try:
        raw = value.encode('latin-1')
    except UnicodeEncodeError:
        # already text, not a compliant WSGI string
        return value
    return raw.decode('utf-8', 'backslashreplace')


class RequestAttributes(object):
    """Method, path, protocol, declared host, and headers of a request.

    Header names are matched case-insensitively. *headers* may be a
    mapping or an iterable of ``(name, value)`` pairs; when a name
    repeats, the first value wins.
    """
    def __init__(self, method, path, protocol, headers=None, host=''):
        self.method = method or ''
        self.path = path or ''
        self.protocol = protocol or ''
        self.host = host or ''
        if hasattr(headers, 'items'):
            headers = headers.items()
        self._headers = {}
        for name, value in headers or ():
            self._headers.setdefault(name.lower(), value)

    @classmethod
    def from_environ(cls, environ):
        headers = []
        for key, value in environ.items():
            if key.startswith('HTTP_'):
                name = key[5:].replace('_', '-').lower()
            elif key in _UNPREFIXED_HEADERS:
                name = _UNPREFIXED_HEADERS[key]
            else:
                continue
            headers.append((name, wsgi_to_text(value)))
        path = wsgi_to_text(environ.get('SCRIPT_NAME', '')
                            + environ.get('PATH_INFO', ''))
        return cls(method=environ.get('REQUEST_METHOD', ''),
                   path=path,
                   protocol=environ.get('SERVER_PROTOCOL', ''),
                   headers=headers,
                   host=environ.get('REMOTE_ADDR', ''))

    def get_header(self, name, default=''):
        return self._headers.get(name.lower(), default)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s method=%r path=%r protocol=%r host=%r>'
                % (cn, self.method, self.path, self.protocol, self.host))
