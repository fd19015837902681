# -*- coding: utf-8 -*-

COMMON_LOG_FORMAT = '%h %l %u %t "%r" %>s %b'
COMBINED_LOG_FORMAT = ('%h %l %u %t "%r" %>s %b'
                       ' "%{Referer}i" "%{User-agent}i"')

LOOPBACK_HOST = '127.0.0.1'
EMPTY_VALUE = '-'
DEFAULT_TIME_FORMAT = '[%d/%m/%Y:%I:%M:%S %z]'


class DirectiveKind(object):
    """A kind of value a directive renders, independent of where in the
    line it appears. Kinds are compared by identity; the full set is
    registered below and looked up by terminating letter.
    """
    def __init__(self, name, char, keyed=False, key_required=False):
        self.name = name
        self.char = char
        self.keyed = keyed
        self.key_required = key_required

    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, self.name, self.char)


REMOTE_HOST = DirectiveKind('remote_host', 'h')
IDENTITY = DirectiveKind('identity', 'l')
USER = DirectiveKind('user', 'u')
TIMESTAMP = DirectiveKind('timestamp', 't', keyed=True)
REQUEST_LINE = DirectiveKind('request_line', 'r')
STATUS = DirectiveKind('status', 's')
BYTES_WRITTEN = DirectiveKind('bytes_written', 'b')
ELAPSED = DirectiveKind('elapsed', 'D')
HEADER = DirectiveKind('header', 'i', keyed=True, key_required=True)
PERCENT = DirectiveKind('percent', '%')

DIRECTIVE_KINDS = (REMOTE_HOST, IDENTITY, USER, TIMESTAMP, REQUEST_LINE,
                   STATUS, BYTES_WRITTEN, ELAPSED, HEADER, PERCENT)

KIND_CHAR_MAP = dict([(k.char, k) for k in DIRECTIVE_KINDS])


def get_kind(char, default=None):
    return KIND_CHAR_MAP.get(char, default)
