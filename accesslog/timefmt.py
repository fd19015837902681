# -*- coding: utf-8 -*-
"""Renders the classic strftime-style tokens accepted inside a
``%{...}t`` directive, one token at a time, using
:meth:`datetime.strftime` where the platform has an equivalent.

Most tokens map straight onto a strftime fragment. The rest are
*computed*: their value is derived from the instant directly,
either because strftime has no portable equivalent (space-padded
fields, lowercase meridiem) or because the classic meaning differs
from the platform's (Unix seconds, ISO weekday with Sunday as 7). For
those, the table holds a ``%``-style placeholder, filled with the
derived value in the order the tokens appeared.

Tokens outside the supported set render as ``?``. Nothing here
raises for a malformed subformat; a trailing lone ``%`` is dropped.
"""

import calendar
from collections import namedtuple


__all__ = ['translate', 'TIME_DIRECTIVE_MAP']


UNSUPPORTED = '?'

ComputedField = namedtuple('ComputedField', 'placeholder getter')


def _iso_year(dt):
    return dt.isocalendar()[0]


def _epoch_seconds(dt):
    # utctimetuple() treats naive datetimes as UTC
    return calendar.timegm(dt.utctimetuple())


def _hour12(dt):
    return dt.hour % 12 or 12


_CF = ComputedField
TIME_DIRECTIVE_MAP = {
    'a': '%a',
    'A': '%A',
    'b': '%b',
    'B': '%B',
    'C': _CF('%02d', lambda dt: dt.year // 100),
    'd': '%d',
    'D': '%m/%d/%y',
    'e': _CF('%2d', lambda dt: dt.day),
    'F': '%Y-%m-%d',
    'G': _CF('%d', _iso_year),
    'g': _CF('%02d', lambda dt: _iso_year(dt) % 100),
    'h': '%b',
    'H': '%H',
    'I': '%I',
    'j': _CF('%d', lambda dt: dt.timetuple().tm_yday),
    'k': _CF('%2d', lambda dt: dt.hour),
    'l': _CF('%2d', _hour12),
    'm': '%m',
    'M': '%M',
    'n': '\n',
    'p': '%p',
    'P': _CF('%s', lambda dt: 'am' if dt.hour < 12 else 'pm'),
    'r': '%I:%M:%S %p',
    'R': '%H:%M',
    's': _CF('%d', _epoch_seconds),
    'S': '%S',
    't': '\t',
    'T': '%H:%M:%S',
    'u': _CF('%d', lambda dt: dt.isoweekday()),
    'V': _CF('%d', lambda dt: dt.isocalendar()[1]),
    'w': _CF('%d', lambda dt: dt.isoweekday()),
    'y': '%y',
    'Y': '%Y',
    'z': '%z',
    'Z': '%Z',
    '%': '%%',
}
del _CF


def translate(dt, subformat):
    """Render the :class:`~datetime.datetime` *dt* according to
    *subformat*, e.g. ``'%d/%b/%Y %s'``.

    >>> from datetime import datetime
    >>> translate(datetime(2013, 2, 3, 19, 54), '%F %j')
    '2013-02-03 34'
    """
    # literal text never goes through strftime, which chokes on NULs
    # and unencodable characters
    ret = []
    escaped = False
    for char in subformat:
        if not escaped:
            if char == '%':
                escaped = True
            else:
                ret.append(char)
            continue
        escaped = False
        fragment = TIME_DIRECTIVE_MAP.get(char)
        if fragment is None:
            ret.append(UNSUPPORTED)
        elif isinstance(fragment, ComputedField):
            ret.append(fragment.placeholder % fragment.getter(dt))
        else:
            ret.append(dt.strftime(fragment))
    return ''.join(ret)
