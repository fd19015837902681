# -*- coding: utf-8 -*-
"""Compiles Apache-style access log formats, such as
``'%h %l %u %t "%r" %>s %b'``, into a :class:`FormatProgram`: an
ordered sequence of literal strings and :class:`DirectiveSlot`
instances, built once and shared by every render.

The grammar, scanned left to right:

  * Plain characters are literal text.
  * ``%`` opens a directive. ``>`` inside a directive is ignored, so
    ``%>s`` is the same as ``%s``.
  * ``{...}`` inside a directive captures a key, used by ``%{Name}i``
    (request header) and ``%{FMT}t`` (time subformat).
  * The first letter outside an enclosure ends the directive. ``%%``
    is a literal percent sign.

Compilation never fails. Unknown directive letters are dropped, a
``%`` followed by anything else is dropped (the character after it is
kept as text), and a directive or enclosure left open at the end of
the string is dropped while the text before it is kept.
"""

from collections import namedtuple

from accesslog.common import (get_kind,
                              PERCENT,
                              COMMON_LOG_FORMAT,
                              COMBINED_LOG_FORMAT)


__all__ = ['compile_format', 'FormatProgram', 'DirectiveSlot',
           'common_program', 'combined_program']


class DirectiveSlot(namedtuple('DirectiveSlot', 'kind key')):
    """One directive occurrence. Slots with the same kind and key
    compare equal, which is what lets the renderer compute a value
    once and hand it to every position that asks for it.
    """
    __slots__ = ()

    def __repr__(self):
        if self.key is None:
            return '%s(%s)' % (self.__class__.__name__, self.kind.name)
        return '%s(%s, %r)' % (self.__class__.__name__,
                               self.kind.name, self.key)


class FormatProgram(object):
    """The compiled form of a format string. *segments* is a tuple of
    literal strings and :class:`DirectiveSlot` objects in output order;
    *slots* holds each distinct slot once, in order of first
    appearance.
    """
    def __init__(self, format_str, segments):
        self.raw_format_str = format_str
        self.segments = tuple(segments)
        slots = []
        for seg in self.segments:
            if isinstance(seg, DirectiveSlot) and seg not in slots:
                slots.append(seg)
        self.slots = tuple(slots)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.raw_format_str)


def _make_slot(char, key):
    kind = get_kind(char)
    if kind is None:
        return None
    if not kind.keyed:
        return DirectiveSlot(kind, None)
    if not key:
        if kind.key_required:
            return None
        key = None
    return DirectiveSlot(kind, key)


def _scan_directive(format_str, pos):
    """Scan one directive starting just after its ``%``. Returns the
    slot (or None if the directive renders nothing) and the position
    where literal scanning resumes.
    """
    key, length = None, len(format_str)
    while pos < length:
        char = format_str[pos]
        if char == '>':
            pos += 1
        elif char == '{':
            end = format_str.find('}', pos + 1)
            if end < 0:
                return None, length
            key = format_str[pos + 1:end]
            pos = end + 1
        elif char == '%':
            return DirectiveSlot(PERCENT, None), pos + 1
        elif char.isalpha():
            return _make_slot(char, key), pos + 1
        else:
            return None, pos
    return None, length


def compile_format(format_str):
    segments, literal = [], []
    pos, length = 0, len(format_str)
    while pos < length:
        char = format_str[pos]
        if char != '%':
            literal.append(char)
            pos += 1
            continue
        slot, pos = _scan_directive(format_str, pos + 1)
        if slot is None:
            continue
        if literal:
            segments.append(''.join(literal))
            literal = []
        segments.append(slot)
    if literal:
        segments.append(''.join(literal))
    return FormatProgram(format_str, segments)


def common_program():
    return compile_format(COMMON_LOG_FORMAT)


def combined_program():
    return compile_format(COMBINED_LOG_FORMAT)
