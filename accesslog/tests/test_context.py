# -*- coding: utf-8 -*-

import pytest

from accesslog.context import (get_context,
                               set_context,
                               note,
                               AccessLogContext)


def test_default_context_drops_notes():
    ctx = get_context()
    assert ctx is get_context()
    assert note('anything', 'goes %s', 'nowhere') is None


def test_note_handlers(monkeypatch):
    notes = []
    ctx = AccessLogContext(note_handlers=[lambda n, m: notes.append((n, m))])
    monkeypatch.setattr('accesslog.context.ACCESSLOG_CONTEXT', ctx)

    note('first', 'plain message')
    note('second', 'got %r on %s', ValueError('x'), 'emit')
    note('third', 'bad %d format', 'not a number')

    assert notes == [('first', 'plain message'),
                     ('second', "got ValueError('x') on emit"),
                     ('third', 'bad %d format')]


def test_set_context(monkeypatch):
    monkeypatch.setattr('accesslog.context.ACCESSLOG_CONTEXT', None)
    ctx = AccessLogContext()
    assert set_context(ctx) is ctx
    assert get_context() is ctx


def test_context_options():
    with pytest.raises(TypeError):
        AccessLogContext(async_mode=True)
