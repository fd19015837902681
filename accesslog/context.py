# -*- coding: utf-8 -*-

ACCESSLOG_CONTEXT = None


def get_context():
    if not ACCESSLOG_CONTEXT:
        set_context(AccessLogContext())

    return ACCESSLOG_CONTEXT


def set_context(context):
    global ACCESSLOG_CONTEXT

    ACCESSLOG_CONTEXT = context

    return context


def note(name, message, *a, **kw):
    return get_context().note(name, message, *a, **kw)


class AccessLogContext(object):
    def __init__(self, **kwargs):
        self.note_handlers = list(kwargs.pop('note_handlers', None) or [])
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))

    def note(self, name, message, *a, **kw):
        """The access log can't log its own troubles through itself, and
        must never break the request it's logging. This is a hook for
        recording the error conditions that need to be robustly
        ignored, such as a sink failing to write or a request header
        that trips up a resolver.
        """
        if not self.note_handlers:
            return
        if a:
            try:
                message = message % a
            except Exception:
                pass
        for nh in self.note_handlers:
            nh(name, message)
        return
