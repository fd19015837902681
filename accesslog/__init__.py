# -*- coding: utf-8 -*-

from accesslog.context import get_context, set_context

from accesslog.common import COMMON_LOG_FORMAT, COMBINED_LOG_FORMAT
from accesslog.program import (compile_format,
                               FormatProgram,
                               DirectiveSlot,
                               common_program,
                               combined_program)
from accesslog.timefmt import translate
from accesslog.capture import ResponseCapture
from accesslog.request import RequestAttributes
from accesslog.render import render, RenderOptions
from accesslog.emitters import StreamEmitter, FileEmitter, AggregateEmitter
from accesslog.middleware import (AccessLogMiddleware,
                                  format_with,
                                  common_log,
                                  combined_log)
