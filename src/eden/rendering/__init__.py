"""Directive interpreter, render context and warning taxonomy.

    from eden.rendering import Interpreter, RenderContext

    result = Interpreter().render(["h1", ["eden/get", "title"]], RenderContext(lang="en", data={"title": "Hi"}))
    result.html  # "<h1>Hi</h1>"
"""

from eden.rendering.context import NO_BODY, RenderContext, RenderMode
from eden.rendering.directives import ALL_CONTENT, Directive
from eden.rendering.each import truthy
from eden.rendering.html import Comment, Fragment, Placeholder, to_html
from eden.rendering.interpreter import Diagnostics, Interpreter, RenderResult
from eden.rendering.warnings import WARNING_ADAPTER, WARNING_TYPES, AnyWarning, EdenWarning

__all__ = [
    "ALL_CONTENT",
    "NO_BODY",
    "WARNING_ADAPTER",
    "WARNING_TYPES",
    "AnyWarning",
    "Comment",
    "Diagnostics",
    "Directive",
    "EdenWarning",
    "Fragment",
    "Interpreter",
    "Placeholder",
    "RenderContext",
    "RenderMode",
    "RenderResult",
    "to_html",
    "truthy",
]
