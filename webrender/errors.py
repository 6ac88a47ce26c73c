from __future__ import annotations


class RenderError(Exception):
    """Base class for every fatal build error."""


class ConfigError(RenderError):
    pass


class InputNotFound(RenderError):
    pass


class InputReadError(RenderError):
    pass


class FrontMatterParseError(RenderError):
    pass


class OutputCollisionError(RenderError):
    pass


class TemplateExecutionError(RenderError):
    pass


class OutputWriteError(RenderError):
    pass


class FeedEncodeError(RenderError):
    pass


class OutputErrors(RenderError):
    """All failures collected from the output workers."""

    def __init__(self, errors: list[RenderError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(err) for err in self.errors))


def with_context(exc: RenderError, context: str) -> RenderError:
    """Return a copy of ``exc`` whose message is prefixed with ``context``."""
    if isinstance(exc, OutputErrors):
        wrapped: RenderError = OutputErrors(exc.errors)
        wrapped.args = (f"{context}: {exc}",)
        return wrapped
    return type(exc)(f"{context}: {exc}")
