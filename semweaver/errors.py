"""Helpers for raising and rendering collections of errors."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class WeaverError(Exception):
    """Base class for errors raised by the package.

    Subclasses may override :meth:`compound` to control how several errors
    of their kind are merged into a single one.
    """

    @classmethod
    def compound(cls, errors: Iterable[WeaverError]) -> WeaverError:
        """Merge several errors into one, flattening nested compounds."""
        flattened: list[WeaverError] = []
        for error in errors:
            if isinstance(error, _CompoundWeaverError):
                flattened.extend(error.errors)
            else:
                flattened.append(error)
        return _CompoundWeaverError(flattened)


class _CompoundWeaverError(WeaverError):
    """A container for several errors."""

    def __init__(self, errors: Sequence[WeaverError]) -> None:
        self.errors = list(errors)
        super().__init__(format_errors(self.errors))


def handle_errors(errors: Sequence[WeaverError]) -> None:
    """Raise the collected errors, if any.

    Nothing happens for an empty sequence, a single error is raised as is,
    and several errors are raised as the compound built by the type of the
    first one.
    """
    errors = list(errors)
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise type(errors[0]).compound(errors)


def format_errors(errors: Iterable[BaseException]) -> str:
    """Render errors as one string, separated by blank lines."""
    return "\n\n".join(str(error) for error in errors)