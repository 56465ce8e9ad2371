"""Status option ordering."""

from collections.abc import Iterable

from doorsign.status_option.models import StatusOption


def sort_order_key(value: str | None) -> tuple[int, int]:
    """Sort key for a textual sort order.

    Parseable integers sort by value; anything else sorts after all of them
    and compares equal to other unparsable values.
    """
    try:
        return (0, int((value or "").strip()))
    except ValueError:
        return (1, 0)


def sort_status_options(options: Iterable[StatusOption]) -> list[StatusOption]:
    """Order options for display.

    The input must already be in insertion order: sorted() is stable, so
    equal keys keep that order.
    """
    return sorted(options, key=lambda option: sort_order_key(option.sort_order))
