"""Status option catalog helpers."""

import logging

from doorsign.core.constants import DEFAULT_STATUS_OPTIONS
from doorsign.status_option.models import StatusColor, StatusOption
from doorsign.store.base import StatusStore

logger = logging.getLogger(__name__)


def seed_status_options(store: StatusStore) -> int:
    """Populate the default quick-select catalog on an empty store.

    Returns the number of options created.
    """
    if store.list_status_options():
        return 0

    for name, color, sort_order in DEFAULT_STATUS_OPTIONS:
        store.create_status_option(
            StatusOption(name=name, color=StatusColor(color), sort_order=sort_order)
        )

    logger.info("Seeded %d default status options", len(DEFAULT_STATUS_OPTIONS))
    return len(DEFAULT_STATUS_OPTIONS)
