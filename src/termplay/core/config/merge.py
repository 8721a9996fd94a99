"""Layering of a user configuration over the built-in sections."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


def merge_known_sections(defaults: Mapping[str, Dict[str, Any]], user: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Return *defaults* with the matching values of *user* laid over them.

    Only sections and keys that exist in *defaults* are taken over. A section
    that is not a mapping in *user* leaves the defaults of that section intact.
    """
    merged = copy.deepcopy(dict(defaults))
    for name, section in user.items():
        if name not in merged:
            logger.warning("Ignoring unknown config section %r", name)
            continue
        if not isinstance(section, dict):
            logger.warning("Config section %r is not a mapping, using defaults", name)
            continue
        for key, value in section.items():
            if key not in merged[name]:
                logger.warning("Ignoring unknown config key %s.%s", name, key)
                continue
            merged[name][key] = value
    return merged
