"""Resolve 'package.module:attribute.path' references to Python objects."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from ..exceptions import ReferenceLoadError

logger = logging.getLogger(__name__)


def load_reference(reference: str) -> Any:
    """Import a module and walk an attribute path inside it.

    Examples: ``mypkg.interfaces:STORAGE``, ``mypkg.backends:FileBackend``,
    ``mypkg.registry:TABLE.entries``

    Raises:
        ReferenceLoadError: If the reference is malformed, the module cannot be
            imported, or an attribute is missing.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ReferenceLoadError(
            f"Invalid reference '{reference}'. Expected format: 'package.module:attribute'"
        )

    logger.debug(f"Importing module '{module_name}' for reference '{reference}'")
    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ReferenceLoadError(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ReferenceLoadError(
                f"Module '{module_name}' has no attribute path '{attr_path}' (failed at '{attr}')"
            ) from e

    return target
