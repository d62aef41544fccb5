"""
Declaration scanner — collect marker declarations from a round.

Pure logic: reads marker attributes, resolves nothing, reports nothing.
Malformed attributes are passed through for the generator to reject.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from exceptable_testgen.core.models.declaration import TEST_SOURCE_MARKER, MarkerDeclaration
from exceptable_testgen.core.models.element import Round

logger = logging.getLogger(__name__)

# Marker attribute names
PACKAGE_NAME_ATTR = "packageName"
EXCEPTABLE_CLASS_ATTR = "exceptableClass"


def scan(
    round_env: Round,
    marker_types: Iterable[str] = (TEST_SOURCE_MARKER,),
) -> list[MarkerDeclaration]:
    """Return a declaration for every element carrying one of *marker_types*.

    Order: marker types in the given order, then elements in round order.
    An element matched by several marker types is declared once, for the
    first type that matches it.
    """
    declarations: list[MarkerDeclaration] = []
    seen: set[int] = set()

    for marker_type in marker_types:
        for element in round_env.elements_annotated_with(marker_type):
            if id(element) in seen:
                continue
            seen.add(id(element))
            attributes = element.find_marker(marker_type) or {}
            declarations.append(MarkerDeclaration(
                element=element,
                marker_type=marker_type,
                package_name=attributes.get(PACKAGE_NAME_ATTR) or None,
                exceptable_class=(attributes.get(EXCEPTABLE_CLASS_ATTR) or "").strip(),
            ))

    logger.debug(
        "Scanned %d declaration(s) from %d element(s)",
        len(declarations), len(round_env),
    )
    return declarations
