"""
Generated file model — returned by the suite generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A source artifact produced by a generator.

    Attributes:
        name:      Qualified artifact name (``com.x.FooTest``).
        path:      Path relative to the output directory.
        content:   Full file content.
        reason:    Why this file was generated.
    """

    name: str
    path: str
    content: str
    reason: str = ""
