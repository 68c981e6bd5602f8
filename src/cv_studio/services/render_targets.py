"""Mounted render roots that exports are taken from.

A render root is the output of one template render, stored under an id the
way a page element would be. Exports look roots up by id and discover their
page boundaries from the ``is_page`` marker on each surface.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from cv_studio.rendering.surface import PageSurface, stack_surfaces
from cv_studio.services.errors import MissingRenderTargetError

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_ROOT_ID", "RenderTarget", "RenderTargetRegistry"]

DEFAULT_ROOT_ID = "cv-preview-content"


@dataclass(frozen=True)
class RenderTarget:
    root_id: str
    surfaces: tuple[PageSurface, ...]
    title: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def pages(self) -> list[PageSurface]:
        """Surfaces marked as page boundaries, in source order."""
        return [surface for surface in self.surfaces if surface.is_page]

    def whole(self) -> PageSurface:
        """The entire root as one unmarked surface."""
        return stack_surfaces(list(self.surfaces))


class RenderTargetRegistry:
    """Thread-safe mapping of root ids to mounted render targets."""

    def __init__(self) -> None:
        self._targets: dict[str, RenderTarget] = {}
        self._lock = threading.Lock()

    def mount(
        self,
        surfaces: list[PageSurface],
        root_id: str = DEFAULT_ROOT_ID,
        *,
        title: str = "",
        metadata: dict[str, str] | None = None,
    ) -> RenderTarget:
        target = RenderTarget(root_id, tuple(surfaces), title, dict(metadata or {}))
        with self._lock:
            self._targets[root_id] = target
        logger.debug("Mounted %d surface(s) under %s", len(surfaces), root_id)
        return target

    def unmount(self, root_id: str) -> None:
        with self._lock:
            self._targets.pop(root_id, None)

    def get(self, root_id: str) -> RenderTarget:
        """Return the target mounted under *root_id*.

        Raises:
            MissingRenderTargetError: If nothing is mounted there, or the
                root holds no surfaces.
        """
        with self._lock:
            target = self._targets.get(root_id)
        if target is None or not target.surfaces:
            raise MissingRenderTargetError(root_id)
        return target

    def __contains__(self, root_id: object) -> bool:
        with self._lock:
            return root_id in self._targets
