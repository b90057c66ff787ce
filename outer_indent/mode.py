"""The outer-indent minor mode."""

from __future__ import annotations

import logging
from enum import Enum, auto

from .exceptions import UnsupportedDocumentError
from .models import IndentationTables
from .session import OutlineSession
from .tables import OuterIndentation

logger = logging.getLogger(__name__)


class ModeState(Enum):
    DISABLED = auto()
    ENABLED = auto()


class OuterIndentMode:
    """Switches a session between stock and outer indentation.

    While enabled, the mode supplies the session's indentation strategy,
    listens for refresh requests (numbering toggled, document edited) and keeps
    the marker runs of numbered headlines hidden.

    Args:
        session: Document session the mode acts on.

    Examples:
        mode = OuterIndentMode(OutlineSession("* Title\\n"))
        mode.enable()
        mode.session.redraw()
    """

    def __init__(self, session: OutlineSession):
        self.session = session
        self.state = ModeState.DISABLED
        self._strategy = OuterIndentation()

    @property
    def enabled(self) -> bool:
        return self.state is ModeState.ENABLED

    def enable(self) -> None:
        """Activate the mode.

        Raises:
            UnsupportedDocumentError: If the session is not an outline document.
                Nothing is changed in that case.
        """
        if self.enabled:
            return
        if not self.session.is_outline_document:
            raise UnsupportedDocumentError(self.session.name)

        self.session.set_indent_strategy(self._strategy)
        self.session.subscribe(self.refresh)
        self.state = ModeState.ENABLED
        logger.debug("%s: outer-indent mode enabled", self.session.name)
        self.refresh()

    def disable(self) -> None:
        """Deactivate the mode and restore the stock indentation."""
        if not self.enabled:
            return

        self.session.hider.clear()
        self.session.reset_indent_strategy()
        self.session.unsubscribe(self.refresh)
        self.state = ModeState.DISABLED
        logger.debug("%s: outer-indent mode disabled", self.session.name)
        self.session.recompute_indentation()

    def toggle(self) -> bool:
        """Flip the mode and return whether it is now enabled."""
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self.enabled

    def refresh(self) -> IndentationTables:
        """Recompute hide regions and tables, then request a redraw."""
        session = self.session
        session.hider.refresh(session.text, session.numbering)
        return session.recompute_indentation()
