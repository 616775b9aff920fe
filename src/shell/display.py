"""Earthquake screen - Imperative Shell.

The display boundary. Holds the three text fields shown to the user
and refuses updates once it has been torn down.
"""

import logging
import threading
from datetime import tzinfo

from src.core.event import EarthquakeEvent
from src.core.formatter import AlertLabels, EventDisplay, format_event_display


logger = logging.getLogger(__name__)


class EarthquakeScreen:
    """Displays information about a single earthquake.

    Fields start out empty and are only ever set by update_ui(). On
    any pipeline failure the screen simply keeps its previous content.
    """

    def __init__(
        self,
        tz: tzinfo | None = None,
        labels: AlertLabels | None = None,
    ) -> None:
        """Initialize an empty screen.

        Args:
            tz: Time zone for the date field, None for local time
            labels: Tsunami alert display strings
        """
        self.tz = tz
        self.labels = labels or AlertLabels()
        self.title = ""
        self.date = ""
        self.tsunami_alert = ""
        self._torn_down = False
        self._owner = threading.get_ident()

    @property
    def torn_down(self) -> bool:
        """True once tear_down() has been called."""
        return self._torn_down

    def tear_down(self) -> None:
        """Mark the screen as gone; later results are discarded."""
        self._torn_down = True

    def update_ui(self, event: EarthquakeEvent) -> bool:
        """Show the given event.

        Must be called from the thread that created the screen.

        Returns:
            True if the screen was updated, False if it was torn down
        """
        if threading.get_ident() != self._owner:
            raise RuntimeError("update_ui called off the display thread")

        if self._torn_down:
            logger.info("Screen torn down, discarding result")
            return False

        display = format_event_display(event, self.tz, self.labels)
        self.title = display.title
        self.date = display.date
        self.tsunami_alert = display.tsunami_alert
        return True

    def snapshot(self) -> EventDisplay:
        """Return the current contents of the three fields."""
        return EventDisplay(
            title=self.title,
            date=self.date,
            tsunami_alert=self.tsunami_alert,
        )
