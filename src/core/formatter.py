"""Display formatting - Pure functions.

This module turns an EarthquakeEvent into the three strings shown on
screen. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import timedelta, timezone, tzinfo

from src.core.event import EPOCH, EarthquakeEvent


@dataclass(frozen=True)
class AlertLabels:
    """Display strings for the tsunami alert codes.

    Loaded from configuration so they can be localized.

    Attributes:
        no: Shown for code 0
        yes: Shown for code 1
        not_available: Shown for any other code
    """
    no: str = "No"
    yes: str = "Yes"
    not_available: str = "Not available"


@dataclass(frozen=True)
class EventDisplay:
    """The three display fields for one event.

    Attributes:
        title: Event title, verbatim
        date: Formatted occurrence time
        tsunami_alert: Formatted tsunami alert
    """
    title: str
    date: str
    tsunami_alert: str


def format_date(epoch_millis: int, tz: tzinfo | None = None) -> str:
    """Format an epoch-millisecond timestamp for display.

    Pure function. Output looks like "Wed, 3 Jan 2018 at 14:22:05 PST".

    Args:
        epoch_millis: Milliseconds since epoch (UTC)
        tz: Display time zone, None for the host's local zone

    Returns:
        Formatted date string
    """
    utc_time = EPOCH + timedelta(milliseconds=epoch_millis)
    local_time = utc_time.astimezone(tz) if tz is not None else utc_time.astimezone()

    # Day of month is not zero-padded
    return (
        f"{local_time.strftime('%a')}, {local_time.day} "
        f"{local_time.strftime('%b %Y')} at {local_time.strftime('%H:%M:%S')} "
        f"{local_time.tzname()}"
    )


def format_tsunami_alert(tsunami_alert: int, labels: AlertLabels | None = None) -> str:
    """Map a tsunami alert code to its display string.

    Pure function.
    """
    labels = labels or AlertLabels()
    if tsunami_alert == 0:
        return labels.no
    elif tsunami_alert == 1:
        return labels.yes
    else:
        return labels.not_available


def format_event_display(
    event: EarthquakeEvent,
    tz: tzinfo | None = None,
    labels: AlertLabels | None = None,
) -> EventDisplay:
    """Format all display fields of an event.

    Pure function.

    Args:
        event: Event to display
        tz: Display time zone, None for the host's local zone
        labels: Tsunami alert labels

    Returns:
        EventDisplay with title, date and tsunami alert strings
    """
    return EventDisplay(
        title=event.title,
        date=format_date(event.occurred_at_epoch_millis, tz),
        tsunami_alert=format_tsunami_alert(event.tsunami_alert, labels),
    )


def format_event_summary(event: EarthquakeEvent) -> str:
    """Format a one-line summary of an event for logs.

    Pure function.
    """
    time_str = format_date(event.occurred_at_epoch_millis, timezone.utc)
    return f"{event.title} at {time_str} (tsunami: {event.tsunami_alert})"
