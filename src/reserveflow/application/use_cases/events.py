from __future__ import annotations

import logging

from reserveflow.application.mappers.event_envelope import RESERVATION_EVENTS_CHANNEL
from reserveflow.application.ports.publisher import EventPublisher

logger = logging.getLogger(__name__)


def publish_event(publisher: EventPublisher, message: str) -> None:
    # Subscribers are best-effort; a failed publish never fails the write.
    try:
        publisher.publish(channel=RESERVATION_EVENTS_CHANNEL, message=message)
    except Exception:
        logger.warning("event_publish_failed", exc_info=True)
