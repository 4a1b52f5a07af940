from __future__ import annotations

from prometheus_client import Counter

from reserveflow.domain.availability.conflicts import AssignmentConflict
from reserveflow.domain.reservation.entities import ReservationStatus

RESERVATIONS_TOTAL = Counter(
    "reserveflow_reservations_total",
    "Total number of reservations written, by status at write time.",
    ["status"],
)

RESERVATION_TRANSITION_TOTAL = Counter(
    "reserveflow_reservation_transitions_total",
    "Total number of reservation lifecycle transitions.",
    ["from", "to"],
)

RESERVATION_CONFLICTS_TOTAL = Counter(
    "reserveflow_reservation_conflicts_total",
    "Total number of rejected table assignments, by conflict reason.",
    ["reason"],
)

AVAILABILITY_QUERIES_TOTAL = Counter(
    "reserveflow_availability_queries_total",
    "Total number of table availability queries, by outcome.",
    ["outcome"],
)


def record_reservation_written(status: ReservationStatus) -> None:
    RESERVATIONS_TOTAL.labels(status=status.value).inc()


def record_transition(from_status: ReservationStatus, to_status: ReservationStatus) -> None:
    RESERVATION_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_conflict(conflict: AssignmentConflict) -> None:
    for reason in conflict.conflicts.values():
        RESERVATION_CONFLICTS_TOTAL.labels(reason=reason.value).inc()


def record_availability_query(found: int) -> None:
    AVAILABILITY_QUERIES_TOTAL.labels(outcome="found" if found else "none").inc()
