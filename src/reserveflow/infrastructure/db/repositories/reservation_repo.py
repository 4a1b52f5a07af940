from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session, selectinload

from reserveflow.application.ports.repositories import (
    ReservationConflictError,
    ReservationRepository,
    StaleReservationError,
)
from reserveflow.domain.availability.conflicts import AssignmentConflict, validate_assignment
from reserveflow.domain.common.ids import CustomerId, ReservationId, TableId
from reserveflow.domain.reservation.entities import Customer, Reservation, ReservationStatus
from reserveflow.infrastructure.db.models.reservation import (
    ReservationModel,
    ReservationTableModel,
)
from reserveflow.infrastructure.db.models.table import TableModel
from reserveflow.infrastructure.db.repositories.table_repo import table_to_domain
from reserveflow.infrastructure.db.session import get_engine


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, reservation_id: ReservationId) -> Reservation | None:
        statement = (
            select(ReservationModel)
            .options(selectinload(ReservationModel.tables))
            .where(ReservationModel.id == str(reservation_id))
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def list_reservations(
        self,
        day: date | None = None,
        status: ReservationStatus | None = None,
    ) -> list[Reservation]:
        statement = select(ReservationModel).options(selectinload(ReservationModel.tables))
        if day is not None:
            statement = statement.where(ReservationModel.date == day)
        if status is not None:
            statement = statement.where(ReservationModel.status == status.value)
        statement = statement.order_by(
            ReservationModel.date,
            ReservationModel.start_time,
            ReservationModel.id,
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            return [self._to_domain(model) for model in models]

    def list_for_date(self, day: date) -> list[Reservation]:
        return self.list_reservations(day=day)

    def add(self, reservation: Reservation) -> None:
        with Session(self._engine) as session, session.begin():
            self._check_assignment(session, reservation)
            session.add(self._to_model(reservation))

    def replace(self, reservation: Reservation, expected_status: ReservationStatus) -> None:
        with Session(self._engine) as session, session.begin():
            model = session.get(
                ReservationModel,
                str(reservation.reservation_id),
                options=[selectinload(ReservationModel.tables)],
                with_for_update=True,
            )
            if model is None or model.status != expected_status.value:
                raise StaleReservationError(
                    f"reservation {reservation.reservation_id} changed since it was read"
                )
            self._check_assignment(
                session,
                reservation,
                exclude_reservation_id=reservation.reservation_id,
            )
            self._apply(model, reservation)

            wanted = {str(table_id) for table_id in reservation.table_ids}
            model.tables = [link for link in model.tables if link.table_id in wanted]
            present = {link.table_id for link in model.tables}
            model.tables.extend(
                ReservationTableModel(table_id=table_id) for table_id in sorted(wanted - present)
            )

    def update_status(self, reservation: Reservation, expected_status: ReservationStatus) -> None:
        statement = (
            update(ReservationModel)
            .where(
                ReservationModel.id == str(reservation.reservation_id),
                ReservationModel.status == expected_status.value,
            )
            .values(status=reservation.status.value, updated_at=reservation.updated_at)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                raise StaleReservationError(
                    f"reservation {reservation.reservation_id} is no longer "
                    f"{expected_status.value}"
                )
            session.commit()

    def delete(self, reservation_id: ReservationId) -> bool:
        with Session(self._engine) as session:
            model = session.get(ReservationModel, str(reservation_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def _check_assignment(
        self,
        session: Session,
        reservation: Reservation,
        exclude_reservation_id: ReservationId | None = None,
    ) -> None:
        """Re-run the conflict check under row locks on every claimed table.

        Locks are taken in id order so concurrent writers claiming overlapping
        table sets queue behind each other instead of deadlocking.
        """
        table_ids = sorted(str(table_id) for table_id in reservation.table_ids)
        locked = session.execute(
            select(TableModel).where(TableModel.id.in_(table_ids)).order_by(TableModel.id)
            .with_for_update()
        ).scalars().all()

        claiming = (
            select(ReservationModel)
            .options(selectinload(ReservationModel.tables))
            .join(ReservationTableModel)
            .where(
                ReservationModel.date == reservation.date,
                ReservationModel.status != ReservationStatus.CANCELLED.value,
                ReservationTableModel.table_id.in_(table_ids),
            )
            .distinct()
        )
        others = [self._to_domain(model) for model in session.execute(claiming).scalars().all()]

        result = validate_assignment(
            reservation,
            [table_to_domain(model) for model in locked],
            others,
            exclude_reservation_id=exclude_reservation_id,
        )
        if isinstance(result, AssignmentConflict):
            raise ReservationConflictError(result)

    def _apply(self, model: ReservationModel, reservation: Reservation) -> None:
        customer = reservation.customer
        model.customer_id = str(customer.customer_id)
        model.customer_name = customer.name
        model.customer_phone = customer.phone
        model.customer_email = customer.email
        model.customer_notes = customer.notes
        model.customer_vip = customer.vip_status
        model.party_size = reservation.party_size
        model.date = reservation.date
        model.start_time = reservation.start_time
        model.end_time = reservation.end_time
        model.status = reservation.status.value
        model.special_requests = reservation.special_requests
        model.updated_at = reservation.updated_at

    def _to_model(self, reservation: Reservation) -> ReservationModel:
        model = ReservationModel(
            id=str(reservation.reservation_id),
            created_at=reservation.created_at,
        )
        self._apply(model, reservation)
        model.tables = [
            ReservationTableModel(table_id=str(table_id))
            for table_id in sorted(reservation.table_ids)
        ]
        return model

    def _to_domain(self, model: ReservationModel) -> Reservation:
        return Reservation(
            reservation_id=ReservationId(model.id),
            customer=Customer(
                customer_id=CustomerId(model.customer_id),
                name=model.customer_name,
                phone=model.customer_phone,
                email=model.customer_email,
                notes=model.customer_notes,
                vip_status=model.customer_vip,
            ),
            party_size=model.party_size,
            date=model.date,
            start_time=model.start_time,
            end_time=model.end_time,
            table_ids=frozenset(TableId(link.table_id) for link in model.tables),
            status=ReservationStatus(model.status),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
            special_requests=model.special_requests,
        )
