from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import Engine, delete, exists, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from reserveflow.application.ports.repositories import TableRepository
from reserveflow.domain.common.ids import TableId
from reserveflow.domain.table.entities import Capacity, Position, Table, TableArea
from reserveflow.infrastructure.db.models.reservation import ReservationTableModel
from reserveflow.infrastructure.db.models.table import TableModel
from reserveflow.infrastructure.db.session import get_engine


def table_to_domain(model: TableModel) -> Table:
    return Table(
        table_id=TableId(model.id),
        name=model.name,
        area=TableArea(model.area),
        capacity=Capacity(min=model.min_capacity, max=model.max_capacity),
        is_adjustable=model.is_adjustable,
        position=Position(x=model.position_x, y=model.position_y),
        is_active=model.is_active,
    )


def _upsert_statement(table: Table):
    values = {
        "name": table.name,
        "area": table.area.value,
        "min_capacity": table.capacity.min,
        "max_capacity": table.capacity.max,
        "is_adjustable": table.is_adjustable,
        "position_x": table.position.x,
        "position_y": table.position.y,
        "is_active": table.is_active,
    }
    return (
        insert(TableModel)
        .values(id=str(table.table_id), **values)
        .on_conflict_do_update(index_elements=[TableModel.id], set_=values)
    )


class SqlAlchemyTableRepository(TableRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_tables(
        self,
        include_inactive: bool = False,
        area: TableArea | None = None,
    ) -> list[Table]:
        statement = select(TableModel)
        if not include_inactive:
            statement = statement.where(TableModel.is_active.is_(True))
        if area is not None:
            statement = statement.where(TableModel.area == area.value)
        statement = statement.order_by(TableModel.area, TableModel.id)

        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [table_to_domain(model) for model in models]

    def get(self, table_id: TableId) -> Table | None:
        with Session(self._engine) as session:
            model = session.get(TableModel, str(table_id))
        if model is None:
            return None
        return table_to_domain(model)

    def upsert(self, table: Table) -> None:
        with Session(self._engine) as session:
            session.execute(_upsert_statement(table))
            session.commit()

    def replace_layout(self, tables: Sequence[Table]) -> list[Table]:
        keep_ids = [str(table.table_id) for table in tables]
        deactivate = update(TableModel).values(is_active=False)
        if keep_ids:
            deactivate = deactivate.where(TableModel.id.not_in(keep_ids))

        with Session(self._engine) as session:
            for table in tables:
                session.execute(_upsert_statement(table))
            session.execute(deactivate)
            session.commit()

        return self.list_tables(include_inactive=True)

    def is_referenced(self, table_id: TableId) -> bool:
        statement = select(exists().where(ReservationTableModel.table_id == str(table_id)))
        with Session(self._engine) as session:
            return bool(session.execute(statement).scalar())

    def purge(self, table_id: TableId) -> bool:
        with Session(self._engine) as session:
            result = session.execute(delete(TableModel).where(TableModel.id == str(table_id)))
            session.commit()
        return result.rowcount == 1
