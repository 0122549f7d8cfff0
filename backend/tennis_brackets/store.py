"""
Repository over a SQLModel session.

Aggregate services never touch the session directly; they go through a Store
so every operation on one tournament/qualifier commits or rolls back as a unit.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from tennis_brackets.errors import NotFound, StoreUnavailable
from tennis_brackets.models.match import Match

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class Store:
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """Commit everything done inside the block, or nothing.

        Database failures surface as StoreUnavailable; they are not retried here.
        """
        try:
            yield self
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Store transaction failed: %s", exc)
            raise StoreUnavailable("Storage is unavailable; no changes were saved") from exc
        except Exception:
            self.session.rollback()
            raise

    def get(
        self,
        model: Type[ModelT],
        entity_id: int,
        *,
        for_update: bool = False,
        label: Optional[str] = None,
    ) -> ModelT:
        """Load one row by primary key or raise NotFound.

        for_update takes a row lock (SELECT ... FOR UPDATE) on backends that
        support it, serialising writers to the same aggregate.
        """
        if for_update:
            statement = (
                select(model)
                .where(model.id == entity_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            entity = self.session.exec(statement).first()
        else:
            entity = self.session.get(model, entity_id)
        if entity is None:
            raise NotFound(label or model.__name__, entity_id)
        return entity

    def find_match(self, tournament_id: int, round_number: int, match_index: int) -> Optional[Match]:
        return self.session.exec(
            select(Match).where(
                Match.tournament_id == tournament_id,
                Match.round_number == round_number,
                Match.match_index == match_index,
            )
        ).first()

    def all(self, statement) -> List[Any]:
        return list(self.session.exec(statement).all())

    def scalar(self, statement) -> Any:
        return self.session.exec(statement).one()

    def save(self, *entities: SQLModel) -> None:
        """Stage entities and flush so generated ids are available."""
        self.session.add_all(entities)
        self.session.flush()

    def refresh(self, entity: SQLModel) -> None:
        self.session.refresh(entity)

    def delete(
        self,
        model: Type[ModelT],
        entity_id: int,
        cascade: Sequence[Tuple[Type[SQLModel], Any]] = (),
    ) -> None:
        """Delete a root row and its children.

        cascade lists (child_model, foreign_key_column) pairs, deleted in the
        given order before the root.
        """
        self.get(model, entity_id)
        for child_model, foreign_key in cascade:
            self.session.execute(delete(child_model).where(foreign_key == entity_id))
        self.session.execute(delete(model).where(model.id == entity_id))
