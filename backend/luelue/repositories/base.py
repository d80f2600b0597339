"""Repository base class used by all concrete repositories."""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from luelue.errors import DatabaseQueryError


class BaseRepository:
    """Wraps one table behind a SQLAlchemy session.

    Every public method of a sub-class is one unit of work: it either commits
    or rolls back and raises :class:`DatabaseQueryError`.
    """

    def __init__(self, session) -> None:
        self.session = session
        self._log = logging.getLogger(f'luelue.repository.{type(self).__name__}')

    def _setting(self, key, default):
        try:
            return int(current_app.config.get(key, default))
        except (TypeError, ValueError):
            return default

    def _commit(self, received_data=None) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            self._log.error("commit failed: %s", exc)
            raise DatabaseQueryError(str(exc), received_data) from exc

    def _fetch(self, model, ident, not_found_message):
        try:
            obj = self.session.get(model, ident) if ident else None
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DatabaseQueryError(str(exc)) from exc
        if obj is None:
            raise DatabaseQueryError(not_found_message, status_code=404)
        return obj

    def _all(self, query):
        try:
            return query.all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DatabaseQueryError(str(exc)) from exc
