"""
Adapter: Role repository.

Implements RoleRepository port on top of the SQLAlchemy ORM.
Every database failure surfaces as ``DatabaseError``.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from kiosk_api.domain.role.entities import Role
from kiosk_api.domain.role.ports import RoleRepository
from kiosk_api.infrastructure.database import translate_database_errors
from kiosk_api.infrastructure.role.models import RoleModel

logger = logging.getLogger(__name__)


class RoleRepositoryAdapter(RoleRepository):
    """Reads and updates the ``role`` table.

    Implements the RoleRepository port defined in the domain layer.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def list_all(self) -> list[Role]:
        with translate_database_errors(), self._session_factory() as session:
            rows = session.scalars(select(RoleModel).order_by(RoleModel.id)).all()
            return [row.to_entity() for row in rows]

    def get_by_id(self, role_id: int) -> Optional[Role]:
        with translate_database_errors(), self._session_factory() as session:
            row = session.get(RoleModel, role_id)
            return row.to_entity() if row is not None else None

    def rename(self, role_id: int, role_name: str) -> Optional[Role]:
        """Update the name and return the stored row.

        Args:
            role_id: Role to update.
            role_name: New name.

        Returns:
            The updated role, or None when the role does not exist.
        """
        with translate_database_errors(), self._session_factory() as session:
            with session.begin():
                row = session.get(RoleModel, role_id)
                if row is None:
                    return None
                row.role_name = role_name
            session.refresh(row)
            logger.info("Role id=%s renamed.", role_id)
            return row.to_entity()
