from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.errors import ConflictError
from statuspage.domain.models import User
from statuspage.domain.schemas import CreateUserInput
from statuspage.persistence.db import transaction
from statuspage.persistence.guards import translate_integrity_error
from statuspage.persistence.repos import users as users_repo
from statuspage.services.passwords import hash_password


logger = logging.getLogger(__name__)


async def create_user(session: AsyncSession, payload: CreateUserInput) -> User:
    email = payload.email.strip().lower()
    conflict_message = f"User with email '{email}' already exists"
    async with transaction(session):
        if await users_repo.get_user_by_email(session, email) is not None:
            raise ConflictError(conflict_message)
        try:
            user = await users_repo.create_user(
                session,
                email=email,
                password_hash=hash_password(payload.password),
                first_name=payload.first_name,
                last_name=payload.last_name,
                role=payload.role,
            )
        except IntegrityError as exc:
            raise translate_integrity_error(exc, conflict_message=conflict_message) from exc
    logger.info("user_created user_id=%s", user.id)
    return user
