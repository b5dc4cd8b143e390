"""
Database helper functions — single-record lookups and mutations for users
and contacts.

"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Contact, User

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("name", "email", "phone")


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse ``value`` as a UUID, returning ``None`` when it cannot be one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ── Users ──────────────────────────────────────────────────────────────


async def find_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
) -> User:
    """Insert a ``User`` row; the caller supplies an already-hashed password."""
    user = User(
        id=uuid.uuid4(),
        username=username,
        email=email,
        password_hash=password_hash,
    )
    session.add(user)
    await session.flush()
    return user


async def count_users(session: AsyncSession, email: str | None = None) -> int:
    stmt = select(func.count()).select_from(User)
    if email is not None:
        stmt = stmt.where(User.email == email)
    result = await session.execute(stmt)
    return result.scalar_one()


# ── Contacts ───────────────────────────────────────────────────────────


def contact_to_dict(contact: Contact) -> Dict[str, Any]:
    return {
        "id": str(contact.id),
        "name": contact.name,
        "email": contact.email,
        "phone": contact.phone,
        "createdAt": _isoformat(contact.created_at),
        "updatedAt": _isoformat(contact.updated_at),
    }


async def list_contacts(session: AsyncSession) -> List[Contact]:
    result = await session.execute(select(Contact).order_by(Contact.created_at))
    return list(result.scalars().all())


async def get_contact(session: AsyncSession, contact_id: str) -> Optional[Contact]:
    """Return the contact with ``contact_id``; malformed ids match nothing."""
    cid = _to_uuid(contact_id)
    if cid is None:
        return None
    return await session.get(Contact, cid)


async def create_contact(
    session: AsyncSession,
    name: str,
    email: str,
    phone: str,
) -> Contact:
    contact = Contact(id=uuid.uuid4(), name=name, email=email, phone=phone)
    session.add(contact)
    await session.flush()
    return contact


async def update_contact(
    session: AsyncSession,
    contact: Contact,
    changes: Dict[str, Any],
) -> Contact:
    """Merge ``changes`` into ``contact``; unknown keys, ``None`` and empty strings are ignored."""
    for field in CONTACT_FIELDS:
        value = changes.get(field)
        if value:
            setattr(contact, field, value)
    contact.updated_at = datetime.now(timezone.utc)
    await session.flush()
    return contact


async def delete_contact(session: AsyncSession, contact: Contact) -> None:
    logger.debug("Deleting contact %s", contact.id)
    await session.delete(contact)
    await session.flush()
