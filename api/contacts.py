"""
Contact CRUD routes.

Every route sits behind ``require_auth``; contacts are shared by all
authenticated users.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import NotFoundError, ValidationError
from auth.dependencies import AuthenticatedRoute, db_session, require_auth
from database.helpers import (
    contact_to_dict,
    create_contact,
    delete_contact,
    get_contact,
    list_contacts,
    update_contact,
)
from database.models import Contact
from utils.schemas import (
    AuthenticatedUser,
    ContactCreate,
    ContactResponse,
    ContactUpdate,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["contacts"],
    route_class=AuthenticatedRoute,
    dependencies=[Depends(require_auth)],
)


async def _get_or_404(session: AsyncSession, contact_id: str) -> Contact:
    contact = await get_contact(session, contact_id)
    if contact is None:
        raise NotFoundError("Contact not found")
    return contact


@router.get("", response_model=List[ContactResponse])
async def get_contacts(
    session: AsyncSession = Depends(db_session),
) -> List[Dict[str, Any]]:
    contacts = await list_contacts(session)
    return [contact_to_dict(c) for c in contacts]


@router.post("", response_model=ContactResponse)
async def add_contact(
    req: ContactCreate,
    session: AsyncSession = Depends(db_session),
    user: AuthenticatedUser = Depends(require_auth),
) -> Dict[str, Any]:
    """Create a contact; status stays 200 rather than 201."""
    if not req.name or not req.email or not req.phone:
        raise ValidationError("All fields are mandatory")

    contact = await create_contact(session, req.name, req.email, req.phone)
    await session.commit()
    logger.info("Contact %s created by user %s", contact.id, user.id)
    return contact_to_dict(contact)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_one_contact(
    contact_id: str,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    contact = await _get_or_404(session, contact_id)
    return contact_to_dict(contact)


@router.put("/{contact_id}", response_model=ContactResponse)
async def put_contact(
    contact_id: str,
    req: ContactUpdate,
    session: AsyncSession = Depends(db_session),
    user: AuthenticatedUser = Depends(require_auth),
) -> Dict[str, Any]:
    """Merge the supplied fields into the stored contact."""
    contact = await _get_or_404(session, contact_id)
    contact = await update_contact(session, contact, req.model_dump(exclude_unset=True))
    await session.commit()
    logger.info("Contact %s updated by user %s", contact.id, user.id)
    return contact_to_dict(contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
async def remove_contact(
    contact_id: str,
    session: AsyncSession = Depends(db_session),
    user: AuthenticatedUser = Depends(require_auth),
) -> Dict[str, Any]:
    contact = await _get_or_404(session, contact_id)
    await delete_contact(session, contact)
    await session.commit()
    logger.info("Contact %s removed by user %s", contact_id, user.id)
    return {"message": "Contact removed"}
