"""
Pydantic schemas for the contacts API.

Request bodies declare every field optional so that presence checks happen
in the handlers and surface as the service's own validation messages.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    id: str
    email: str


class LoginResponse(BaseModel):
    accessToken: str


class AuthenticatedUser(BaseModel):
    """Identity decoded from a verified access token."""

    username: str
    email: str
    id: str

    model_config = {"frozen": True}


# ═══════════════════════════════════════════════════════════════════════════════
# Contacts
# ═══════════════════════════════════════════════════════════════════════════════


class ContactCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ContactUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
