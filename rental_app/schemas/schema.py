from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from typing import List, Optional

import phonenumbers
from pydantic import (
    AliasChoices,
    BaseModel,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.paginate import PageMeta
from models.enums import (
    ApplicationStatus,
    PetPolicy,
    PropertyStatus,
    PropertyTypes,
    UserRole,
)

CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


def normalize_phone(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = phonenumbers.parse(value, None)
    except phonenumbers.NumberParseException:
        raise ValueError("Invalid phone number format. Use e.g. +14155552671")
    if not phonenumbers.is_valid_number(parsed):
        raise ValueError("Invalid phone number. Use full international format.")
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


# Auth and profile


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=255)
    role: UserRole
    phone: Optional[str] = None
    password: str = Field(
        ..., min_length=8, json_schema_extra={"type": "string", "format": "password"}
    )

    model_config = CAMEL_CONFIG

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]):
        return normalize_phone(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str):
        errors = []
        if not re.search(r"[A-Za-z]", v):
            errors.append("letter")
        if not re.search(r"\d", v):
            errors.append("number")
        if errors:
            raise ValueError("Password must contain: " + ", ".join(errors))
        return v


class UserLoginInput(BaseModel):
    email: EmailStr
    password: str = Field(
        ..., min_length=1, json_schema_extra={"type": "string", "format": "password"}
    )

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RefreshTokenInput(BaseModel):
    refresh_token: Optional[str] = None

    model_config = CAMEL_CONFIG


class UserPublicSchema(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime

    model_config = CAMEL_CONFIG


class ProfileOut(BaseModel):
    profile: UserPublicSchema


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None

    model_config = CAMEL_CONFIG

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]):
        return normalize_phone(value)


class NotificationPreferencesSchema(BaseModel):
    application_updates: bool = True
    new_messages: bool = True
    property_recommendations: bool = True
    newsletter: bool = True

    model_config = CAMEL_CONFIG


class NotificationPreferencesUpdate(BaseModel):
    application_updates: Optional[bool] = None
    new_messages: Optional[bool] = None
    property_recommendations: Optional[bool] = None
    newsletter: Optional[bool] = None

    model_config = CAMEL_CONFIG


class NotificationPreferencesOut(BaseModel):
    preferences: NotificationPreferencesSchema


# Properties


class AddressSchema(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = CAMEL_CONFIG


class AddressUpdate(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = CAMEL_CONFIG


class PropertyCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    address: AddressSchema
    property_type: PropertyTypes
    bedrooms: int = Field(0, ge=0)
    bathrooms: float = Field(1, ge=0)
    square_feet: int = Field(..., gt=0)
    price: float = Field(..., ge=0)
    deposit: float = Field(..., ge=0)
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    available_from: date
    pet_policy: PetPolicy

    model_config = CAMEL_CONFIG


class PropertyUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[AddressUpdate] = None
    property_type: Optional[PropertyTypes] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    square_feet: Optional[int] = Field(None, gt=0)
    price: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    available_from: Optional[date] = None
    pet_policy: Optional[PetPolicy] = None
    status: Optional[PropertyStatus] = None

    model_config = CAMEL_CONFIG


class PropertyFilters(BaseModel):
    city: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    property_type: Optional[PropertyTypes] = None
    pet_policy: Optional[PetPolicy] = None
    status: PropertyStatus = PropertyStatus.AVAILABLE


class OwnerContact(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None

    model_config = CAMEL_CONFIG


class PropertyOut(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    address: AddressSchema
    property_type: PropertyTypes
    bedrooms: int
    bathrooms: float
    square_feet: int
    price: float
    deposit: float
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    available_from: date
    pet_policy: PetPolicy
    owner_id: uuid.UUID
    owner_name: Optional[str] = None
    owner_avatar: Optional[str] = None
    status: PropertyStatus
    created_at: datetime
    updated_at: datetime

    model_config = CAMEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def from_orm_row(cls, data):
        if isinstance(data, dict):
            return data
        owner = getattr(data, "owner", None)
        return {
            "id": data.id,
            "title": data.title,
            "description": data.description,
            "address": {
                "street": data.street,
                "city": data.city,
                "state": data.state,
                "zip_code": data.zip_code,
                "latitude": data.latitude,
                "longitude": data.longitude,
            },
            "property_type": data.property_type,
            "bedrooms": data.bedrooms,
            "bathrooms": data.bathrooms,
            "square_feet": data.square_feet,
            "price": data.price,
            "deposit": data.deposit,
            "amenities": data.amenities or [],
            "images": data.images or [],
            "available_from": data.available_from,
            "pet_policy": data.pet_policy,
            "owner_id": data.owner_id,
            "owner_name": owner.name if owner else None,
            "owner_avatar": owner.avatar if owner else None,
            "owner": owner,
            "status": data.status,
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class PropertyDetailOut(PropertyOut):
    owner: Optional[OwnerContact] = None


class PropertyEnvelope(BaseModel):
    property: PropertyDetailOut


class PropertyListOut(BaseModel):
    properties: List[PropertyOut]
    pagination: PageMeta


class SuccessOut(BaseModel):
    success: bool = True


# Applications


class PersonalInfoIn(BaseModel):
    full_name: str = Field(..., min_length=1)
    date_of_birth: date
    phone_number: str
    ssn: Optional[str] = None

    model_config = CAMEL_CONFIG

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, value: str):
        normalized = normalize_phone(value)
        if normalized is None:
            raise ValueError("Phone number is required")
        return normalized


class EmploymentInfo(BaseModel):
    employer: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    income: float = Field(..., ge=0)
    duration: str = Field(..., min_length=1)

    model_config = CAMEL_CONFIG


class RentalHistoryInfo(BaseModel):
    current_address: str = Field(..., min_length=1)
    landlord_name: Optional[str] = None
    landlord_phone: Optional[str] = None
    monthly_rent: float = Field(..., ge=0)
    duration: str = Field(..., min_length=1)

    model_config = CAMEL_CONFIG


class ApplicationCreate(BaseModel):
    property_id: uuid.UUID
    personal_info: PersonalInfoIn
    employment: EmploymentInfo
    rental_history: RentalHistoryInfo
    documents: List[str] = Field(default_factory=list)

    model_config = CAMEL_CONFIG


class ApplicationStatusUpdate(BaseModel):
    status: Optional[str] = None


class PersonalInfoOut(BaseModel):
    full_name: str
    date_of_birth: date
    phone_number: str

    model_config = CAMEL_CONFIG


class ApplicationPropertySummary(BaseModel):
    id: uuid.UUID
    title: str
    city: str
    state: str
    image: Optional[str] = None
    price: float

    model_config = CAMEL_CONFIG


class ApplicantSummary(BaseModel):
    name: str
    email: str
    avatar: Optional[str] = None

    model_config = CAMEL_CONFIG


class ApplicationOut(BaseModel):
    id: uuid.UUID
    property_id: uuid.UUID
    applicant_id: uuid.UUID
    status: ApplicationStatus
    personal_info: PersonalInfoOut
    employment: EmploymentInfo
    rental_history: RentalHistoryInfo
    documents: List[str] = Field(default_factory=list)
    submitted_at: datetime
    property: Optional[ApplicationPropertySummary] = None
    applicant: Optional[ApplicantSummary] = None

    model_config = CAMEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def from_orm_row(cls, data):
        if isinstance(data, dict):
            return data
        prop = data.property
        return {
            "id": data.id,
            "property_id": data.property_id,
            "applicant_id": data.applicant_id,
            "status": data.status,
            "personal_info": {
                "full_name": data.full_name,
                "date_of_birth": data.date_of_birth,
                "phone_number": data.phone_number,
            },
            "employment": {
                "employer": data.employer,
                "position": data.position,
                "income": data.income,
                "duration": data.employment_duration,
            },
            "rental_history": {
                "current_address": data.current_address,
                "landlord_name": data.landlord_name,
                "landlord_phone": data.landlord_phone,
                "monthly_rent": data.monthly_rent,
                "duration": data.rental_duration,
            },
            "documents": data.documents or [],
            "submitted_at": data.submitted_at,
            "property": (
                {
                    "id": prop.id,
                    "title": prop.title,
                    "city": prop.city,
                    "state": prop.state,
                    "image": prop.cover_image,
                    "price": prop.price,
                }
                if prop
                else None
            ),
            "applicant": data.applicant,
        }


class ApplicationEnvelope(BaseModel):
    application: ApplicationOut


class ApplicationListOut(BaseModel):
    applications: List[ApplicationOut]


# Messaging


class MessageCreate(BaseModel):
    conversation_id: Optional[uuid.UUID] = None
    recipient_id: Optional[uuid.UUID] = None
    property_id: Optional[uuid.UUID] = None
    content: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)

    model_config = CAMEL_CONFIG


class MessageOut(BaseModel):
    id: uuid.UUID
    conversation_id: uuid.UUID
    sender_id: uuid.UUID
    content: str
    attachments: List[str] = Field(default_factory=list)
    read: bool = Field(validation_alias=AliasChoices("read", "is_read"))
    created_at: datetime

    model_config = CAMEL_CONFIG

    @field_validator("attachments", mode="before")
    @classmethod
    def default_attachments(cls, v):
        return v or []


class SenderSummary(BaseModel):
    name: str
    avatar: Optional[str] = None

    model_config = CAMEL_CONFIG


class MessageWithSenderOut(MessageOut):
    sender: Optional[SenderSummary] = None


class MessageEnvelope(BaseModel):
    message: MessageOut


class MessageListOut(BaseModel):
    messages: List[MessageWithSenderOut]


class ParticipantSummary(BaseModel):
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None

    model_config = CAMEL_CONFIG


class ConversationPropertySummary(BaseModel):
    id: uuid.UUID
    title: str
    image: Optional[str] = None

    model_config = CAMEL_CONFIG


class LastMessageOut(BaseModel):
    id: uuid.UUID
    content: str
    sender_id: uuid.UUID
    created_at: datetime
    read: bool = Field(validation_alias=AliasChoices("read", "is_read"))

    model_config = CAMEL_CONFIG


class ConversationSummaryOut(BaseModel):
    id: uuid.UUID
    property_id: Optional[uuid.UUID] = None
    property: Optional[ConversationPropertySummary] = None
    participants: List[ParticipantSummary] = Field(default_factory=list)
    last_message: Optional[LastMessageOut] = None
    unread_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = CAMEL_CONFIG


class ConversationListOut(BaseModel):
    conversations: List[ConversationSummaryOut]
