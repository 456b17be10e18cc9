"""Request and response models for the HTTP surface.

Request models for updates make every field optional: a field that is absent
or null leaves the stored value unchanged. ``media_ids`` and ``artist_ids``
are the exception, where absent means "untouched" and ``[]`` means "clear".
"""

from datetime import datetime
from typing import Annotated, Optional
from urllib.parse import urlparse
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from galerie.core.slug import slugify
from galerie.models.contact import MessageStatus


def _check_sluggable(value: str) -> str:
    if not slugify(value):
        raise ValueError("must contain at least one letter or digit")
    return value


def _check_url(value: str) -> str:
    if value == "":
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an http(s) URL")
    return value


def _check_unique_ids(value: list[UUID]) -> list[UUID]:
    if len(set(value)) != len(value):
        raise ValueError("must not contain duplicate ids")
    return value


# Title or name a slug is derived from
SlugSource = Annotated[str, Field(min_length=1, max_length=255), AfterValidator(_check_sluggable)]
WebUrl = Annotated[str, AfterValidator(_check_url)]
UniqueIds = Annotated[list[UUID], AfterValidator(_check_unique_ids)]


# Auth


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserRead


# Shared


class SuccessResponse(BaseModel):
    success: bool = True


# Media


class MediaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    filename: str
    url: str
    alt: Optional[str] = None
    credit: Optional[str] = None
    folder: Optional[str] = None
    artist_id: Optional[UUID] = None
    width: Optional[int] = None
    height: Optional[int] = None
    created_at: datetime


class MediaWithArtist(MediaRead):
    artist_name: Optional[str] = None


class MediaItem(MediaRead):
    """Media attached to an artwork or edition, with its gallery position."""

    sort_order: int


class MediaUpdate(BaseModel):
    alt: Optional[str] = None
    credit: Optional[str] = None
    folder: Optional[str] = None
    artist_id: Optional[UUID] = None


# Artists


class ArtistCreate(BaseModel):
    name: SlugSource
    bio_md: Optional[str] = None
    portrait_media_id: Optional[UUID] = None
    artsper_url: Optional[WebUrl] = None
    website_url: Optional[WebUrl] = None
    instagram_url: Optional[WebUrl] = None
    published: Optional[bool] = None


class ArtistUpdate(BaseModel):
    name: Optional[SlugSource] = None
    bio_md: Optional[str] = None
    portrait_media_id: Optional[UUID] = None
    artsper_url: Optional[WebUrl] = None
    website_url: Optional[WebUrl] = None
    instagram_url: Optional[WebUrl] = None
    published: Optional[bool] = None


class ArtistRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    bio_md: Optional[str] = None
    portrait_media_id: Optional[UUID] = None
    artsper_url: Optional[str] = None
    website_url: Optional[str] = None
    instagram_url: Optional[str] = None
    published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ArtistWithPortrait(ArtistRead):
    portrait: Optional[MediaRead] = None


# Artworks


class ArtworkCreate(BaseModel):
    artist_id: UUID
    title: SlugSource
    year: Optional[int] = None
    medium: Optional[str] = Field(default=None, max_length=255)
    dimensions: Optional[str] = Field(default=None, max_length=255)
    price_note: Optional[str] = None
    artsper_url: Optional[WebUrl] = None
    media_ids: Optional[UniqueIds] = None
    published: Optional[bool] = None


class ArtworkUpdate(BaseModel):
    artist_id: Optional[UUID] = None
    title: Optional[SlugSource] = None
    year: Optional[int] = None
    medium: Optional[str] = Field(default=None, max_length=255)
    dimensions: Optional[str] = Field(default=None, max_length=255)
    price_note: Optional[str] = None
    artsper_url: Optional[WebUrl] = None
    media_ids: Optional[UniqueIds] = None
    published: Optional[bool] = None


class ArtworkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    artist_id: UUID
    title: str
    slug: str
    year: Optional[int] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    price_note: Optional[str] = None
    artsper_url: Optional[str] = None
    published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ArtworkWithMedia(ArtworkRead):
    media: list[MediaItem] = []
    artist_name: Optional[str] = None
    artist_slug: Optional[str] = None


class ArtistDetail(ArtistWithPortrait):
    artworks: list[ArtworkWithMedia] = []


# Editions


class EditionCreate(BaseModel):
    artist_id: UUID
    title: SlugSource
    year: Optional[int] = None
    medium: Optional[str] = Field(default=None, max_length=255)
    dimensions: Optional[str] = Field(default=None, max_length=255)
    edition_size: Optional[str] = Field(default=None, max_length=255)
    price_note: Optional[str] = None
    artsper_url: Optional[WebUrl] = None
    media_ids: Optional[UniqueIds] = None
    published: Optional[bool] = None


class EditionUpdate(BaseModel):
    artist_id: Optional[UUID] = None
    title: Optional[SlugSource] = None
    year: Optional[int] = None
    medium: Optional[str] = Field(default=None, max_length=255)
    dimensions: Optional[str] = Field(default=None, max_length=255)
    edition_size: Optional[str] = Field(default=None, max_length=255)
    price_note: Optional[str] = None
    artsper_url: Optional[WebUrl] = None
    media_ids: Optional[UniqueIds] = None
    published: Optional[bool] = None


class EditionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    artist_id: UUID
    title: str
    slug: str
    year: Optional[int] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    edition_size: Optional[str] = None
    price_note: Optional[str] = None
    artsper_url: Optional[str] = None
    published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class EditionWithMedia(EditionRead):
    media: list[MediaItem] = []
    artist_name: Optional[str] = None
    artist_slug: Optional[str] = None


# Events


class EventCreate(BaseModel):
    title: SlugSource
    start_at: datetime
    end_at: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=255)
    description_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    artist_ids: Optional[UniqueIds] = None
    published: Optional[bool] = None


class EventUpdate(BaseModel):
    title: Optional[SlugSource] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=255)
    description_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    artist_ids: Optional[UniqueIds] = None
    published: Optional[bool] = None


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    start_at: datetime
    end_at: Optional[datetime] = None
    location: Optional[str] = None
    description_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class EventWithDetails(EventRead):
    hero: Optional[MediaRead] = None
    artists: list[ArtistWithPortrait] = []


# Posts


class PostCreate(BaseModel):
    title: SlugSource
    body_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    published: Optional[bool] = None


class PostUpdate(BaseModel):
    title: Optional[SlugSource] = None
    body_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    published: Optional[bool] = None


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    body_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PostWithHero(PostRead):
    hero: Optional[MediaRead] = None


# Pages


class PageUpdate(BaseModel):
    title: Optional[SlugSource] = None
    body_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None


class PageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    title: str
    body_md: Optional[str] = None
    hero_media_id: Optional[UUID] = None
    updated_at: datetime


class PageWithHero(PageRead):
    hero: Optional[MediaRead] = None


# Contact messages


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=10)


class MessageStatusUpdate(BaseModel):
    status: MessageStatus


class ContactMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    message: str
    status: str
    created_at: datetime


# Waitlist


class WaitlistJoin(BaseModel):
    email: EmailStr
    source: Optional[str] = Field(default=None, max_length=255)


class WaitlistJoinResponse(BaseModel):
    success: bool
    message: str


class WaitlistEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    source: Optional[str] = None
    created_at: datetime


# Home


class HomeResponse(BaseModel):
    current_event: Optional[EventWithDetails] = None
    upcoming_events: list[EventWithDetails]
    featured_artists: list[ArtistWithPortrait]
    latest_posts: list[PostWithHero]
