"""Response assembly: entities joined with their media and artists.

Every composed view is built here so admin and public routes return the same
shapes. Lookups go through the caller's Unit of Work.
"""

from typing import Optional
from uuid import UUID

from galerie.api.schemas import (
    ArtistDetail,
    ArtistWithPortrait,
    ArtworkWithMedia,
    EditionWithMedia,
    EventWithDetails,
    MediaItem,
    MediaRead,
    MediaWithArtist,
    PageWithHero,
    PostWithHero,
)
from galerie.models.artist import Artist
from galerie.models.artwork import Artwork
from galerie.models.edition import Edition
from galerie.models.event import Event
from galerie.models.media import Media
from galerie.models.page import Page
from galerie.models.post import Post
from galerie.uow import UnitOfWork


async def load_media(uow: UnitOfWork, media_id: Optional[UUID]) -> Optional[MediaRead]:
    """Resolve a weak media reference; a dangling id reads as no media."""
    if media_id is None:
        return None
    media = await uow.media.get_by_id(media_id)
    return MediaRead.model_validate(media) if media is not None else None


def present_media_row(media: Media, artist_name: Optional[str]) -> MediaWithArtist:
    return MediaWithArtist.model_validate({**media.model_dump(), "artist_name": artist_name})


async def present_artist(uow: UnitOfWork, artist: Artist) -> ArtistWithPortrait:
    portrait = await load_media(uow, artist.portrait_media_id)
    return ArtistWithPortrait.model_validate({**artist.model_dump(), "portrait": portrait})


async def present_artwork(
    uow: UnitOfWork, artwork: Artwork, artist: Optional[Artist] = None
) -> ArtworkWithMedia:
    """Artwork with its ordered media and the owning artist's name and slug.

    Args:
        uow: Active Unit of Work
        artwork: Artwork row
        artist: Owning artist when the caller already has it loaded
    """
    if artist is None:
        artist = await uow.artists.get_by_id(artwork.artist_id)
    media = [
        MediaItem.model_validate({**item.model_dump(), "sort_order": sort_order})
        for item, sort_order in await uow.artwork_media.list_media(artwork.id)
    ]
    return ArtworkWithMedia.model_validate(
        {
            **artwork.model_dump(),
            "media": media,
            "artist_name": artist.name if artist else None,
            "artist_slug": artist.slug if artist else None,
        }
    )


async def present_edition(uow: UnitOfWork, edition: Edition) -> EditionWithMedia:
    artist = await uow.artists.get_by_id(edition.artist_id)
    media = [
        MediaItem.model_validate({**item.model_dump(), "sort_order": sort_order})
        for item, sort_order in await uow.edition_media.list_media(edition.id)
    ]
    return EditionWithMedia.model_validate(
        {
            **edition.model_dump(),
            "media": media,
            "artist_name": artist.name if artist else None,
            "artist_slug": artist.slug if artist else None,
        }
    )


async def present_event(uow: UnitOfWork, event: Event) -> EventWithDetails:
    """Event with hero image and linked artists (by name, with portraits)."""
    hero = await load_media(uow, event.hero_media_id)
    artists = [
        await present_artist(uow, artist) for artist in await uow.artists.list_for_event(event.id)
    ]
    return EventWithDetails.model_validate({**event.model_dump(), "hero": hero, "artists": artists})


async def present_post(uow: UnitOfWork, post: Post) -> PostWithHero:
    hero = await load_media(uow, post.hero_media_id)
    return PostWithHero.model_validate({**post.model_dump(), "hero": hero})


async def present_page(uow: UnitOfWork, page: Page) -> PageWithHero:
    hero = await load_media(uow, page.hero_media_id)
    return PageWithHero.model_validate({**page.model_dump(), "hero": hero})


async def present_artist_detail(uow: UnitOfWork, artist: Artist) -> ArtistDetail:
    """Public artist page: the artist plus their published artworks."""
    portrait = await load_media(uow, artist.portrait_media_id)
    artworks = [
        await present_artwork(uow, artwork, artist)
        for artwork in await uow.artworks.list_published_for_artist(artist.id)
    ]
    return ArtistDetail.model_validate(
        {**artist.model_dump(), "portrait": portrait, "artworks": artworks}
    )
