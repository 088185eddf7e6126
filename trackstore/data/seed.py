"""
Populate a storage area with random tracks.

Usage:
    trackstore-seed [count]        (default: 50)
    python scripts/seed.py [count]
"""

import argparse
import random
import sys
from typing import List, Optional
from urllib.parse import quote

from trackstore.config import LOG_LEVEL, StorageConfig
from trackstore.core import (
    Track,
    TrackDraft,
    configure_logging,
    create_slug,
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
)

from .genres import GenreCatalog
from .storage import initialize_storage
from .tracks import TrackRepository

ARTISTS = [
    "Taylor Swift", "Ed Sheeran", "Adele", "Drake", "Kendrick Lamar",
    "Beyoncé", "Coldplay", "Billie Eilish", "The Weeknd", "Dua Lipa",
    "Bruno Mars", "Ariana Grande", "Justin Bieber", "Post Malone", "Rihanna",
    "Lady Gaga", "BTS", "Harry Styles", "Bad Bunny", "SZA",
]

ALBUMS = [
    "Midnight", "Divide", "30", "Certified Lover Boy", "DAMN.",
    "Renaissance", "Music of the Spheres", "Happier Than Ever", "Dawn FM", "Future Nostalgia",
    "24K Magic", "Positions", "Justice", "Beerbongs & Bentleys", "Anti",
    "Chromatica", "Proof", "Harry's House", "Un Verano Sin Ti", "SOS",
]

TITLES = [
    "Love Story", "Shape of You", "Hello", "God's Plan", "HUMBLE.",
    "BREAK MY SOUL", "Yellow", "bad guy", "Blinding Lights", "Levitating",
    "Uptown Funk", "thank u, next", "Peaches", "Circles", "Diamonds",
    "Rain On Me", "Dynamite", "As It Was", "Tití Me Preguntó", "Kill Bill",
    "Rocket Man", "Bohemian Rhapsody", "Thriller", "Smells Like Teen Spirit", "Sweet Child O' Mine",
    "Imagine", "Purple Haze", "Stairway to Heaven", "Like a Rolling Stone", "Respect",
    "Hey Jude", "What's Going On", "Good Vibrations", "Yesterday", "Superstition",
    "London Calling", "Purple Rain", "God Only Knows", "A Change Is Gonna Come", "Heroes",
    "Born to Run", "Billie Jean", "I Want to Hold Your Hand", "Gimme Shelter", "Waterloo Sunset",
    "Johnny B. Goode", "No Woman, No Cry", "What'd I Say", "Papa's Got a Brand New Bag", "Blowin' in the Wind",
]


def random_draft(genres: List[str], rng: random.Random) -> TrackDraft:
    title = rng.choice(TITLES)
    # 70% chance to have an album
    album = rng.choice(ALBUMS) if rng.random() > 0.3 else None
    genre_count = min(len(genres), rng.randint(1, 3))

    return TrackDraft(
        title=title,
        artist=rng.choice(ARTISTS),
        album=album,
        genres=rng.sample(genres, genre_count),
        slug=create_slug(title),
        cover_image=f"https://picsum.photos/seed/{quote(title, safe='')}/300/300",
    )


def seed_database(
    repository: TrackRepository,
    catalog: GenreCatalog,
    count: int = 50,
    rng: Optional[random.Random] = None,
) -> List[Track]:
    """
    Create `count` random tracks. Slugs are not deduplicated: seeded data
    may contain several tracks with the same title.
    """
    rng = rng or random.Random()
    genres = catalog.list()

    log_step("Generating %d random tracks...", count)
    created: List[Track] = []
    for i in range(count):
        created.append(repository.create(random_draft(genres, rng)))
        if (i + 1) % 10 == 0 or i + 1 == count:
            log_progress(i + 1, count, prefix="Seeding tracks")

    log_success("Added %d tracks to %s.", len(created), repository.tracks_dir)
    return created


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the track store with fake data.")
    parser.add_argument("count", nargs="?", type=int, default=50)
    args = parser.parse_args(argv)

    configure_logging(LOG_LEVEL)
    log_section("Seeding track store")

    storage = StorageConfig.from_env()
    try:
        initialize_storage(storage)
        seed_database(TrackRepository(storage), GenreCatalog(storage), args.count)
    except Exception as exc:  # noqa: BLE001
        log_error("Error seeding database: %s", exc)
        return 1

    log_info("Database seeding completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
