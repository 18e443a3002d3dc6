import logging

from shared.core.auth import hash_password
from shared.core.config import Settings
from shared.utils.enums import UserRole
from .storage.base import Storage

logger = logging.getLogger(__name__)

SEED_USERS = [
    ("nadia", UserRole.SUPER_ADMIN),
    ("ahmed", UserRole.ADMIN),
    ("yahia", UserRole.ADMIN),
]

SEED_ACTIVITIES = [
    {
        "name": "Hot Air Balloon Ride Marrakech",
        "description": "Experience breathtaking sunrise views over Marrakech and the Atlas Mountains "
                       "from a hot air balloon. Includes hotel pickup, traditional Berber breakfast, "
                       "and flight certificate.",
        "price": "1100",
        "currency": "MAD",
        "image": "/attached_assets/hot-air-balloon-1.jpg",
        "photos": [
            "/attached_assets/hot-air-balloon-1.jpg",
            "/attached_assets/hot-air-balloon-2.jpg",
            "/attached_assets/hot-air-balloon-3.jpg",
        ],
        "category": "Adventure",
        "is_active": True,
        "getyourguide_price": 1400,
        "availability": "Daily at sunrise",
        "duration": "4 hours",
    },
    {
        "name": "Agafay Desert Combo Experience",
        "description": "Full-day desert adventure combining camel riding, quad biking, and "
                       "traditional dinner under the stars in the Agafay Desert near Marrakech.",
        "price": "450",
        "currency": "MAD",
        "image": "/attached_assets/agafay-pack-1.jpeg",
        "photos": [
            "/attached_assets/agafay-pack-1.jpeg",
            "/attached_assets/agafay-pack-2.jpeg",
            "/attached_assets/agafay-pack-3.jpeg",
        ],
        "category": "Desert",
        "is_active": True,
        "getyourguide_price": 600,
        "availability": "Daily",
        "duration": "8 hours",
    },
    {
        "name": "Essaouira Day Trip",
        "description": "Discover the coastal charm of Essaouira, the \"Windy City\" with its "
                       "Portuguese ramparts, blue fishing boats, and authentic seafood.",
        "price": "200",
        "currency": "MAD",
        "image": "/attached_assets/essaouira-1.jpg",
        "photos": [
            "/attached_assets/essaouira-1.jpg",
            "/attached_assets/essaouira-2.jpg",
        ],
        "category": "Cultural",
        "is_active": True,
        "getyourguide_price": 300,
        "availability": "Daily",
        "duration": "10 hours",
    },
    {
        "name": "Ouzoud Waterfalls Day Trip",
        "description": "Visit Morocco's highest waterfalls, swim in natural pools, enjoy lunch by "
                       "the cascades, and spot Barbary apes in their natural habitat.",
        "price": "200",
        "currency": "MAD",
        "image": "/attached_assets/ouzoud-waterfalls-1.jpg",
        "photos": [
            "/attached_assets/ouzoud-waterfalls-1.jpg",
            "/attached_assets/ouzoud-waterfalls-2.jpg",
        ],
        "category": "Nature",
        "is_active": True,
        "getyourguide_price": 280,
        "availability": "Daily",
    },
    {
        "name": "Ourika Valley Day Trip",
        "description": "Explore traditional Berber villages, terraced fields, and stunning Atlas "
                       "Mountain landscapes in the beautiful Ourika Valley.",
        "price": "150",
        "currency": "MAD",
        "image": "/attached_assets/ourika-valley-1.jpeg",
        "photos": [
            "/attached_assets/ourika-valley-1.jpeg",
            "/attached_assets/ourika-valley-2.jpg",
        ],
        "category": "Cultural",
        "is_active": True,
        "getyourguide_price": 220,
        "availability": "Daily",
        "duration": "6 hours",
    },
]


def seed_users(storage: Storage, settings: Settings):
    default_password = settings.default_seed_password
    passwords = {
        UserRole.SUPER_ADMIN: settings.SUPERADMIN_PASSWORD or default_password,
        UserRole.ADMIN: settings.ADMIN_PASSWORD or default_password,
    }
    if not (settings.SUPERADMIN_PASSWORD and settings.ADMIN_PASSWORD):
        logger.warning("Seeding staff accounts with the default password. "
                       "Set ADMIN_PASSWORD and SUPERADMIN_PASSWORD for production!")

    for username, role in SEED_USERS:
        if storage.get_user_by_username(username):
            continue
        storage.create_user(
            username, hash_password(passwords[role], settings.BCRYPT_ROUNDS), role.value)
        logger.info("Created %s account %s", role.value, username)


def seed_activities(storage: Storage):
    if storage.list_activities(include_inactive=True):
        return
    for activity in SEED_ACTIVITIES:
        storage.create_activity(dict(activity))
    logger.info("Seeded %s activities", len(SEED_ACTIVITIES))


def seed_initial_data(storage: Storage, settings: Settings):
    seed_users(storage, settings)
    seed_activities(storage)
