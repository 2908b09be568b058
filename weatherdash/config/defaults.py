"""Built-in seed locations."""

from weatherdash.config.schema import LocationConfig

_PEXELS = "https://images.pexels.com/photos/{id}/pexels-photo-{id}.jpeg?auto=compress&cs=tinysrgb&w=800"

DEFAULT_LOCATIONS: list[LocationConfig] = [
    LocationConfig(
        id="tokyo",
        name="Tokyo",
        country="Japan",
        description="The bustling metropolis where tradition meets innovation",
        image=_PEXELS.format(id=2506923),
        lat=35.6762,
        lon=139.6503,
        featured=True,
    ),
    LocationConfig(
        id="new-york",
        name="New York",
        country="United States",
        description="The city that never sleeps, heart of global finance",
        image=_PEXELS.format(id=466685),
        lat=40.7128,
        lon=-74.0060,
        featured=True,
    ),
    LocationConfig(
        id="london",
        name="London",
        country="United Kingdom",
        description="Historic capital bridging centuries of culture and commerce",
        image=_PEXELS.format(id=460672),
        lat=51.5074,
        lon=-0.1278,
        featured=True,
    ),
    LocationConfig(
        id="singapore",
        name="Singapore",
        country="Singapore",
        description="The garden city-state, a hub of innovation and sustainability",
        image=_PEXELS.format(id=2265876),
        lat=1.3521,
        lon=103.8198,
    ),
    LocationConfig(
        id="dubai",
        name="Dubai",
        country="United Arab Emirates",
        description="Futuristic oasis where desert meets cutting-edge architecture",
        image=_PEXELS.format(id=1470502),
        lat=25.2048,
        lon=55.2708,
    ),
    LocationConfig(
        id="sydney",
        name="Sydney",
        country="Australia",
        description="Harbor city combining natural beauty with urban sophistication",
        image=_PEXELS.format(id=783682),
        lat=-33.8688,
        lon=151.2093,
    ),
    LocationConfig(
        id="paris",
        name="Paris",
        country="France",
        description="The city of light, where art and elegance converge",
        image=_PEXELS.format(id=338515),
        lat=48.8566,
        lon=2.3522,
    ),
    LocationConfig(
        id="san-francisco",
        name="San Francisco",
        country="United States",
        description="Tech capital by the bay, where innovation shapes the future",
        image=_PEXELS.format(id=208745),
        lat=37.7749,
        lon=-122.4194,
    ),
]
