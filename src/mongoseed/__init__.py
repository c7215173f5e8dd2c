"""mongoseed — seed MongoDB test containers from JSON fixture trees."""

__version__ = "0.1.0"
