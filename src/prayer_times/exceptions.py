class PrayerTimesError(Exception):
    """Base class for prayer_times errors."""


class ConfigurationError(PrayerTimesError):
    """Calculator settings could not be interpreted."""
