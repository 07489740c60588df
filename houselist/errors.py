class HouseListError(Exception):
    """Base exception for all houselist errors"""
    pass


class StorageUnavailable(HouseListError):
    """Durable key/value storage could not be read or written"""
    pass


class LoadError(HouseListError):
    """
    The simulated record load failed.
    Surfaced as a LoadOutcome by RecordLoader, never as a crash.
    """
    pass
