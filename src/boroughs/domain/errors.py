class BoroughsError(Exception):
    """Base class for failures that are not part of normal play."""


class SaveNotFoundError(BoroughsError):
    pass


class SaveCorruptedError(BoroughsError):
    pass


class SaveStorageError(BoroughsError):
    pass
