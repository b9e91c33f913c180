"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a slug is absent from (or expired in) the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a slug that is already taken.

    SlugAllocationError:
        Raised when no free slug could be allocated within the attempt bound.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    DeadlineExceededError:
        Raised when a caller-supplied deadline elapses before an operation completes.

Example:
    >>> from slugshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with slug 'abc12345' not found.")
    Traceback (most recent call last):
        ...
    slugshortener.dao.exceptions.ShortURLNotFoundError: Short URL with slug 'abc12345' not found.
"""

from slugshortener.exceptions import SlugShortenerError


class DAOError(SlugShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'


class SlugAllocationError(DAOError):
    """Exception raised when every slug allocation attempt collided with an existing record."""

    error_code = 'dao:slug_allocation_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class DeadlineExceededError(DataStoreError):
    """Exception raised when the caller's deadline elapsed before the data store answered."""

    error_code = 'dao:deadline_exceeded_error'
