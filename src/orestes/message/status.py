"""Status codes used by the Orestes protocol."""

from enum import IntEnum


class StatusCode(IntEnum):
    NOT_MODIFIED = 304
    BAD_CREDENTIALS = 460
    BUCKET_NOT_FOUND = 461
    INVALID_PERMISSION_MODIFICATION = 462
    INVALID_TYPE_VALUE = 463
    OBJECT_NOT_FOUND = 404
    OBJECT_OUT_OF_DATE = 412
    PERMISSION_DENIED = 466
    QUERY_DISPOSED = 467
    QUERY_NOT_SUPPORTED = 468
    SCHEMA_NOT_COMPATIBLE = 469
    SCHEMA_STILL_EXISTS = 470
    SYNTAX_ERROR = 471
    TRANSACTION_INACTIVE = 472
    TYPE_ALREADY_EXISTS = 473
    TYPE_STILL_REFERENCED = 474
    SCRIPT_ABORTION = 475
