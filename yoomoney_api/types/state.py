"""State definitions, status codes and header constants shared across the SDK."""

from enum import Enum


class ShowcaseState(str, Enum):
    """States of a showcase wizard after its last operation"""
    HAS_NEXT_STEP = "has-next-step"      # Server returned another form step
    INVALID_PARAMS = "invalid-params"    # Server returned the same step with corrections
    COMPLETED = "completed"              # Final payment parameters received
    NOT_MODIFIED = "not-modified"        # Cached showcase is still current
    UNKNOWN = "unknown"                  # No submission performed yet


class PaymentProcessState(str, Enum):
    """States of a payment process.

    Declaration order is significant: the position of a member is its
    persisted flags value.
    """
    CREATED = "created"
    STARTED = "started"
    PROCESSING = "processing"
    COMPLETED = "completed"

    @property
    def ordinal(self) -> int:
        return list(PaymentProcessState).index(self)


class RequestStatus(str, Enum):
    """Outcome of a request-payment call"""
    SUCCESS = "success"
    REFUSED = "refused"
    HOLD_FOR_PICKUP = "hold_for_pickup"


class ProcessStatus(str, Enum):
    """Outcome of a process-payment call"""
    SUCCESS = "success"
    REFUSED = "refused"
    IN_PROGRESS = "in_progress"
    EXT_AUTH_REQUIRED = "ext_auth_required"
    HOLD_FOR_PICKUP = "hold_for_pickup"


class ResourceState(str, Enum):
    """Outcome of a conditional document fetch"""
    DOCUMENT = "document"
    NOT_MODIFIED = "not-modified"


class HttpHeaders:
    """Header names used by the SDK"""
    AUTHORIZATION = "Authorization"
    CONTENT_TYPE = "Content-Type"
    EXPIRES = "Expires"
    IF_MODIFIED_SINCE = "If-Modified-Since"
    LAST_MODIFIED = "Last-Modified"
    LOCATION = "Location"
    USER_AGENT = "User-Agent"


class MimeTypes:
    FORM_URLENCODED = "application/x-www-form-urlencoded"
    JSON = "application/json"
