"""Domain enumerations and wire constants for the transactional email API."""

from enum import StrEnum

DEFAULT_ENDPOINT_BASE = "https://api.scaleway.com/transactional-email/v1alpha1/regions/"

# Upper bound on subject length accepted by the service
SUBJECT_MAX_LENGTH = 255


class Region(StrEnum):
    """Regions where the transactional email API is deployed."""

    FR_PAR = "fr-par"
    NL_AMS = "nl-ams"


DEFAULT_REGION = Region.NL_AMS


class EmailStatus(StrEnum):
    """Delivery status reported for each accepted recipient."""

    UNKNOWN = "unknown"
    NEW = "new"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"
    CANCELED = "canceled"

