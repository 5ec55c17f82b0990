"""Errors raised while submitting a Droplet create request"""

from __future__ import annotations


class SubmissionError(Exception):
    """Base class for every failure of a form submission"""


class ConfigurationError(SubmissionError):
    """The API credential is missing from the environment"""


class RequestError(SubmissionError):
    """DigitalOcean rejected the create request"""


class ReadinessError(SubmissionError):
    """The Droplet never reached the active state"""


class DropletLookupError(SubmissionError, LookupError):
    """Droplet details or one of its addresses could not be found"""
