"""Enums shared across the domain layer."""

from enum import Enum


class ExtractionFailure(str, Enum):
    TRANSPORT = "transport"          # no response from the server
    HTTP_STATUS = "http_status"      # server answered with a non-2xx status
    FILE_UNREADABLE = "file_unreadable"
