"""CloudSM Client - SOAP client for the CloudSM service desk web services."""

__version__ = "0.1.0"
