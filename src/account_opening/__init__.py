"""Account opening microservices: account, customer, document, notification."""

import os

__version__ = "0.1.0"

SERVICE_NAMES = ("account", "customer", "document", "notification")

API_VERSION = os.environ.get("AOS_API_VERSION") or __version__
