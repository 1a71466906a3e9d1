"""Utility functions for the polljoy connector."""

from .fingerprint import device_class, device_fingerprint, find_client_ip, os_token

__all__ = ["device_class", "device_fingerprint", "find_client_ip", "os_token"]
