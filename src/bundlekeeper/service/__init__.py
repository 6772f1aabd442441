"""Service layer for bundlekeeper.

Exports SanitizerService, which sanitizes sensitive parameters and outputs
into the secret store and resolves them back on demand.
"""

from bundlekeeper.service.sanitizer_service import SanitizerService, encode_output

__all__ = [
    "SanitizerService",
    "encode_output",
]
