# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - record_store.py: Record store interface and the in-memory backend
# - supabase_client.py: Supabase-backed record store (imported on demand)
# - gemini_client.py: Thin async wrapper around the google-genai SDK
# - utils.py: Base64 and data URI helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.record_store import InMemoryRecordStore, RecordStore
from lib.gemini_client import GeminiClient
from lib.utils import decode_image_base64, strip_data_url_prefix, to_data_uri

__all__ = [
    # Record store
    "RecordStore",
    "InMemoryRecordStore",
    # Gemini
    "GeminiClient",
    # Utils
    "decode_image_base64",
    "strip_data_url_prefix",
    "to_data_uri",
]
