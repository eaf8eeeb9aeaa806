from __future__ import annotations

# Single source of truth for static constants and versions.

DEFAULT_API_VERSION = "2024-02-29-preview"
DEFAULT_MODEL_ID = "prebuilt-layout"

# Scope requested for Azure AD tokens when no API key is configured.
COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"

# Upload limits.
MAX_UPLOAD_BYTES = 50 * 1024 * 1024
MIN_UPLOAD_BYTES = 1024
MAX_FILENAME_LENGTH = 255
PDF_MAGIC = b"%PDF"

# Render scale bounds accepted by the overlay and image endpoints.
MIN_RENDER_SCALE = 0.1
MAX_RENDER_SCALE = 5.0

ANALYSIS_WORKERS = 4
