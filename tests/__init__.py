# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Backdrop API:
# - test_record_store.py: In-memory record store contract
# - test_project_service.py / test_image_service.py: Ownership-scoped persistence
# - test_background_editor.py / test_variation_batch.py / test_image_analyst.py:
#   Gemini orchestration (with a mocked SDK client)
# - test_routes.py: HTTP surface through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
