# =============================================================================
# app/__main__.py - Run the gateway with uvicorn
# =============================================================================
# Usage:
#   python -m app
# =============================================================================

from app.main import main

if __name__ == "__main__":
    main()
