#!/usr/bin/env python3
"""
Market Dashboard - run script
Starts the chart service with uvicorn
"""
import os
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))


def main():
    """Start the dashboard chart service"""
    host = os.environ.get("DASHBOARD_HOST", "0.0.0.0")
    port = int(os.environ.get("DASHBOARD_PORT", "8020"))

    print("Market Dashboard - Starting chart service")
    print("=" * 40)
    print(f"Listening on http://{host}:{port}")
    print("Press Ctrl+C to stop")
    print("=" * 40)

    try:
        import uvicorn
        uvicorn.run(
            "market_dashboard.app:app",
            host=host,
            port=port,
            log_level="info"
        )
    except ImportError as e:
        print(f"✗ Import error: {e}")
        print("Install the project first: pip install -e .")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
