#wsgi.py
"""
wsgi.py – Fit Lab Scheduling Backend Entry Point
────────────────────────────────────────────
Used by Gunicorn to launch the Flask app.

Expected project structure:
 ├── wsgi.py
 └── fitlab/
     ├── __init__.py  ← contains create_app()
     ├── schedule_router.py
     ├── scheduling_rules.py
     └── ...
────────────────────────────────────────────
"""

import os
from fitlab import create_app

# Flask application factory
app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 10000))
    print(f"🚀 Starting Fit Lab Scheduling Backend on port {port}")
    app.run(host="0.0.0.0", port=port)
