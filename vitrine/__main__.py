"""
Run a local development server:

    python -m vitrine

Visit:
    http://localhost:5000/api/projects  - Project listing
    http://localhost:5000/health        - Health check
"""

import logging

from vitrine import create_app
from vitrine.core.config import Config

logging.basicConfig(level=logging.INFO)

app = create_app()


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Vitrine")
    print("=" * 60)
    print(f"Projects API:    http://localhost:{Config.PORT}/api/projects")
    print(f"Health:          http://localhost:{Config.PORT}/health")
    if not app.config.get('ADMIN_PASSWORD'):
        print("ADMIN_PASSWORD is not set - admin routes will reject every request")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.PORT, debug=True)
