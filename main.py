import os
import logging

from app.app import create_app

# Configure logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "DEBUG").upper())

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8080"))
    app.run(host="0.0.0.0", port=port)
