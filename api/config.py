import os

SERVICE_NAME = "combined-seo-automation-service"
SERVICE_TITLE = "SEO Automation Service"
SERVICE_VERSION = "2.0.0"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# JSON bodies above this are rejected before parsing (PDF jobs carry whole documents)
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024)))
