import os

# Application Metadata
PROJECT_NAME = "Bizup Operations Dashboard"
VERSION = "1.0.0"

# Upstream REST API the dashboard talks to
API_BASE_URL = os.getenv("BIZUP_API_BASE_URL", "http://localhost:8000/api/v1")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", 10)) # Seconds before a single call is abandoned

# Data loader / tab behaviour
REFRESH_INTERVAL = float(os.getenv("REFRESH_INTERVAL", 30)) # Auto-refresh period in seconds
RESTOCK_QUANTITY = int(os.getenv("RESTOCK_QUANTITY", 50)) # Units added back by a single restock
ALLOWED_UPLOAD_EXTENSIONS = (".csv", ".xlsx", ".xls")
DEFAULT_TAB = os.getenv("DEFAULT_TAB", "inventory")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
