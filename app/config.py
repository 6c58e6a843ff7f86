import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Project-management REST backend
TASK_API_URL = os.getenv("TASK_API_URL", "http://localhost:5000/api")
TASK_API_TOKEN = os.getenv("TASK_API_TOKEN")
TASK_API_TIMEOUT = float(os.getenv("TASK_API_TIMEOUT", "10"))  # seconds
TASK_API_PAGE_SIZE = int(os.getenv("TASK_API_PAGE_SIZE", "50"))  # server-side page size used while draining

# Rows per bucket page in the task list view
TASK_VIEW_PAGE_SIZE = 5

# Open task views idle longer than this are dropped (0 disables expiry)
TASK_VIEW_TTL_SECONDS = float(os.getenv("TASK_VIEW_TTL_SECONDS", "1800"))

# CORS (comma-separated origins)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
