import os

from dotenv import load_dotenv

load_dotenv()

# Listen to HTTP port
HOST = "0.0.0.0"
PORT = 80

GEOLOCATION_URL = os.getenv("GEOLOCATION_URL", "http://ipapi.co").rstrip("/")
GEOLOCATION_TIMEOUT = float(os.getenv("GEOLOCATION_TIMEOUT", 5.0))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
