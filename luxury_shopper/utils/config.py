import os
from dotenv import load_dotenv

# Page-size ceiling of the Finding API
MAX_ENTRIES_PER_PAGE = 100

class Config:
    def __init__(self):
        # Load environment variables from .env file, overriding existing env vars
        load_dotenv(override=True)

        self.EBAY_APP_ID = os.getenv('EBAY_APP_ID')
        if not self.EBAY_APP_ID:
            raise ValueError("EBAY_APP_ID environment variable is not set")

        self.EBAY_FINDING_URL = os.getenv('EBAY_FINDING_URL', 'https://svcs.ebay.com/services/search/FindingService/v1')
        self.EBAY_SERVICE_VERSION = os.getenv('EBAY_SERVICE_VERSION', '1.0.0')

        self.NUM_OF_RESULTS = int(os.getenv('NUM_OF_RESULTS', '5'))
        self.REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '2'))
        self.MAX_REQUESTS_PER_MINUTE = int(os.getenv('MAX_REQUESTS_PER_MINUTE', '60'))

        # 0 keeps sessions until the process exits
        self.SESSION_TTL_SECONDS = float(os.getenv('SESSION_TTL_SECONDS', '0'))

        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the configuration values."""
        if not 1 <= self.NUM_OF_RESULTS <= MAX_ENTRIES_PER_PAGE:
            raise ValueError(f"NUM_OF_RESULTS must be between 1 and {MAX_ENTRIES_PER_PAGE}")

        if self.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be greater than 0")

        if self.MAX_REQUESTS_PER_MINUTE <= 0:
            raise ValueError("MAX_REQUESTS_PER_MINUTE must be greater than 0")

        if self.SESSION_TTL_SECONDS < 0:
            raise ValueError("SESSION_TTL_SECONDS must be non-negative")

        if not self.EBAY_FINDING_URL.startswith(('http://', 'https://')):
            raise ValueError("EBAY_FINDING_URL must be a valid URL starting with http:// or https://")
