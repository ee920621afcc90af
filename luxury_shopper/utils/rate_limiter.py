import time
import threading

from ..errors import RateLimitExceeded
from .logger import get_logger

class RateLimiter:
    def __init__(self, max_requests_per_minute: int):
        self.max_requests_per_minute = max_requests_per_minute
        self.request_times = []
        self._lock = threading.Lock()
        self.logger = get_logger(__name__)

    def wait(self, max_wait: float = 0) -> None:
        """Reserve a slot in the one-minute window, sleeping at most max_wait seconds.

        Raises:
            RateLimitExceeded: if the next free slot is further away than max_wait.
        """
        with self._lock:
            current_time = time.time()

            # Remove requests older than 1 minute
            self.request_times = [t for t in self.request_times if current_time - t < 60]

            wait_time = 0.0
            if len(self.request_times) >= self.max_requests_per_minute:
                wait_time = 60 - (current_time - self.request_times[0])
                if wait_time > max_wait:
                    self.logger.warning(f"Rate limit reached. Next slot in {wait_time:.2f} seconds")
                    raise RateLimitExceeded(f"Search rate limit reached, next slot in {wait_time:.2f}s")

            # Slot is recorded at the time the request will actually go out
            self.request_times.append(current_time + max(wait_time, 0))

        if wait_time > 0:
            self.logger.info(f"Rate limit reached. Waiting {wait_time:.2f} seconds...")
            time.sleep(wait_time)

    def reset(self) -> None:
        """Reset the request history."""
        with self._lock:
            self.request_times = []
