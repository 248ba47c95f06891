import time
from typing import Optional, Tuple

import requests
from requests import Session
from requests.exceptions import ConnectionError, RequestException, Timeout

from infrastructure.telemetry import get_tracer


class HTTPClientAdapter:
    """Adapter for fetching pages with telemetry and retries."""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        base_wait_time: int = 2,
        user_agent: str = "PageCleaner/1.0",
        verify_ssl: bool = True,
        session: Optional[Session] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_wait_time = base_wait_time
        self.user_agent = user_agent
        self.verify_ssl = verify_ssl
        self.session = session if session is not None else requests.Session()
        self.headers = {"User-Agent": user_agent}

    def _wait(self, attempt: int) -> None:
        wait_time = 0 if self.base_wait_time == 0 else self.base_wait_time**attempt
        time.sleep(wait_time)

    def get(self, url: str) -> Tuple[str, int]:
        """
        Perform HTTP GET request and return the page body.

        Returns:
            Tuple of (content, status_code)
        """
        with get_tracer().start_as_current_span("http.get") as span:
            span.set_attribute("url", url)

            for attempt in range(self.max_retries + 1):
                try:
                    response = self.session.get(
                        url,
                        timeout=self.timeout,
                        headers=self.headers,
                        verify=self.verify_ssl,
                    )
                    content = response.text
                    status_code = response.status_code

                    span.set_attributes(
                        {
                            "status_code": status_code,
                            "content_length": len(content),
                            "attempts": attempt + 1,
                        }
                    )
                    return (content, status_code)
                except (RequestException, ConnectionError, Timeout) as e:
                    if attempt < self.max_retries:
                        self._wait(attempt)
                        continue
                    span.set_attributes({"error": str(e), "attempts": attempt + 1})
                    raise
        # Unreachable in normal flow; added for type checking
        return ("", 0)
