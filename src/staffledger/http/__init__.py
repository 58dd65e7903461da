"""StaffLedger HTTP utilities.

Example:
    >>> from staffledger.http import HttpClient
    >>>
    >>> async with HttpClient(base_url="http://localhost:8082", timeout=5.0) as client:
    ...     pension_id = await client.get_text("/Alice")
"""

from staffledger.http.client import HttpClient, HttpClientError

__all__ = [
    "HttpClient",
    "HttpClientError",
]
