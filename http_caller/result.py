"""
Uniform result returned by every HttpCaller verb
"""

from typing import Optional, Dict, Any


class CallResult:
    def __init__(self, body: Optional[str] = None, response_code: int = 0):
        """Hold the response body (None if the transport failed) and the HTTP status code (0 if none)."""
        self.body = body
        self.response_code = response_code

    @property
    def ok(self) -> bool:
        """Check if a 2xx response was received."""
        return 200 <= self.response_code < 300

    def as_dict(self) -> Dict[str, Any]:
        return {
            'body': self.body,
            'responseCode': self.response_code,
        }

    def __eq__(self, other):
        if not isinstance(other, CallResult):
            return NotImplemented
        return self.body == other.body and self.response_code == other.response_code

    def __repr__(self) -> str:
        return f"CallResult(response_code={self.response_code}, body={self.body!r})"
