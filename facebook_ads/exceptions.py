"""FacebookAds — Graph API Errors."""

from typing import Any, Dict


class FacebookAdsError(Exception):
    """Raised when the Graph API returns an error or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        error_code: int = 0,
        error_subcode: int = 0,
        error_type: str = "",
        fbtrace_id: str = "",
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.error_subcode = error_subcode
        self.error_type = error_type
        self.fbtrace_id = fbtrace_id
        super().__init__(message)

    @classmethod
    def from_response(cls, status_code: int, body: Dict[str, Any]) -> "FacebookAdsError":
        """Build from Graph's ``{"error": {...}}`` envelope."""
        error = body.get("error") or {}
        if not isinstance(error, dict):
            error = {"message": str(error)}
        return cls(
            error.get("message", f"Graph API error (HTTP {status_code})"),
            status_code=status_code,
            error_code=error.get("code", 0),
            error_subcode=error.get("error_subcode", 0),
            error_type=error.get("type", ""),
            fbtrace_id=error.get("fbtrace_id", ""),
        )

    @property
    def is_not_found(self) -> bool:
        # Graph reports unknown ids as OAuthException code 100 / subcode 33
        return self.status_code == 404 or (
            self.error_code == 100 and self.error_subcode == 33
        )
