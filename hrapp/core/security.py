# hrapp/core/security.py
import hmac

from fastapi import Depends, HTTPException, Security, status
from fastapi.security.api_key import APIKeyHeader
from hrapp.core.config import get_settings, Settings

admin_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

def require_admin_key(
    api_key: str | None = Security(admin_key_header),
    settings: Settings = Depends(get_settings),
) -> bool:
    """Guard for operator endpoints (system info)."""
    if not api_key or not hmac.compare_digest(api_key, settings.API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return True
