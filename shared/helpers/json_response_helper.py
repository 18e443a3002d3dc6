from typing import Dict, Optional

from fastapi import HTTPException


def error_response(message: str, http_status: int = 400, error: Optional[str] = None,
                   headers: Optional[Dict[str, str]] = None):
    detail = {"message": message}
    if error:
        detail["error"] = error
    raise HTTPException(status_code=http_status, detail=detail, headers=headers)


def not_found(entity: str):
    error_response(message=f"{entity} not found", http_status=404)
