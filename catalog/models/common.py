"""
Common Pydantic models for the Catalog Service API
"""
from pydantic import BaseModel
from datetime import datetime

class HealthResponse(BaseModel):
    """
    Health check response model
    """
    status: str
    message: str
    timestamp: datetime
    version: str

class ErrorItem(BaseModel):
    type: str
    message: str
    path: str

class ErrorResponse(BaseModel):
    """
    Error envelope rendered by the app-level exception handlers
    """
    errors: list[ErrorItem]

class FieldErrorItem(BaseModel):
    field: str
    message: str

class ValidationErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: list[FieldErrorItem]
