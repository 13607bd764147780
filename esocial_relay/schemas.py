"""Pydantic schemas for the relay HTTP API."""
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RelayRequestBody(BaseModel):
    """
    Inbound relay payload.

    Fields accept any JSON value so that every malformed input reaches the
    ordered checks in esocial_relay.validator and gets its 400 classification.
    """
    model_config = ConfigDict(populate_by_name=True)

    action: Optional[Any] = None
    ambiente: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("ambiente", "environment")
    )
    certificatePem: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("certificatePem", "clientCertificatePem")
    )
    privateKeyPem: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("privateKeyPem", "clientPrivateKeyPem")
    )
    tpInsc: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("tpInsc", "taxpayerRegistrationType")
    )
    nrInsc: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("nrInsc", "taxpayerRegistrationNumber")
    )
    perApur: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("perApur", "reportingPeriod")
    )
    tpEvento: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("tpEvento", "eventType")
    )


class RelayResponse(BaseModel):
    """Successful relay outcome."""
    success: bool = True
    body: str
    statusCode: int
    elapsedMillis: int
    environment: Optional[str] = None
    period: Optional[str] = None


class ErrorResponse(BaseModel):
    """Failed relay outcome."""
    success: bool = False
    error: str
    errorCode: str
    elapsedMillis: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(default="ok")
    service: str = Field(default="esocial-relay")
    version: str
    timestamp: str
