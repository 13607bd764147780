# eSocial Relay - mTLS Transport
"""
mTLS HTTP transport for SOAP calls to the eSocial web services.

Implements mutual TLS authentication using a per-call client certificate.
Server certificates are always verified against the default trust store.
"""

import asyncio
import ssl
import tempfile
from pathlib import Path
from typing import Callable, Optional

import httpx
from cryptography import x509

from ..config import settings
from ..exceptions import RelayConnectionError, RelayTimeout, RemoteError
from ..log import get_logger
from ..models import TransportResponse

logger = get_logger(__name__)

HTTPS_PORT = 443
SOAP_CONTENT_TYPE = "application/soap+xml;charset=UTF-8"
MAX_ERROR_BODY_CHARS = 500

SSLContextFactory = Callable[[bytes, bytes], ssl.SSLContext]


def _no_password() -> bytes:
    # Encrypted keys fail to load instead of prompting on the terminal
    return b""


def build_ssl_context(cert_pem: bytes, key_pem: bytes) -> ssl.SSLContext:
    """
    Create SSL context with client certificate authentication.

    The PEM material only touches disk inside a private temporary directory
    for the duration of load_cert_chain.
    """
    ctx = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)

    # Security settings
    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2

    with tempfile.TemporaryDirectory(prefix="esocial-relay-") as tmp:
        cert_path = Path(tmp) / "client.crt"
        key_path = Path(tmp) / "client.key"
        cert_path.write_bytes(cert_pem)
        key_path.touch(mode=0o600)
        key_path.write_bytes(key_pem)

        try:
            ctx.load_cert_chain(
                certfile=str(cert_path),
                keyfile=str(key_path),
                password=_no_password,
            )
        except (ssl.SSLError, ValueError) as e:
            raise RelayConnectionError(
                f"Erro de conexão com eSocial: certificado ou chave inválidos ({e})"
            )

    return ctx


def describe_certificate(cert_pem: bytes) -> dict:
    """Non-secret identifying fields of a client certificate, for logging."""
    try:
        cert = x509.load_pem_x509_certificate(cert_pem)
    except ValueError:
        return {"certificate": "unparseable"}

    return {
        "cert_subject": cert.subject.rfc4514_string(),
        "cert_serial": format(cert.serial_number, "x"),
    }


class MTLSTransport:
    """
    Single-attempt mTLS POST to an eSocial endpoint.

    A fresh client is built for every call so certificate material never
    outlives the request. The whole request/response cycle is bounded by
    one ceiling; when it expires the in-flight request is cancelled and
    the client's connections are closed.
    """

    def __init__(
        self,
        timeout_seconds: float = settings.REQUEST_TIMEOUT_SECONDS,
        ssl_context_factory: SSLContextFactory = build_ssl_context,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._ssl_context_factory = ssl_context_factory
        self._transport = transport

    @property
    def timeout_message(self) -> str:
        return f"Timeout na conexão com eSocial ({self.timeout_seconds:g}s)"

    async def post(
        self,
        hostname: str,
        path: str,
        body: str,
        soap_action: str,
        cert_pem: bytes,
        key_pem: bytes,
    ) -> TransportResponse:
        """
        Send a SOAP envelope and return the buffered 2xx response.

        Raises:
            RelayConnectionError: DNS, TLS or socket level failure
            RemoteError: eSocial answered with a non-2xx status
            RelayTimeout: the cycle exceeded timeout_seconds
        """
        ssl_context = self._ssl_context_factory(cert_pem, key_pem)

        content = body.encode("utf-8")
        headers = {
            "Content-Type": SOAP_CONTENT_TYPE,
            "Content-Length": str(len(content)),
            "SOAPAction": soap_action,
        }
        url = f"https://{hostname}:{HTTPS_PORT}{path}"

        try:
            return await asyncio.wait_for(
                self._exchange(ssl_context, url, content, headers),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("esocial_request_timeout", url=url, timeout=self.timeout_seconds)
            raise RelayTimeout(self.timeout_message)

    async def _exchange(
        self,
        ssl_context: ssl.SSLContext,
        url: str,
        content: bytes,
        headers: dict,
    ) -> TransportResponse:
        async with httpx.AsyncClient(
            verify=ssl_context,
            timeout=httpx.Timeout(self.timeout_seconds),
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(url, content=content, headers=headers)
            except httpx.TimeoutException:
                raise RelayTimeout(self.timeout_message)
            except httpx.TransportError as e:
                detail = str(e) or e.__class__.__name__
                logger.warning("esocial_connection_error", url=url, error=detail)
                raise RelayConnectionError(f"Erro de conexão com eSocial: {detail}")
            except httpx.HTTPError as e:
                # Body decoding and protocol errors outside the transport layer
                detail = str(e) or e.__class__.__name__
                logger.warning("esocial_response_error", url=url, error=detail)
                raise RelayConnectionError(f"Erro de conexão com eSocial: {detail}")

        text = response.text
        if not 200 <= response.status_code < 300:
            raise RemoteError(
                f"eSocial retornou status {response.status_code}: {text[:MAX_ERROR_BODY_CHARS]}",
                status_code=response.status_code,
            )

        return TransportResponse(status_code=response.status_code, body=text)
