"""
eSocial Relay - Exception Classes
Error taxonomy for relay calls. Every error is terminal for the call that raised it.
"""


class RelayError(Exception):
    """Base exception for all relay errors"""

    error_code = "RelayError"
    http_status = 500

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class ClientError(RelayError):
    """Raised for malformed input, before any network activity"""

    http_status = 400


class MissingCredentials(ClientError):
    """Raised when the certificate or private key is absent"""

    error_code = "MissingCredentials"


class InvalidEnvironment(ClientError):
    """Raised when the environment is not one of the known identifiers"""

    error_code = "InvalidEnvironment"


class MissingTaxpayerIdentifiers(ClientError):
    """Raised when tpInsc or nrInsc is absent"""

    error_code = "MissingTaxpayerIdentifiers"


class InvalidRequestBody(ClientError):
    """Raised when the HTTP body is not parseable JSON"""

    error_code = "InvalidRequestBody"


class UnknownEnvironment(RelayError):
    """Raised by the endpoint resolver for an environment outside the table"""

    error_code = "UnknownEnvironment"


class RelayConnectionError(RelayError):
    """Raised on DNS, TLS handshake, certificate or socket failures"""

    error_code = "ConnectionError"


class RemoteError(RelayError):
    """Raised when eSocial answers with a non-2xx status"""

    error_code = "RemoteError"

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class RelayTimeout(RelayError):
    """Raised when the request/response cycle exceeds the ceiling"""

    error_code = "Timeout"


class RelayInternalError(RelayError):
    """Unexpected failure inside the relay, reported without crashing the call"""

    error_code = "InternalError"
